"""
config/settings.py

- .env에 정의한 환경변수를 읽어 애플리케이션 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- 저장소는 Redis(기본) 또는 SQL(SQLAlchemy) 중 하나를 STORE_BACKEND로 선택합니다.
  어느 쪽이든 학생 데이터 전체가 DOCUMENT_KEY 아래 JSON 문서 하나로 저장됩니다.
"""

from typing import List, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "Grade System API"
    APP_DESCRIPTION: str = "학생 성적 계산/관리 백엔드 API"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # =========================
    # CORS
    # =========================
    # 콤마(,)로 구분된 문자열 → List[str] 로 파싱
    CORS_ORIGINS: List[str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            # "a,b , c" → ["a","b","c"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # =========================
    # Document Store
    # =========================
    STORE_BACKEND: Literal["redis", "sql"] = "redis"
    DOCUMENT_KEY: str = "grade_system:data"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_SOCKET_TIMEOUT: float = 5.0

    # SQL (STORE_BACKEND=sql 일 때만 사용)
    DB_URL: str = "sqlite:///./grade_system.db"

    # =========================
    # Logging
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,          # 환경변수 대소문자 비구분
        extra="ignore",                # 정의되지 않은 키는 무시
    )


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
