"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) 에러 코드/응답 표준: ErrorCode, ErrorDetail, ErrorResponse
  2) 서비스 결과 래퍼: ServiceResult[T], success(), failure()
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) 에러 응답 표준
# =========================================================

class ErrorCode(str, Enum):
    MISSING_FIELD = "MISSING_FIELD"
    UNKNOWN_COURSE = "UNKNOWN_COURSE"
    UNKNOWN_COURSE_TYPE = "UNKNOWN_COURSE_TYPE"
    INVALID_COMPONENT_GRADE = "INVALID_COMPONENT_GRADE"
    MISSING_COMPONENT_GRADE = "MISSING_COMPONENT_GRADE"
    DUPLICATE_COURSE_GRADE = "DUPLICATE_COURSE_GRADE"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    INVALID_STATUS_FILTER = "INVALID_STATUS_FILTER"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """에러 코드/메시지를 담는 최소 단위"""
    code: ErrorCode = Field(..., description="에러 식별 코드 (예: STUDENT_NOT_FOUND)")
    message: str = Field(..., description="사람이 읽을 수 있는 에러 메시지")


class ErrorResponse(BaseModel):
    """
    라우터/전역 에러 핸들러에서 내려주는 표준 에러 응답
    - middlewares/error_handler.py에서 이 스키마로 리턴
    """
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시각 (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) 서비스 결과 래퍼
# =========================================================

T = TypeVar("T")

class ServiceResult(BaseModel, Generic[T]):
    """
    계산기/저장소/서비스 계층의 반환 값
    - ok=True  → data 사용
    - ok=False → error 사용 (호출 측에서 ok를 확인해 그대로 전달)
    """
    ok: bool
    data: Optional[T] = None
    error: Optional[ErrorDetail] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)


def success(data: Any = None) -> ServiceResult:
    return ServiceResult(ok=True, data=data)


def failure(code: ErrorCode, message: str) -> ServiceResult:
    return ServiceResult(ok=False, error=ErrorDetail(code=code, message=message))
