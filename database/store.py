"""
database/store.py

- 키 하나에 JSON 문서 하나를 보관하는 저장소 어댑터
- 백엔드: Redis(기본) / SQL(SQLAlchemy documents 테이블)
- 백엔드 오류는 모두 StorageUnavailable 로 감싸서 올림 (재시도 없음)
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

import redis
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import Settings
from database.db import Base, SessionLocal, engine
from models.documents import Document

logger = logging.getLogger(__name__)


class StorageUnavailable(Exception):
    """저장소 읽기/쓰기 실패"""


class DocumentStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]: ...
    @abstractmethod
    def set(self, key: str, text: str) -> None: ...


# ==========================================================
# [1] Redis
# ==========================================================
class RedisDocumentStore(DocumentStore):
    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: Optional[float] = None) -> "RedisDocumentStore":
        client = redis.Redis.from_url(url, decode_responses=True, socket_timeout=socket_timeout)
        return cls(client)

    def get(self, key: str) -> Optional[str]:
        try:
            raw = self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis GET failed: key={key} error={e}")
            raise StorageUnavailable(str(e)) from e
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return raw

    def set(self, key: str, text: str) -> None:
        try:
            self.client.set(key, text)
        except redis.RedisError as e:
            logger.error(f"Redis SET failed: key={key} error={e}")
            raise StorageUnavailable(str(e)) from e


# ==========================================================
# [2] SQL (SQLAlchemy)
# ==========================================================
class SqlDocumentStore(DocumentStore):
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            row = db.get(Document, key)
            return row.value if row else None
        except SQLAlchemyError as e:
            logger.error(f"SQL GET failed: key={key} error={e}")
            raise StorageUnavailable(str(e)) from e
        finally:
            db.close()

    def set(self, key: str, text: str) -> None:
        db = self.session_factory()
        try:
            db.merge(Document(key=key, value=text))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"SQL SET failed: key={key} error={e}")
            raise StorageUnavailable(str(e)) from e
        finally:
            db.close()


# ==========================================================
# [3] 설정 기반 생성
# ==========================================================
def build_store(settings: Settings) -> DocumentStore:
    if settings.STORE_BACKEND == "sql":
        Base.metadata.create_all(bind=engine)
        logger.info("Using SQL document store")
        return SqlDocumentStore(SessionLocal)

    logger.info("Using Redis document store")
    return RedisDocumentStore.from_url(settings.REDIS_URL, socket_timeout=settings.REDIS_SOCKET_TIMEOUT)
