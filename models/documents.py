from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from database.db import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Document(Base):
    __tablename__ = "documents"  # 키-값 문서 테이블 (키 하나에 JSON 문서 하나)

    key = Column(String(255), primary_key=True)                         # 문서 키 (예: grade_system:data)
    value = Column(Text, nullable=False)                                # JSON 문자열 전체
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)  # 마지막 저장 시각
