"""
utils/text.py

- 과목 이름 비교, 상태 필터, 중복 검사 등 모든 비교 지점에서 공통으로 쓰는 정규화 함수
"""

from typing import Optional

PASSED = "Passed"
FAILED = "Failed"
STATUSES = (PASSED, FAILED)


def normalize_key(value) -> str:
    """앞뒤 공백 제거 + 대소문자 무시 비교용 키"""
    if value is None:
        return ""
    return str(value).strip().casefold()


def same_name(a, b) -> bool:
    return normalize_key(a) == normalize_key(b)


def normalize_status(value) -> Optional[str]:
    """
    "passed" / " FAILED " → 표준 값("Passed"/"Failed")
    - 두 표준 값 이외에는 None
    """
    wanted = normalize_key(value)
    for status in STATUSES:
        if status.casefold() == wanted:
            return status
    return None
