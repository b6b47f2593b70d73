"""
services/grade_calculator.py

- 과목 가중치에 따라 최종 점수를 계산하는 순수 함수 모음
- 최종 점수 = Σ(항목 점수 × 가중치 / 100)
- 합격 기준: 60점 이상 → "Passed"
"""

import math
from typing import Any, Mapping, Optional

from config.courses import Course
from schemas.common import ErrorCode, ServiceResult, failure, success
from utils.text import FAILED, PASSED

PASS_THRESHOLD = 60.0


def parse_component_value(value: Any) -> Optional[float]:
    """
    숫자 또는 숫자 문자열 → float
    - 비어 있거나 숫자가 아니거나 NaN/inf 이면 None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def calculate_final_grade(course: Course, component_inputs: Mapping[str, Any]) -> ServiceResult:
    """
    과목 정의 순서대로 항목을 검증하고 가중 합계를 계산
    - 첫 번째로 잘못된 항목의 이름을 담아 INVALID_COMPONENT_GRADE 반환
    """
    final_grade = 0.0

    for component, weight in course.components.items():
        value = parse_component_value(component_inputs.get(component))
        if value is None or value < 0 or value > 100:
            return failure(
                ErrorCode.INVALID_COMPONENT_GRADE,
                f"{component} grade must be between 0 and 100",
            )
        final_grade += value * weight / 100

    return success(final_grade)


def format_grade(final_grade: float) -> str:
    return f"{final_grade:.2f}"


def derive_status(grade) -> str:
    """
    소수점 둘째 자리로 반올림한 값 기준으로 판정
    - 저장/표시되는 점수("60.00")와 상태가 항상 일치
    """
    return PASSED if float(format_grade(float(grade))) >= PASS_THRESHOLD else FAILED
