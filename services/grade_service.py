"""
services/grade_service.py

- 라우터(및 일괄 입력 스크립트)가 사용하는 성적 관리 기능 모음
- 요청 값 검증 → 과목 카탈로그 조회 → 저장소 호출 순서
- 모든 함수는 ServiceResult 반환 (HTTP 상태 변환은 라우터 쪽에서)
"""

from typing import Any, Mapping, Optional

from config.courses import CourseCatalog
from schemas.common import ErrorCode, ServiceResult, failure, success
from services.student_repository import StudentRepository


def _text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip()


def list_courses(catalog: CourseCatalog) -> ServiceResult:
    return success(catalog.as_dict())


def list_students(repository: StudentRepository, id_substring: Optional[str] = None,
                  status: Optional[str] = None) -> ServiceResult:
    return repository.get_all(id_substring=id_substring, status=status)


def submit_grade(repository: StudentRepository, student_name: Any, student_id: Any,
                 course_key: Any, component_values: Mapping[str, Any]) -> ServiceResult:
    name = _text(student_name)
    if not name:
        return failure(ErrorCode.MISSING_FIELD, "Student name is required")

    sid = _text(student_id)
    if not sid:
        return failure(ErrorCode.MISSING_FIELD, "Student ID is required")

    key = _text(course_key)
    if not key:
        return failure(ErrorCode.MISSING_FIELD, "Course is required")

    course = repository.catalog.get(key)
    if course is None:
        return failure(ErrorCode.UNKNOWN_COURSE, "Invalid course")

    return repository.upsert_grade(sid, name, course.name, component_values)


def delete_student(repository: StudentRepository, student_id: str) -> ServiceResult:
    return repository.delete_student(_text(student_id))


def delete_course(repository: StudentRepository, student_id: str, course_name: str) -> ServiceResult:
    return repository.delete_course(_text(student_id), course_name)


def update_course_grade(repository: StudentRepository, student_id: str, course_name: str,
                        component_values: Mapping[str, Any]) -> ServiceResult:
    return repository.update_grade(_text(student_id), course_name, component_values)
