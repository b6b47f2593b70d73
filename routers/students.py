from typing import Optional

from fastapi import APIRouter, Depends

from dependencies.repository import get_repository
from middlewares.error_handler import failure_response
from schemas.students import GradeUpdate
from services import grade_service
from services.student_repository import StudentRepository

router = APIRouter(prefix="/students", tags=["학생 성적"])


# ==========================================================
# [1단계] 조회 라우터
# ==========================================================

# ✅ [READ] 학생 목록 (ID 부분 검색 / 상태 필터)
# - id, searchById: 둘 다 ID 부분 문자열 검색 (searchById 우선)
# - status: Passed / Failed (대소문자 무시)
@router.get("")
def read_students(
    id: Optional[str] = None,
    searchById: Optional[str] = None,
    status: Optional[str] = None,
    repository: StudentRepository = Depends(get_repository),
):
    result = grade_service.list_students(repository, id_substring=searchById or id, status=status)
    if not result.ok:
        return failure_response(result)
    return {
        "success": True,
        "data": [s.model_dump() for s in result.data],
        "message": "학생 목록 조회 완료"
    }


# ==========================================================
# [2단계] 동적 라우터 (삭제/수정)
# ==========================================================

# ✅ [DELETE] 학생 삭제 (모든 과목 포함)
@router.delete("/{student_id}")
def delete_student(student_id: str, repository: StudentRepository = Depends(get_repository)):
    result = grade_service.delete_student(repository, student_id)
    if not result.ok:
        return failure_response(result)
    return {
        "success": True,
        "data": {"id": student_id},
        "message": "Student deleted successfully"
    }


# ✅ [DELETE] 학생의 과목 하나 삭제 (마지막 과목이면 학생도 삭제)
@router.delete("/{student_id}/courses/{course_name}")
def delete_student_course(student_id: str, course_name: str,
                          repository: StudentRepository = Depends(get_repository)):
    result = grade_service.delete_course(repository, student_id, course_name)
    if not result.ok:
        return failure_response(result)
    return {
        "success": True,
        "data": {"id": student_id, "courseName": course_name.strip()},
        "message": "Course deleted successfully"
    }


# ✅ [UPDATE] 학생의 과목 성적 수정 (해당 과목의 모든 평가 항목 필수)
@router.put("/{student_id}/courses/{course_name}")
def update_student_course(student_id: str, course_name: str, payload: GradeUpdate,
                          repository: StudentRepository = Depends(get_repository)):
    result = grade_service.update_course_grade(repository, student_id, course_name, payload.components)
    if not result.ok:
        return failure_response(result)
    return {
        "success": True,
        "data": result.data.model_dump(),
        "message": "Grade updated successfully"
    }
