from fastapi import APIRouter, Depends

from dependencies.repository import get_repository
from middlewares.error_handler import failure_response
from schemas.students import GradeSubmission
from services import grade_service
from services.student_repository import StudentRepository

router = APIRouter(tags=["성적 계산"])


# ✅ [CREATE] 최종 점수 계산 + 저장
# - 신규 학생 ID면 학생 생성, 기존 학생이면 과목 추가
# - 이미 성적이 있는 과목은 409 (수정은 PUT /students/{id}/courses/{courseName})
@router.post("/calculate")
def calculate_grade(payload: GradeSubmission, repository: StudentRepository = Depends(get_repository)):
    result = grade_service.submit_grade(
        repository,
        student_name=payload.studentName,
        student_id=payload.studentId,
        course_key=payload.course,
        component_values=payload.components,
    )
    if not result.ok:
        return failure_response(result)
    return {
        "success": True,
        "data": result.data.model_dump(),
        "message": "Grade saved successfully"
    }
