from fastapi import APIRouter, Depends

from config.courses import CourseCatalog
from dependencies.repository import get_catalog
from services import grade_service

router = APIRouter(prefix="/courses", tags=["과목"])


# ✅ [READ] 시스템 과목 목록 (과목 키 → 이름/평가 항목 가중치)
@router.get("")
def read_courses(catalog: CourseCatalog = Depends(get_catalog)):
    result = grade_service.list_courses(catalog)
    return {
        "success": True,
        "data": result.data,
        "message": "과목 목록 조회 완료"
    }
