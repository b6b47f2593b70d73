from functools import lru_cache

from config.courses import CourseCatalog, catalog
from config.settings import settings
from database.store import build_store
from services.student_repository import StudentRepository


def get_catalog() -> CourseCatalog:
    return catalog


# ✅ 프로세스당 저장소 하나 (Lock 공유를 위해 캐시)
@lru_cache(maxsize=1)
def get_repository() -> StudentRepository:
    return StudentRepository(build_store(settings), catalog, settings.DOCUMENT_KEY)
