from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

# ✅ 로그 설정 (LOG_LEVEL은 .env에서)
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# 클라이언트 라이브러리 디버그 로그 비활성화
logging.getLogger("redis").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import courses, grades, students
from dependencies.repository import get_repository

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS 설정 (프론트엔드 연동)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /api 프리픽스 라우터 등록
app.include_router(courses.router,  prefix=settings.API_PREFIX)
app.include_router(students.router, prefix=settings.API_PREFIX)
app.include_router(grades.router,   prefix=settings.API_PREFIX)

# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}

@app.on_event("startup")
def _initialize_document():
    # 문서가 없으면 빈 컬렉션으로 생성 (실패해도 서버는 시작, 이후 요청에서 503)
    try:
        result = get_repository().initialize()
    except Exception:
        logger.exception("Failed to create document store")
        return
    if not result.ok:
        logger.error(f"Failed to initialize document: {result.error.message}")
    elif result.data:
        logger.info("Initialized data store")

# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"status": f"Backend is running ({settings.STORE_BACKEND})"}
