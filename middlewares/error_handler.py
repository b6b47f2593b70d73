import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorCode, ErrorDetail, ErrorResponse, ServiceResult

logger = logging.getLogger(__name__)

# ✅ 에러 코드 → HTTP 상태 코드
STATUS_BY_CODE = {
    ErrorCode.MISSING_FIELD: 400,
    ErrorCode.UNKNOWN_COURSE: 400,
    ErrorCode.UNKNOWN_COURSE_TYPE: 400,
    ErrorCode.INVALID_COMPONENT_GRADE: 400,
    ErrorCode.MISSING_COMPONENT_GRADE: 400,
    ErrorCode.INVALID_STATUS_FILTER: 400,
    ErrorCode.DUPLICATE_COURSE_GRADE: 409,
    ErrorCode.STUDENT_NOT_FOUND: 404,
    ErrorCode.COURSE_NOT_FOUND: 404,
    ErrorCode.STORAGE_UNAVAILABLE: 503,
    ErrorCode.INTERNAL_ERROR: 500,
}


def error_response(error: ErrorDetail) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_CODE.get(error.code, 500),
        content=ErrorResponse(error=error).model_dump(mode="json"),
    )


def failure_response(result: ServiceResult) -> JSONResponse:
    """실패한 ServiceResult → 표준 에러 응답"""
    return error_response(result.error)


def add_error_handlers(app: FastAPI):
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error: {request.method} {request.url.path}")
        return error_response(ErrorDetail(code=ErrorCode.INTERNAL_ERROR, message=str(exc)))
