"""
전역 예외 핸들러
- MembershipError → 에러별 상태 코드와 공개 메시지
- RequestValidationError → 400 + 필드 위치/메시지
- 그 외 예외 → 500, 내부 상세는 로그에만 기록
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.membership.app.core.errors import MembershipError, StoreError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    _register_membership_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_membership_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MembershipError)
    async def membership_error_handler(request: Request, exc: MembershipError):
        extra = {"error_code": exc.code, "path": request.url.path}
        if isinstance(exc, StoreError):
            logger.error("Store error: %s", exc.message, extra=extra, exc_info=exc)
        elif exc.http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s", exc.message, extra=extra, exc_info=exc)
        else:
            logger.info("%s", exc.message, extra=extra)
        return JSONResponse(
            status_code=exc.http_status,
            content={"detail": exc.public_message},
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Invalid request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Invalid request body",
                "errors": [
                    {
                        "loc": [str(part) for part in error.get("loc", ())],
                        "msg": error.get("msg", ""),
                    }
                    for error in exc.errors()
                ],
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
