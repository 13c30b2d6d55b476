import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from libs.common import warn_if_default_secret
from libs.common.log import setup_logging

from services.membership.app.api.error_handlers import register_error_handlers
from services.membership.app.api.v1.router import build_router
from services.membership.app.db.connection import Settings, SettingsError, load_settings
from services.membership.app.db.repositories.members import SQLAlchemyMemberRepository
from services.membership.app.db.session import build_engine, build_session_factory, check_database
from services.membership.app.dependencies import build_token_issuer

logger = logging.getLogger(__name__)

# ALLOWED_ORIGINS 가 없을 때 개발 환경에서 허용하는 오리진
_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",  # Vite 기본 포트
    "http://localhost:8000",
    "http://localhost:8001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:8000",
    "http://127.0.0.1:8001",
]


def _allowed_origins(settings: Settings) -> list[str]:
    if settings.ALLOWED_ORIGINS:
        return [origin.strip() for origin in settings.ALLOWED_ORIGINS.split(",") if origin.strip()]
    if settings.is_development:
        return list(_DEV_ORIGINS)
    # 프로덕션 환경: 설정이 없으면 모든 오리진 차단
    return []


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """
    앱을 생성합니다.

    Args:
        settings: None이면 설정 파일과 환경 변수에서 읽어옴
        engine: 이미 연결을 확인한 엔진 (None이면 settings 로 새로 생성)
    """
    settings = settings or load_settings()
    if engine is None:
        engine = build_engine(settings)

    app = FastAPI(
        title="Membership Service (회원 서비스)",
        description="회원 CRUD/검색 및 이메일 로그인 API",
    )

    # 요청 처리에 쓰이는 컴포넌트는 여기서 한 번만 생성
    app.state.engine = engine
    app.state.member_repository = SQLAlchemyMemberRepository(
        session_factory=build_session_factory(engine),
    )
    app.state.token_issuer = build_token_issuer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(build_router(settings.MEMBER_ROUTES))

    # 서비스가 살아있는지 확인하는 엔드포인트
    @app.get("/")
    def read_root():
        return {"service": settings.APP_NAME, "status": "running"}

    return app


def run() -> None:
    """
    설정 파일과 DB 연결을 확인한 뒤 서버를 시작합니다.
    둘 중 하나라도 실패하면 로그를 남기고 종료 코드 1로 끝납니다.
    """
    try:
        settings = load_settings(require_config_file=True)
    except SettingsError as exc:
        setup_logging()
        logger.critical("Failed to load configuration: %s", exc)
        sys.exit(1)

    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    try:
        engine = build_engine(settings)
        check_database(engine)
    except (SQLAlchemyError, ValueError, ImportError) as exc:
        # ImportError: DB 종류에 맞는 드라이버가 설치되지 않은 경우
        logger.critical("Failed to initialize database: %s", exc)
        sys.exit(1)

    warn_if_default_secret(settings.JWT_SECRET_KEY)

    try:
        app = create_app(settings, engine=engine)
    except ValueError as exc:
        logger.critical("Failed to configure token signing: %s", exc)
        engine.dispose()
        sys.exit(1)

    port = settings.listen_port
    logger.info(
        "Server is running on port %s (member routes: %s)", port, settings.MEMBER_ROUTES
    )
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
