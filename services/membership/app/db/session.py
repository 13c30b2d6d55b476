from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from services.membership.app.db.connection import Settings


def build_engine(settings: Settings) -> Engine:
    """
    설정값으로 엔진(커넥션 풀)을 생성합니다.
    동시에 열 수 있는 연결은 DB_POOL_SIZE + DB_MAX_OVERFLOW 개로 제한됩니다.
    """
    url = settings.database_url
    if url.get_backend_name() == "sqlite":
        # SQLite는 풀 크기 설정을 받지 않음
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            future=True,
        )
    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        future=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def check_database(engine: Engine) -> None:
    """DB 연결 확인. 실패하면 드라이버 예외가 그대로 전달됩니다."""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
