"""Shared test fixtures for the Membership service tests"""

import os
from datetime import datetime
from typing import AsyncGenerator

from tests.factories import TEST_SECRET, fast_hash

# 앱 import 전에 테스트 환경 설정
os.environ["MEMBERSHIP_CONFIG_FILE"] = "/nonexistent/membership-test-config.json"
os.environ["JWT_SECRET_KEY"] = TEST_SECRET

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from libs.common import TokenIssuer

from services.membership.app.db.connection import Settings
from services.membership.app.db.repositories.members import SQLAlchemyMemberRepository
from services.membership.app.db.session import build_engine, build_session_factory
from services.membership.app.dependencies import (
    get_member_repository,
    get_token_issuer,
)
from services.membership.app.main import create_app

MEMBERS_DDL = """
CREATE TABLE members (
    id         VARCHAR(64)  NOT NULL PRIMARY KEY,
    email      VARCHAR(255) NOT NULL UNIQUE,
    name       VARCHAR(255) NOT NULL,
    password   VARCHAR(255) NOT NULL,
    role       VARCHAR(64)  NOT NULL,
    created_at TEXT         NOT NULL
)
"""


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite engine with the members table"""
    settings = Settings(MEMBERSHIP_DATABASE_URL=f"sqlite:///{tmp_path / 'members.db'}")
    db_engine = build_engine(settings)
    with db_engine.begin() as connection:
        connection.execute(text(MEMBERS_DDL))
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def broken_engine(tmp_path):
    """Engine pointing at a database file that cannot be opened"""
    settings = Settings(
        MEMBERSHIP_DATABASE_URL=f"sqlite:///{tmp_path / 'missing-dir' / 'members.db'}"
    )
    db_engine = build_engine(settings)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def repository(engine) -> SQLAlchemyMemberRepository:
    return SQLAlchemyMemberRepository(
        session_factory=build_session_factory(engine),
        password_hasher=fast_hash,
    )


@pytest.fixture
def broken_repository(broken_engine) -> SQLAlchemyMemberRepository:
    return SQLAlchemyMemberRepository(
        session_factory=build_session_factory(broken_engine),
        password_hasher=fast_hash,
    )


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET)


# =============================================================================
# Member Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def seeded_member(repository):
    """Persisted member with a known plaintext password"""
    member = await repository.create_member(
        member_id="m-001",
        email="alice@example.com",
        name="Alice Smith",
        password="correct-horse",
        role="member",
        created_at=datetime(2024, 5, 1, 12, 30, 45),
    )
    return member


# =============================================================================
# Application and Client Fixtures
# =============================================================================

def _build_app(member_routes: str, repository, token_issuer, engine):
    app = create_app(Settings(MEMBER_ROUTES=member_routes), engine=engine)
    app.dependency_overrides[get_member_repository] = lambda: repository
    app.dependency_overrides[get_token_issuer] = lambda: token_issuer
    return app


@pytest.fixture
def app(repository, token_issuer, engine):
    """App with member routes behind the authorization gate"""
    return _build_app("protected", repository, token_issuer, engine)


@pytest.fixture
def open_app(repository, token_issuer, engine):
    """App with ungated member routes"""
    return _build_app("open", repository, token_issuer, engine)


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def open_client(open_app) -> AsyncGenerator:
    transport = ASGITransport(app=open_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(token_issuer) -> dict:
    return {"Authorization": token_issuer.issue("m-001")}
