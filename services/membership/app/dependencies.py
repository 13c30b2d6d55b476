from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.engine import Engine

from libs.common import TokenIssuer, build_member_gate

from services.membership.app.core.LoginService import LoginService
from services.membership.app.core.MemberService import MemberService
from services.membership.app.db.connection import Settings
from services.membership.app.db.repositories.members import SQLAlchemyMemberRepository


def build_token_issuer(settings: Settings) -> TokenIssuer:
    return TokenIssuer(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_TTL_MINUTES),
    )


# 아래 컴포넌트는 create_app 이 app.state 에 한 번 생성해 둔 것을 사용
def get_database_engine(request: Request) -> Engine:
    return request.app.state.engine


def get_member_repository(request: Request) -> SQLAlchemyMemberRepository:
    return request.app.state.member_repository


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_member_service(
    member_repository: SQLAlchemyMemberRepository = Depends(get_member_repository),
) -> MemberService:
    return MemberService(member_repository=member_repository)


def get_login_service(
    member_repository: SQLAlchemyMemberRepository = Depends(get_member_repository),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> LoginService:
    return LoginService(member_repository=member_repository, token_issuer=token_issuer)


# 보호된 회원 라우트에 붙는 인증 Dependency
require_member = build_member_gate(get_token_issuer)
