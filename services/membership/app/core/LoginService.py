import asyncio
import logging
from typing import Protocol

import jwt

from libs.common import MalformedHashError, TokenIssuer, verify_password
from libs.schemas import Member

from services.membership.app.core.errors import TokenIssueError, UnauthorizedError

logger = logging.getLogger(__name__)


class MemberLookupPort(Protocol):
    async def find_member_by_email(self, email: str) -> Member | None: ...


class LoginService:
    def __init__(self, member_repository: MemberLookupPort, token_issuer: TokenIssuer):
        self.member_repository = member_repository
        self.token_issuer = token_issuer

    async def login(self, email: str, password: str) -> str:
        """
        이메일/비밀번호를 확인하고 access token을 발급합니다.

        Raises:
            UnauthorizedError: 등록되지 않은 이메일이거나 비밀번호가 틀린 경우
            StoreError: 회원 조회에 실패한 경우
            TokenIssueError: 토큰 서명에 실패한 경우
        """
        member = await self.member_repository.find_member_by_email(email)
        if member is None:
            raise UnauthorizedError("등록되지 않은 이메일입니다.")

        try:
            matched = await asyncio.to_thread(verify_password, member.password, password)
        except MalformedHashError as exc:
            logger.error("Stored password hash of member %s is malformed", member.id)
            raise UnauthorizedError("저장된 비밀번호 해시를 확인할 수 없습니다.") from exc

        if not matched:
            raise UnauthorizedError("비밀번호가 일치하지 않습니다.")

        try:
            token = self.token_issuer.issue(member.id)
        except jwt.PyJWTError as exc:
            raise TokenIssueError(f"token signing failed: {exc}") from exc

        logger.info("Member %s logged in", member.id)
        return token
