"""
FastAPI에서 사용할 수 있는 인증 Dependency 헬퍼
"""
import logging
from typing import Callable

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from libs.common.auth import AuthError, TokenIssuer

logger = logging.getLogger(__name__)

AUTHORIZATION_REQUIRED = "Authorization header required"
INVALID_TOKEN = "Invalid token"

# Authorization 헤더 값을 그대로 토큰으로 사용 ("Bearer " 접두사 해석 없음)
authorization_header = APIKeyHeader(
    name="Authorization",
    description="Access Token",
    auto_error=False,
)


def build_member_gate(get_token_issuer: Callable[..., TokenIssuer]):
    """
    보호된 라우트에 붙일 인증 Dependency를 만듭니다.

    Args:
        get_token_issuer: TokenIssuer를 제공하는 Dependency

    Returns:
        검증된 회원 ID를 반환하고 request.state.member_id 에 저장하는 Dependency
    """

    async def require_member(
        request: Request,
        token: str | None = Security(authorization_header),
        token_issuer: TokenIssuer = Depends(get_token_issuer),
    ) -> str:
        if not token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=AUTHORIZATION_REQUIRED,
            )

        try:
            member_id = token_issuer.verify(token)
        except AuthError as e:
            # 어떤 검증 단계에서 실패했는지는 클라이언트에 노출하지 않음
            logger.info("Rejected token on %s: %s", request.url.path, e.code)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_TOKEN,
            ) from e

        request.state.member_id = member_id
        return member_id

    return require_member
