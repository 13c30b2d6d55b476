"""
공통 인증 모듈
회원 식별 토큰(JWT) 발급과 검증 로직을 제공합니다.
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt

logger = logging.getLogger(__name__)

# 개발용 기본값 (프로덕션에서는 절대 사용하지 말 것)
DEFAULT_JWT_SECRET = "secret"
DEFAULT_JWT_ALGORITHM = "HS256"
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")

# 토큰 subject 클레임 이름
SUBJECT_CLAIM = "member_id"


class AuthError(Exception):
    """인증 관련 에러"""
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class TokenIssuer:
    """
    회원 ID를 담은 서명 토큰을 발급하고 검증합니다.
    서명 키는 생성 시 주입되며 이후 변경되지 않습니다.
    """

    ACCESS_TOKEN_TTL = timedelta(hours=1)

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_JWT_ALGORITHM,
        ttl: timedelta = ACCESS_TOKEN_TTL,
    ):
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"대칭키(HMAC) 알고리즘만 지원합니다: {algorithm}")
        if not secret_key:
            raise ValueError("JWT 서명 키가 비어있습니다.")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, subject_id: str, issued_at: datetime | None = None) -> str:
        """
        Access token을 발급합니다. 만료 시각은 발급 시각 + ttl 입니다.

        Args:
            subject_id: 회원 ID
            issued_at: 발급 시각 (None이면 현재 시각)
        """
        issued_at = issued_at or datetime.now(timezone.utc)
        expires_at = issued_at + self.ttl

        payload = {
            SUBJECT_CLAIM: subject_id,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str | None) -> str:
        """
        토큰을 검증하고 회원 ID를 반환합니다.

        Raises:
            AuthError: 토큰이 없거나, 형식/서명/알고리즘이 올바르지 않거나,
                만료되었거나, 회원 ID 클레임이 없는 경우
        """
        if not token:
            raise AuthError("ERR-TOKEN-MISSING", "토큰이 없습니다.")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthError("ERR-TOKEN-EXPIRED", "토큰이 만료되었습니다.") from e
        except jwt.InvalidAlgorithmError as e:
            raise AuthError("ERR-TOKEN-ALGORITHM", "허용되지 않은 서명 알고리즘입니다.") from e
        except jwt.InvalidSignatureError as e:
            raise AuthError("ERR-TOKEN-SIGNATURE", "토큰 서명이 올바르지 않습니다.") from e
        except jwt.DecodeError as e:
            raise AuthError("ERR-TOKEN-MALFORMED", "토큰 형식이 올바르지 않습니다.") from e
        except jwt.InvalidTokenError as e:
            raise AuthError("ERR-TOKEN-INVALID", "토큰이 유효하지 않습니다.") from e

        subject_id = payload.get(SUBJECT_CLAIM)
        if not isinstance(subject_id, str) or not subject_id:
            raise AuthError("ERR-TOKEN-SUBJECT", "토큰에 회원 정보가 없습니다.")

        return subject_id


def uses_default_secret(secret_key: str) -> bool:
    return secret_key == DEFAULT_JWT_SECRET


def warn_if_default_secret(secret_key: str) -> None:
    if uses_default_secret(secret_key):
        logger.warning(
            "JWT_SECRET_KEY is not set; falling back to the insecure default signing secret. "
            "Do not run this configuration in production."
        )
