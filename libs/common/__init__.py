"""
Membership 공통 라이브러리
인증 토큰, 비밀번호 해시, 시각 형식, 로깅 등 공통 기능을 제공합니다.
"""

from libs.common.auth import AuthError, TokenIssuer, warn_if_default_secret
from libs.common.fastapi_auth import authorization_header, build_member_gate
from libs.common.passwords import MalformedHashError, PasswordHashError, hash_password, verify_password
from libs.common.timestamps import STORE_TIMESTAMP_FORMAT, format_timestamp, normalize_timestamp, now_naive, parse_timestamp

__all__ = [
    "AuthError",
    "TokenIssuer",
    "warn_if_default_secret",
    "authorization_header",
    "build_member_gate",
    "MalformedHashError",
    "PasswordHashError",
    "hash_password",
    "verify_password",
    "STORE_TIMESTAMP_FORMAT",
    "format_timestamp",
    "normalize_timestamp",
    "now_naive",
    "parse_timestamp",
]
