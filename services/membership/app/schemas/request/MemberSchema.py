from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from libs.common.passwords import MAX_PASSWORD_BYTES


class MemberBodySchema(BaseModel):
    """
    회원 생성/수정 공통 요청 본문.
    password 는 평문이며 저장 전에 해시됩니다.
    """

    email: str = Field(..., min_length=1, description="로그인 이메일")
    name: str = Field(..., min_length=1, description="회원 이름")
    password: str = Field(..., description="평문 비밀번호 (1~72 바이트)")
    role: str = Field(default="member", description="권한 태그")
    created_at: datetime | None = Field(
        default=None,
        description="생성 일시 (생략 시 생성은 현재 시각, 수정은 기존 값 유지)",
    )

    @field_validator("password")
    @classmethod
    def _check_password_length(cls, value: str) -> str:
        size = len(value.encode("utf-8"))
        if size == 0 or size > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be 1 to {MAX_PASSWORD_BYTES} bytes")
        return value


class MemberCreateSchema(MemberBodySchema):
    """회원 생성 요청 본문"""

    id: str = Field(..., min_length=1, max_length=64, description="회원 고유 식별자")


class MemberUpdateSchema(MemberBodySchema):
    """
    회원 수정 요청 본문 (전체 덮어쓰기).
    본문의 id 는 무시되고 경로의 id 가 사용됩니다.
    """

    id: str | None = Field(default=None, description="무시됨")
