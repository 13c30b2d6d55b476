from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from libs.common import format_timestamp
from libs.schemas import Member


class MemberResponse(BaseModel):
    """회원 정보 응답 (비밀번호는 포함하지 않음)"""
    id: str = Field(..., description="회원 고유 식별자")
    email: str = Field(..., description="이메일")
    name: str = Field(..., description="회원 이름")
    role: str = Field(..., description="권한 태그")
    created_at: datetime | None = Field(default=None, description="생성 일시 (YYYY-MM-DD HH:MM:SS)")

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime | None) -> str | None:
        return format_timestamp(value) if value else None

    @classmethod
    def from_member(cls, member: Member) -> "MemberResponse":
        return cls(
            id=member.id,
            email=member.email,
            name=member.name,
            role=member.role,
            created_at=member.created_at,
        )
