from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from libs.common.timestamps import normalize_timestamp


class Member(BaseModel):
    """
    회원(Member) 엔티티 정의.
    저장소에서 읽은 값의 password 는 항상 해시 값입니다.
    """

    id: str = Field(..., description="회원 고유 식별자 (호출자가 지정)")
    email: str = Field(..., description="로그인에 사용하는 이메일")
    name: str = Field(..., description="회원 이름 (검색 대상)")
    password: str = Field(..., description="비밀번호 해시")
    role: str = Field(..., description="권한 태그 (이 서비스에서는 해석하지 않음)")
    created_at: datetime = Field(..., description="생성 일시 (초 단위, 시간대 없음)")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime) -> datetime:
        return normalize_timestamp(value)
