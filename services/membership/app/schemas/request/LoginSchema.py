from pydantic import BaseModel, Field


class LoginSchema(BaseModel):
    """
    이메일/비밀번호 로그인 요청 본문.
    """

    email: str = Field(..., min_length=1, description="회원 이메일")
    password: str = Field(..., min_length=1, description="평문 비밀번호")
