from pydantic import BaseModel, ConfigDict, Field


class LoginResponse(BaseModel):
    """
    로그인 성공 응답.
    """

    token: str = Field(..., description="액세스 토큰 (1시간 유효)", examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            }
        }
    )
