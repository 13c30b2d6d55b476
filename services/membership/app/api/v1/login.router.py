from fastapi import APIRouter, Depends

from services.membership.app.core.LoginService import LoginService
from services.membership.app.dependencies import get_login_service
from services.membership.app.schemas.request import LoginSchema
from services.membership.app.schemas.response import LoginResponse

router = APIRouter(tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {
            "description": "로그인 성공",
            "content": {
                "application/json": {
                    "example": {"token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}
                }
            },
        },
        401: {
            "description": "이메일 또는 비밀번호가 올바르지 않음",
            "content": {
                "application/json": {
                    "example": {"detail": "Invalid credentials"}
                }
            },
        },
    },
)
async def login(
    payload: LoginSchema,
    login_service: LoginService = Depends(get_login_service),
):
    """
    이메일/비밀번호 로그인. 인증 없이 호출할 수 있습니다.
    """
    token = await login_service.login(email=payload.email, password=payload.password)
    return LoginResponse(token=token)
