from .LoginResponse import LoginResponse
from .MemberResponse import MemberResponse
from .MessageResponse import HealthResponse, MessageResponse

__all__ = [
    "LoginResponse",
    "MemberResponse",
    "HealthResponse",
    "MessageResponse",
]
