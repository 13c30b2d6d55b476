from .LoginSchema import LoginSchema
from .MemberSchema import MemberCreateSchema, MemberUpdateSchema

__all__ = [
    "LoginSchema",
    "MemberCreateSchema",
    "MemberUpdateSchema",
]
