from libs.schemas.member import Member

__all__ = [
    "Member",
]
