import logging
from datetime import datetime
from typing import Protocol

from libs.common import now_naive
from libs.schemas import Member

from services.membership.app.core.errors import NotFoundError

logger = logging.getLogger(__name__)


class MemberRepositoryPort(Protocol):
    async def create_member(
        self,
        member_id: str,
        email: str,
        name: str,
        password: str,
        role: str,
        created_at: datetime,
    ) -> Member: ...

    async def update_member(
        self,
        member_id: str,
        email: str,
        name: str,
        password: str,
        role: str,
        created_at: datetime | None = None,
    ) -> None: ...

    async def delete_member(self, member_id: str) -> None: ...

    async def find_member_by_id(self, member_id: str) -> Member | None: ...

    async def find_member_by_email(self, email: str) -> Member | None: ...

    async def search_members(self, name: str) -> list[Member]: ...


class MemberService:
    def __init__(self, member_repository: MemberRepositoryPort):
        self.member_repository = member_repository

    async def create_member(
        self,
        member_id: str,
        email: str,
        name: str,
        password: str,
        role: str,
        created_at: datetime | None = None,
    ) -> Member:
        member = await self.member_repository.create_member(
            member_id=member_id,
            email=email,
            name=name,
            password=password,
            role=role,
            created_at=created_at or now_naive(),
        )
        logger.info("Member %s created", member.id)
        return member

    async def get_member(self, member_id: str) -> Member:
        """
        Raises:
            NotFoundError: 회원이 없는 경우
        """
        member = await self.member_repository.find_member_by_id(member_id)
        if member is None:
            raise NotFoundError(member_id)
        return member

    async def update_member(
        self,
        member_id: str,
        email: str,
        name: str,
        password: str,
        role: str,
        created_at: datetime | None = None,
    ) -> None:
        # 대상 행이 없어도 성공으로 처리 (영향받은 행 수를 확인하지 않음)
        await self.member_repository.update_member(
            member_id=member_id,
            email=email,
            name=name,
            password=password,
            role=role,
            created_at=created_at,
        )

    async def delete_member(self, member_id: str) -> None:
        await self.member_repository.delete_member(member_id)

    async def search_members(self, name: str) -> list[Member]:
        return await self.member_repository.search_members(name)
