import asyncio
from datetime import datetime
from typing import Any, Callable, Mapping

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from libs.common import PasswordHashError, format_timestamp, hash_password, parse_timestamp
from libs.schemas import Member

from services.membership.app.core.errors import RecordFormatError, StoreError

# LIKE 패턴 이스케이프 문자 (MySQL/SQLite 공통으로 동작)
_LIKE_ESCAPE = "!"

_MEMBER_COLUMNS = "id, email, name, password, role, created_at"


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _row_to_member(row: Mapping[str, Any], operation: str) -> Member:
    try:
        created_at = parse_timestamp(row["created_at"])
    except ValueError as exc:
        raise RecordFormatError(
            operation, f"created_at of member '{row['id']}' is malformed: {row['created_at']!r}"
        ) from exc
    return Member(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        password=row["password"],
        role=row["role"],
        created_at=created_at,
    )


class SQLAlchemyMemberRepository:
    """
    members 테이블에 대한 저장소.
    모든 쿼리는 바인드 파라미터를 사용하며, 각 작업은 한 번의 왕복으로 끝납니다.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        password_hasher: Callable[[str], str] = hash_password,
    ):
        self._session_factory = session_factory
        self._hash_password = password_hasher

    async def _run_in_thread(self, operation: str, func: Callable[[], Any]):
        try:
            return await asyncio.to_thread(func)
        except SQLAlchemyError as exc:
            raise StoreError(operation, str(exc)) from exc

    async def create_member(
        self,
        member_id: str,
        email: str,
        name: str,
        password: str,
        role: str,
        created_at: datetime,
    ) -> Member:
        """
        평문 비밀번호를 해시한 뒤 새 회원을 저장합니다.
        PK/UNIQUE 제약 위반도 일반 저장 실패(StoreError)로 전달됩니다.
        """
        def _create():
            try:
                hashed = self._hash_password(password)
            except PasswordHashError as exc:
                raise StoreError("create", "password hashing failed") from exc

            member = Member(
                id=member_id,
                email=email,
                name=name,
                password=hashed,
                role=role,
                created_at=created_at,
            )
            with self._session_factory() as session:
                session.execute(
                    text(
                        f"""
                        INSERT INTO members ({_MEMBER_COLUMNS})
                        VALUES (:id, :email, :name, :password, :role, :created_at)
                        """
                    ),
                    {
                        "id": member.id,
                        "email": member.email,
                        "name": member.name,
                        "password": member.password,
                        "role": member.role,
                        "created_at": format_timestamp(member.created_at),
                    },
                )
                session.commit()
            return member

        return await self._run_in_thread("create", _create)

    async def update_member(
        self,
        member_id: str,
        email: str,
        name: str,
        password: str,
        role: str,
        created_at: datetime | None = None,
    ) -> None:
        """
        id에 해당하는 행의 모든 필드를 덮어씁니다.
        created_at 이 None이면 저장된 값을 유지합니다.
        일치하는 행이 없어도 성공으로 처리합니다.
        """
        def _update():
            try:
                hashed = self._hash_password(password)
            except PasswordHashError as exc:
                raise StoreError("update", "password hashing failed") from exc

            with self._session_factory() as session:
                session.execute(
                    text(
                        """
                        UPDATE members
                        SET email = :email,
                            name = :name,
                            password = :password,
                            role = :role,
                            created_at = COALESCE(:created_at, created_at)
                        WHERE id = :id
                        """
                    ),
                    {
                        "id": member_id,
                        "email": email,
                        "name": name,
                        "password": hashed,
                        "role": role,
                        "created_at": format_timestamp(created_at) if created_at else None,
                    },
                )
                session.commit()

        return await self._run_in_thread("update", _update)

    async def delete_member(self, member_id: str) -> None:
        """회원을 삭제합니다. 없는 id여도 성공으로 처리합니다."""
        def _delete():
            with self._session_factory() as session:
                session.execute(
                    text("DELETE FROM members WHERE id = :id"),
                    {"id": member_id},
                )
                session.commit()

        return await self._run_in_thread("delete", _delete)

    async def find_member_by_id(self, member_id: str) -> Member | None:
        def _query():
            with self._session_factory() as session:
                row = (
                    session.execute(
                        text(
                            f"""
                            SELECT {_MEMBER_COLUMNS}
                            FROM members
                            WHERE id = :id
                            LIMIT 1
                            """
                        ),
                        {"id": member_id},
                    )
                    .mappings()
                    .first()
                )
                if row is None:
                    return None
                return _row_to_member(row, "get")

        return await self._run_in_thread("get", _query)

    async def find_member_by_email(self, email: str) -> Member | None:
        def _query():
            with self._session_factory() as session:
                row = (
                    session.execute(
                        text(
                            f"""
                            SELECT {_MEMBER_COLUMNS}
                            FROM members
                            WHERE email = :email
                            LIMIT 1
                            """
                        ),
                        {"email": email},
                    )
                    .mappings()
                    .first()
                )
                if row is None:
                    return None
                return _row_to_member(row, "get")

        return await self._run_in_thread("get", _query)

    async def search_members(self, name: str) -> list[Member]:
        """이름에 name 이 포함된 회원 목록. 정렬은 저장소 기본 순서를 따릅니다."""
        def _query():
            with self._session_factory() as session:
                rows = (
                    session.execute(
                        text(
                            f"""
                            SELECT {_MEMBER_COLUMNS}
                            FROM members
                            WHERE name LIKE :pattern ESCAPE '{_LIKE_ESCAPE}'
                            """
                        ),
                        {"pattern": f"%{_escape_like(name)}%"},
                    )
                    .mappings()
                    .all()
                )
                return [_row_to_member(row, "search") for row in rows]

        return await self._run_in_thread("search", _query)
