import logging

from fastapi import APIRouter, Depends, Query, Request, status

from services.membership.app.core.MemberService import MemberService
from services.membership.app.dependencies import get_member_service
from services.membership.app.schemas.request import MemberCreateSchema, MemberUpdateSchema
from services.membership.app.schemas.response import MemberResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/members", tags=["Members"])


def _acting_member(request: Request) -> str | None:
    # protected 프로필에서만 인증 Dependency가 값을 채움
    return getattr(request.state, "member_id", None)


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    payload: MemberCreateSchema,
    request: Request,
    member_service: MemberService = Depends(get_member_service),
):
    """
    회원을 생성합니다. 비밀번호는 해시되어 저장되며 응답에는 포함되지 않습니다.
    """
    member = await member_service.create_member(
        member_id=payload.id,
        email=payload.email,
        name=payload.name,
        password=payload.password,
        role=payload.role,
        created_at=payload.created_at,
    )
    logger.debug("Member %s created by %s", member.id, _acting_member(request))
    return MemberResponse.from_member(member)


# /members/{member_id} 보다 먼저 등록되어야 함
@router.get("/search", response_model=list[MemberResponse])
async def search_members(
    name: str = Query(default="", description="이름에 포함된 문자열"),
    member_service: MemberService = Depends(get_member_service),
):
    """이름에 name 이 포함된 회원 목록을 반환합니다. 결과가 없으면 빈 목록입니다."""
    members = await member_service.search_members(name)
    return [MemberResponse.from_member(member) for member in members]


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: str,
    member_service: MemberService = Depends(get_member_service),
):
    member = await member_service.get_member(member_id)
    return MemberResponse.from_member(member)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: str,
    payload: MemberUpdateSchema,
    request: Request,
    member_service: MemberService = Depends(get_member_service),
):
    """
    회원 정보를 전체 덮어씁니다. 본문의 id 대신 경로의 member_id 를 사용합니다.
    존재하지 않는 id여도 200을 반환합니다.
    """
    await member_service.update_member(
        member_id=member_id,
        email=payload.email,
        name=payload.name,
        password=payload.password,
        role=payload.role,
        created_at=payload.created_at,
    )
    logger.debug("Member %s updated by %s", member_id, _acting_member(request))
    return MemberResponse(
        id=member_id,
        email=payload.email,
        name=payload.name,
        role=payload.role,
        created_at=payload.created_at,
    )


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_member(
    member_id: str,
    request: Request,
    member_service: MemberService = Depends(get_member_service),
):
    await member_service.delete_member(member_id)
    logger.debug("Member %s deleted by %s", member_id, _acting_member(request))
    return MessageResponse(message="Member deleted")
