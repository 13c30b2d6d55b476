from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from types import ModuleType
from typing import Literal, Optional

from fastapi import APIRouter, Depends

from services.membership.app.dependencies import require_member

v1_dir = Path(__file__).resolve().parent

# 회원 CRUD/검색 라우터 파일 (프로필에 따라 인증 여부가 달라짐)
MEMBER_ROUTER_FILE = "members.router.py"


def _load_module(module_path: Path) -> Optional[ModuleType]:
    spec = spec_from_file_location(module_path.stem.replace(".", "_"), module_path)
    if spec is None or spec.loader is None:
        return None
    module = module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _load_routers() -> dict[str, APIRouter]:
    routers: dict[str, APIRouter] = {}
    for router_file in sorted(v1_dir.glob("*.router.py")):
        module = _load_module(router_file)
        if module is None:
            continue
        sub_router = getattr(module, "router", None)
        if isinstance(sub_router, APIRouter):
            routers[router_file.name] = sub_router
    return routers


_routers = _load_routers()


def build_router(member_routes: Literal["protected", "open"] = "protected") -> APIRouter:
    """
    라우터를 조립합니다.

    Args:
        member_routes: "protected" 이면 회원 라우트를 /api 하위에 두고 토큰을 검증,
            "open" 이면 회원 라우트를 루트에 검증 없이 노출

    로그인과 헬스 체크는 항상 인증 없이 루트에 노출됩니다.
    """
    router = APIRouter()

    for name, sub_router in _routers.items():
        if name == MEMBER_ROUTER_FILE:
            continue
        router.include_router(sub_router)

    member_router = _routers[MEMBER_ROUTER_FILE]
    if member_routes == "protected":
        api_router = APIRouter(prefix="/api", dependencies=[Depends(require_member)])
        api_router.include_router(member_router)
        router.include_router(api_router)
    else:
        router.include_router(member_router)

    return router
