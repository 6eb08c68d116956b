"""
Role pages.

Each page returns a descriptor of what the role's screen shows: the
viewer and the role's navigation menu. Page paths sit behind the
authorization gate; the role dependency only matters when the gate is
not installed.
"""

from fastapi import APIRouter, Depends, Query

from society.core.exceptions import NotFoundException
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import ROLE_MENUS, MenuItem, Role
from society.schemas.page_schemas import LoginPageResponse, PageResponse

router = APIRouter()


def build_page(
    role: Role, slug: str, principal: Principal, menus: dict[Role, tuple[MenuItem, ...]] = ROLE_MENUS
) -> dict:
    """
    Describe one page of a role.

    Raises:
        NotFoundException: If the role's menu has no entry for slug
    """
    menu = menus[role]
    item = next((entry for entry in menu if entry.slug == slug), None)
    if item is None:
        raise NotFoundException("Page not found")

    return {
        "role": role,
        "page": slug or "dashboard",
        "title": item.label,
        "user": principal.user,
        "menu": [{"label": entry.label, "href": entry.href} for entry in menu],
    }


def role_pages(role: Role) -> APIRouter:
    """Router serving /<role> and /<role>/<page>"""
    pages = APIRouter(prefix=role.home_path, tags=["Pages"])
    guard = require_roles(role)

    @pages.get("", response_model=PageResponse, name=f"{role.value}_home")
    async def home(principal: Principal = Depends(guard)):
        return build_page(role, "", principal)

    @pages.get("/{page}", response_model=PageResponse, name=f"{role.value}_page")
    async def page(page: str, principal: Principal = Depends(guard)):
        return build_page(role, page, principal)

    return pages


@router.get("/login", response_model=LoginPageResponse)
async def login_page(redirected_from: str | None = Query(None, alias="redirectedFrom")):
    """Public sign-in page; redirectedFrom names the page to return to"""
    return {"page": "login", "redirected_from": redirected_from}


for _role in Role:
    router.include_router(role_pages(_role))
