from pydantic import BaseModel
from society.models.role import Role
from society.schemas.auth_schemas import UserSummary


class MenuItemResponse(BaseModel):
    label: str
    href: str


class PageResponse(BaseModel):
    """Descriptor of a role page: who is viewing it and the role's navigation"""

    role: Role
    page: str
    title: str
    user: UserSummary
    menu: list[MenuItemResponse]


class LoginPageResponse(BaseModel):
    page: str = "login"
    redirected_from: str | None = None
