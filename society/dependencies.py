from fastapi import Depends, Request
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from society.config import settings
from society.core.exceptions import UnauthorizedException, ForbiddenException
from society.core.security import decode_session_token
from society.core.server_log import EndpointCatalog, ServerLogSource
from society.database import get_db
from society.models.principal import Principal
from society.models.role import Role
from society.repositories.user_repository import UserRepository

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


async def get_current_principal(
    token: str | None = Depends(session_cookie), db: Session = Depends(get_db)
) -> Principal:
    """
    FastAPI dependency resolving the session cookie to a Principal.

    Flow:
    1. Read the session token from the cookie
    2. Verify signature and expiry
    3. Load the user named by the 'sub' claim
    4. Return Principal (user + claims) for use in endpoints

    Raises:
        UnauthorizedException: If the cookie is missing, invalid, expired,
            or names a user that no longer exists
    """
    claims = decode_session_token(token) if token else None
    if claims is None:
        raise UnauthorizedException("Not authenticated")

    try:
        user_id = int(claims.subject_id)
    except ValueError:
        raise UnauthorizedException("Invalid session")

    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise UnauthorizedException("Invalid session")

    return Principal(user=user, claims=claims)


def require_roles(*roles: Role):
    """
    Dependency factory restricting an endpoint to the given roles.

    Usage:
        @router.get("", dependencies=[Depends(require_roles(Role.ADMIN))])
    """

    async def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not principal.has_role(*roles):
            allowed = ", ".join(role.value for role in roles)
            raise ForbiddenException(f"This action requires one of the roles: {allowed}")
        return principal

    return dependency


def get_server_log(request: Request) -> ServerLogSource:
    """Server log source attached to the running app"""
    return request.app.state.server_log


def get_endpoint_catalog(request: Request) -> EndpointCatalog:
    return request.app.state.endpoint_catalog
