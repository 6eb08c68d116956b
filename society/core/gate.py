"""Authorization gate: role-based access to the page prefixes."""

import logging
from urllib.parse import urlencode

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse, Response

from society.core.session import read_session
from society.models.role import PROTECTED_PREFIXES, Role, required_role_for_path

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
SUPERADMIN_HOME = "/superadmin/dashboard"


def login_redirect_target(path: str) -> str:
    """Login URL that returns the user to ``path`` afterwards"""
    return f"{LOGIN_PATH}?{urlencode({'redirectedFrom': path}, safe='/')}"


class AuthorizationGate(BaseHTTPMiddleware):
    """
    Intercepts every request before routing.

    - Signed-in principal opening /login goes to its role home.
    - /superadmin goes to the super-admin dashboard.
    - Protected prefix without a session goes to /login?redirectedFrom=<path>.
    - Protected prefix with another role's session goes to that role's home.
    - Everything else passes through.

    Decoded claims (or None) are left on ``request.state.session``.
    """

    def __init__(self, app, prefixes: tuple[tuple[str, Role], ...] = PROTECTED_PREFIXES):
        super().__init__(app)
        self.prefixes = prefixes

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        claims = read_session(request)
        request.state.session = claims

        if claims and path == LOGIN_PATH:
            return self._redirect(claims.role.home_path, path, "already signed in")

        if path == "/superadmin":
            return self._redirect(SUPERADMIN_HOME, path, "superadmin home")

        required_role = required_role_for_path(path, self.prefixes)
        if required_role is not None:
            if claims is None:
                return self._redirect(login_redirect_target(path), path, "no session")
            if claims.role != required_role:
                return self._redirect(claims.role.home_path, path, "role mismatch")

        return await call_next(request)

    @staticmethod
    def _redirect(target: str, path: str, reason: str) -> RedirectResponse:
        logger.debug("Gate redirect %s -> %s (%s)", path, target, reason)
        return RedirectResponse(url=target, status_code=307)
