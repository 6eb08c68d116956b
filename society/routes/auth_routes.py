from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from society.core.server_log import ServerLogSource
from society.core.session import clear_session_cookie, set_session_cookie
from society.database import get_db
from society.dependencies import get_current_principal, get_server_log
from society.models.principal import Principal
from society.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SessionResponse,
)
from society.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    server_log: ServerLogSource = Depends(get_server_log),
):
    """
    Exchange email and password for a session cookie.

    The cookie is HttpOnly and carries the signed session token.
    """
    service = AuthService(db, server_log)
    user, token = service.login(data.email, data.password)
    set_session_cookie(response, token)
    return {"message": "Login successful", "user": user}


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Clear the session cookie"""
    clear_session_cookie(response)
    return {"message": "Logout successful"}


@router.get("/me", response_model=SessionResponse)
async def me(principal: Principal = Depends(get_current_principal)):
    """Identity carried by the current session"""
    claims = principal.claims
    return {
        "user": {
            "id": claims.subject_id,
            "email": claims.email,
            "name": claims.name,
            "role": claims.role,
        }
    }
