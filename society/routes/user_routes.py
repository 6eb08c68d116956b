from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import get_current_principal
from society.models.principal import Principal
from society.schemas.auth_schemas import MessageResponse
from society.schemas.user_schemas import (
    ChangePasswordRequest,
    ProfileUpdate,
    ResetPasswordRequest,
    UserResponse,
    UserSearchResult,
)
from society.services.user_service import UserService

router = APIRouter()


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)
):
    """Profile of the signed-in user"""
    service = UserService(db)
    return service.get_profile(principal)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Update name, phone, and avatar"""
    service = UserService(db)
    return service.update_profile(data, principal)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    service.change_password(data, principal)
    return {"message": "Password updated successfully"}


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(data: ResetPasswordRequest, db: Session = Depends(get_db)):
    """
    Reset a password by email.

    Public endpoint; the response does not reveal whether the email exists.
    """
    service = UserService(db)
    return {"message": service.reset_password(data)}


@router.get("/search", response_model=list[UserSearchResult])
async def search_users(
    q: str | None = Query(None, max_length=100),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Find other users of the caller's site by name"""
    service = UserService(db)
    return service.search_users(q, principal)
