from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.user_schemas import (
    UserCreate,
    UserMutationResponse,
    UserResponse,
    UserUpdate,
)
from society.services.user_service import UserService

router = APIRouter()

admin_only = require_roles(Role.ADMIN)


@router.get("", response_model=list[UserResponse])
async def list_users(principal: Principal = Depends(admin_only), db: Session = Depends(get_db)):
    """Users of the admin's site, newest first"""
    service = UserService(db)
    return service.list_site_users(principal)


@router.post("", response_model=UserMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate, principal: Principal = Depends(admin_only), db: Session = Depends(get_db)
):
    """Create a user in the admin's site"""
    service = UserService(db)
    user = service.create_user(data, principal)
    return {"message": "User created successfully", "user": user}


@router.put("/{user_id}", response_model=UserMutationResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    principal: Principal = Depends(admin_only),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    user = service.update_user(user_id, data, principal)
    return {"message": "User updated successfully", "user": user}
