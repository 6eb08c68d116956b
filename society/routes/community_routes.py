from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import get_current_principal
from society.models.principal import Principal
from society.schemas.community_schemas import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from society.services.community_service import CommunityService

router = APIRouter()


@router.get("", response_model=list[PostResponse])
async def list_posts(
    principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)
):
    service = CommunityService(db)
    return service.list_posts(principal)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    service = CommunityService(db)
    return service.create_post(data, principal)


@router.post("/{post_id}/like", response_model=LikeResponse)
async def toggle_like(
    post_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Like the post, or take the caller's like back"""
    service = CommunityService(db)
    return service.toggle_like(post_id, principal)


@router.post(
    "/{post_id}/comment", response_model=CommentResponse, status_code=status.HTTP_201_CREATED
)
async def add_comment(
    post_id: int,
    data: CommentCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    service = CommunityService(db)
    return service.add_comment(post_id, data, principal)
