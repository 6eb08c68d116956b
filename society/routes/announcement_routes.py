from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import get_current_principal, require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.announcement_schemas import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
)
from society.services.announcement_service import AnnouncementService

router = APIRouter()

admin_only = require_roles(Role.ADMIN)


@router.get("", response_model=list[AnnouncementResponse])
async def list_announcements(
    principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)
):
    """
    Announcements of the caller's site.

    Admins see every announcement; other roles only those currently
    visible to them.
    """
    service = AnnouncementService(db)
    if principal.has_role(Role.ADMIN):
        return service.list_site_announcements(principal)
    return service.list_visible(principal)


@router.post("", response_model=AnnouncementResponse, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    data: AnnouncementCreate,
    principal: Principal = Depends(admin_only),
    db: Session = Depends(get_db),
):
    service = AnnouncementService(db)
    return service.create_announcement(data, principal)


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
async def get_announcement(
    announcement_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    service = AnnouncementService(db)
    return service.get_visible_announcement(announcement_id, principal)


@router.put("/{announcement_id}", response_model=AnnouncementResponse)
async def update_announcement(
    announcement_id: int,
    data: AnnouncementUpdate,
    principal: Principal = Depends(admin_only),
    db: Session = Depends(get_db),
):
    service = AnnouncementService(db)
    return service.update_announcement(announcement_id, data, principal)


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_announcement(
    announcement_id: int,
    principal: Principal = Depends(admin_only),
    db: Session = Depends(get_db),
):
    service = AnnouncementService(db)
    service.delete_announcement(announcement_id, principal)
    return None
