from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from society.core.server_log import ServerLogSource
from society.database import get_db
from society.dependencies import get_server_log, require_roles
from society.models.role import Role
from society.schemas.site_schemas import (
    SiteCreate,
    SiteCreateResponse,
    SiteDeleteResponse,
    SiteResponse,
    SiteUpdate,
)
from society.services.site_service import SiteService

router = APIRouter(dependencies=[Depends(require_roles(Role.SUPERADMIN))])


@router.get("", response_model=list[SiteResponse])
async def list_sites(db: Session = Depends(get_db)):
    """All sites, newest first"""
    service = SiteService(db)
    return service.list_sites()


@router.post("", response_model=SiteCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_site(data: SiteCreate, db: Session = Depends(get_db)):
    """
    Create a site together with its first admin account.

    The admin signs in with the password ``<admin email>123``.
    """
    service = SiteService(db)
    site, admin = service.create_site(data)
    return {"message": "Site created successfully", "site": site, "admin_user_id": admin.id}


@router.get("/{site_id}", response_model=SiteResponse)
async def get_site(site_id: int, db: Session = Depends(get_db)):
    service = SiteService(db)
    return service.get_site(site_id)


@router.put("/{site_id}", response_model=SiteResponse)
async def update_site(site_id: int, data: SiteUpdate, db: Session = Depends(get_db)):
    service = SiteService(db)
    return service.update_site(site_id, data)


@router.delete("/{site_id}", response_model=SiteDeleteResponse)
async def delete_site(
    site_id: int,
    force: bool = Query(False, description="Also delete every record that belongs to the site"),
    db: Session = Depends(get_db),
    server_log: ServerLogSource = Depends(get_server_log),
):
    """
    Delete a site.

    Refused with 409 while users or records still reference the site,
    unless ``force=true``.
    """
    service = SiteService(db, server_log)
    removed = service.delete_site(site_id, force=force)
    return {
        "message": "Site deleted successfully",
        "deleted_site_id": site_id,
        "removed_records": removed,
    }
