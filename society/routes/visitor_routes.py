from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.visitor_schemas import (
    BlacklistCreate,
    BlacklistResponse,
    VisitorCreate,
    VisitorResponse,
)
from society.services.visitor_service import VisitorService

router = APIRouter()

gate_staff = require_roles(Role.SECURITY, Role.RECEPTIONIST)
resident_only = require_roles(Role.RESIDENT)
blacklist_managers = require_roles(Role.ADMIN, Role.SECURITY)


@router.get("", response_model=list[VisitorResponse])
async def list_visitors(
    principal: Principal = Depends(require_roles(Role.ADMIN, Role.SECURITY, Role.RECEPTIONIST)),
    db: Session = Depends(get_db),
):
    """Visitor log of the caller's site, latest first"""
    service = VisitorService(db)
    return service.list_site_visitors(principal)


@router.post("", response_model=VisitorResponse, status_code=status.HTTP_201_CREATED)
async def create_visitor(
    data: VisitorCreate,
    principal: Principal = Depends(require_roles(Role.SECURITY, Role.RECEPTIONIST, Role.RESIDENT)),
    db: Session = Depends(get_db),
):
    """
    Log a visitor.

    Gate staff create pending entries for the flat's resident to decide on;
    residents create pre-approved entries for their own flat.
    """
    service = VisitorService(db)
    return service.create_visitor(data, principal)


@router.get("/blacklist", response_model=list[BlacklistResponse])
async def list_blacklist(
    principal: Principal = Depends(blacklist_managers), db: Session = Depends(get_db)
):
    service = VisitorService(db)
    return service.list_blacklist(principal)


@router.post("/blacklist", response_model=BlacklistResponse, status_code=status.HTTP_201_CREATED)
async def add_to_blacklist(
    data: BlacklistCreate,
    principal: Principal = Depends(blacklist_managers),
    db: Session = Depends(get_db),
):
    service = VisitorService(db)
    return service.add_to_blacklist(data, principal)


@router.delete("/blacklist/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_blacklist(
    entry_id: int, principal: Principal = Depends(blacklist_managers), db: Session = Depends(get_db)
):
    service = VisitorService(db)
    service.remove_from_blacklist(entry_id, principal)
    return None


@router.put("/{visitor_id}/approve", response_model=VisitorResponse)
async def approve_visitor(
    visitor_id: int, principal: Principal = Depends(resident_only), db: Session = Depends(get_db)
):
    service = VisitorService(db)
    return service.respond(visitor_id, True, principal)


@router.put("/{visitor_id}/reject", response_model=VisitorResponse)
async def reject_visitor(
    visitor_id: int, principal: Principal = Depends(resident_only), db: Session = Depends(get_db)
):
    service = VisitorService(db)
    return service.respond(visitor_id, False, principal)


@router.put("/{visitor_id}/checkin", response_model=VisitorResponse)
async def check_in_visitor(
    visitor_id: int, principal: Principal = Depends(gate_staff), db: Session = Depends(get_db)
):
    """Let an approved or pre-approved visitor in"""
    service = VisitorService(db)
    return service.check_in(visitor_id, principal)


@router.put("/{visitor_id}/checkout", response_model=VisitorResponse)
async def check_out_visitor(
    visitor_id: int, principal: Principal = Depends(gate_staff), db: Session = Depends(get_db)
):
    service = VisitorService(db)
    return service.check_out(visitor_id, principal)
