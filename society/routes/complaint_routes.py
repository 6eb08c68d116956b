from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.complaint_schemas import (
    ComplaintCreate,
    ComplaintResponse,
    ComplaintUpdate,
    ComplaintWithResidentResponse,
)
from society.services.complaint_service import ComplaintService

router = APIRouter()

complaint_staff = require_roles(Role.ADMIN, Role.RECEPTIONIST)


@router.get("", response_model=list[ComplaintWithResidentResponse])
async def list_complaints(
    principal: Principal = Depends(complaint_staff), db: Session = Depends(get_db)
):
    service = ComplaintService(db)
    return service.list_site_complaints(principal)


@router.post("", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
async def create_complaint(
    data: ComplaintCreate,
    principal: Principal = Depends(require_roles(Role.RESIDENT)),
    db: Session = Depends(get_db),
):
    """Raise a complaint for the caller's flat; site admins are notified"""
    service = ComplaintService(db)
    return service.create_complaint(data, principal)


@router.put("/{complaint_id}", response_model=ComplaintResponse)
async def update_complaint(
    complaint_id: int,
    data: ComplaintUpdate,
    principal: Principal = Depends(complaint_staff),
    db: Session = Depends(get_db),
):
    """Change status, priority, or assignee"""
    service = ComplaintService(db)
    return service.update_complaint(complaint_id, data, principal)
