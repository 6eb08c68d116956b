from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.announcement_schemas import AnnouncementResponse
from society.schemas.bill_schemas import BillResponse
from society.schemas.complaint_schemas import ComplaintResponse
from society.schemas.visitor_schemas import VisitorResponse
from society.services.announcement_service import AnnouncementService
from society.services.billing_service import BillingService
from society.services.complaint_service import ComplaintService
from society.services.visitor_service import VisitorService

router = APIRouter()

resident_only = require_roles(Role.RESIDENT)


@router.get("/bills", response_model=list[BillResponse])
async def my_bills(principal: Principal = Depends(resident_only), db: Session = Depends(get_db)):
    """The caller's bills, newest first"""
    service = BillingService(db)
    return service.list_resident_bills(principal)


@router.get("/complaints", response_model=list[ComplaintResponse])
async def my_complaints(
    principal: Principal = Depends(resident_only), db: Session = Depends(get_db)
):
    service = ComplaintService(db)
    return service.list_resident_complaints(principal)


@router.get("/visitors", response_model=list[VisitorResponse])
async def my_visitors(principal: Principal = Depends(resident_only), db: Session = Depends(get_db)):
    """Visitors of the caller's flat"""
    service = VisitorService(db)
    return service.list_flat_visitors(principal)


@router.get("/announcements", response_model=list[AnnouncementResponse])
async def my_announcements(
    principal: Principal = Depends(resident_only), db: Session = Depends(get_db)
):
    """Active, unexpired announcements addressed to residents"""
    service = AnnouncementService(db)
    return service.list_visible(principal, Role.RESIDENT)
