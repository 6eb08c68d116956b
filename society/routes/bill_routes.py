from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from society.core.server_log import ServerLogSource
from society.database import get_db
from society.dependencies import get_server_log, require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.bill_schemas import (
    BillGenerateRequest,
    BillGenerateResponse,
    BillPayRequest,
    BillResponse,
    BillWithResidentResponse,
)
from society.services.billing_service import BillingService

router = APIRouter()

billing_staff = require_roles(Role.ADMIN, Role.ACCOUNTANT)


@router.get("", response_model=list[BillWithResidentResponse])
async def list_bills(principal: Principal = Depends(billing_staff), db: Session = Depends(get_db)):
    """Bills of the caller's site with resident names"""
    service = BillingService(db)
    return service.list_site_bills(principal)


@router.post("/generate", response_model=BillGenerateResponse, status_code=status.HTTP_201_CREATED)
async def generate_bills(
    data: BillGenerateRequest,
    principal: Principal = Depends(billing_staff),
    db: Session = Depends(get_db),
    server_log: ServerLogSource = Depends(get_server_log),
):
    """
    Raise one bill per resident for the given month and year.

    Residents already billed for that period are skipped.
    """
    service = BillingService(db, server_log)
    count = service.generate_bills(data, principal)
    return {"message": f"{count} bills generated successfully.", "count": count}


@router.put("/{bill_id}/pay", response_model=BillResponse)
async def pay_bill(
    bill_id: int,
    data: BillPayRequest,
    principal: Principal = Depends(require_roles(Role.RESIDENT)),
    db: Session = Depends(get_db),
):
    """Pay one of the caller's own bills"""
    service = BillingService(db)
    return service.pay_bill(bill_id, data, principal)


@router.put("/{bill_id}/approve", response_model=BillResponse)
async def approve_bill(
    bill_id: int, principal: Principal = Depends(billing_staff), db: Session = Depends(get_db)
):
    """Confirm a payment and book it in the ledger"""
    service = BillingService(db)
    return service.approve_bill(bill_id, principal)
