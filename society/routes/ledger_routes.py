from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.ledger_schemas import LedgerEntryCreate, LedgerEntryResponse, LedgerResponse
from society.services.ledger_service import LedgerService

router = APIRouter()

ledger_staff = require_roles(Role.ADMIN, Role.ACCOUNTANT)


@router.get("", response_model=LedgerResponse)
async def get_ledger(principal: Principal = Depends(ledger_staff), db: Session = Depends(get_db)):
    """Entries newest first with running balances and totals"""
    service = LedgerService(db)
    return service.get_ledger(principal)


@router.post("", response_model=LedgerEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    data: LedgerEntryCreate,
    principal: Principal = Depends(ledger_staff),
    db: Session = Depends(get_db),
):
    service = LedgerService(db)
    return service.create_entry(data, principal)
