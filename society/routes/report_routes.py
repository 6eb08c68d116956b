from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.report_schemas import FinancialReport
from society.services.report_service import ReportService

router = APIRouter()


@router.get("/financial", response_model=FinancialReport)
async def financial_report(
    principal: Principal = Depends(require_roles(Role.ACCOUNTANT, Role.ADMIN)),
    db: Session = Depends(get_db),
):
    """Revenue and expenses over the last six months"""
    service = ReportService(db)
    return service.financial_report(principal)
