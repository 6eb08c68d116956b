from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.dashboard_schemas import (
    AccountantDashboard,
    AdminDashboard,
    ReceptionistDashboard,
    ResidentDashboard,
    SecurityDashboard,
    SuperAdminDashboard,
)
from society.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/admin/dashboard", response_model=AdminDashboard)
async def admin_dashboard(
    principal: Principal = Depends(require_roles(Role.ADMIN)), db: Session = Depends(get_db)
):
    service = DashboardService(db)
    return service.admin_dashboard(principal)


@router.get("/resident/dashboard", response_model=ResidentDashboard)
async def resident_dashboard(
    principal: Principal = Depends(require_roles(Role.RESIDENT)), db: Session = Depends(get_db)
):
    service = DashboardService(db)
    return service.resident_dashboard(principal)


@router.get("/security/dashboard", response_model=SecurityDashboard)
async def security_dashboard(
    principal: Principal = Depends(require_roles(Role.SECURITY)), db: Session = Depends(get_db)
):
    service = DashboardService(db)
    return service.security_dashboard(principal)


@router.get("/receptionist/dashboard", response_model=ReceptionistDashboard)
async def receptionist_dashboard(
    principal: Principal = Depends(require_roles(Role.RECEPTIONIST)),
    db: Session = Depends(get_db),
):
    service = DashboardService(db)
    return service.receptionist_dashboard(principal)


@router.get("/accountant/dashboard", response_model=AccountantDashboard)
async def accountant_dashboard(
    principal: Principal = Depends(require_roles(Role.ACCOUNTANT)),
    db: Session = Depends(get_db),
):
    service = DashboardService(db)
    return service.accountant_dashboard(principal)


@router.get(
    "/superadmin/dashboard",
    response_model=SuperAdminDashboard,
    dependencies=[Depends(require_roles(Role.SUPERADMIN))],
)
async def superadmin_dashboard(db: Session = Depends(get_db)):
    """Platform-wide figures across every site"""
    service = DashboardService(db)
    return service.superadmin_dashboard()
