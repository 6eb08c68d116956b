from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import require_roles
from society.models.principal import Principal
from society.models.role import Role
from society.schemas.analytics_schemas import SiteAnalytics
from society.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("", response_model=SiteAnalytics)
async def site_analytics(
    principal: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    """Collection, complaint and visitor analytics of the caller's site"""
    service = AnalyticsService(db)
    return service.site_analytics(principal)
