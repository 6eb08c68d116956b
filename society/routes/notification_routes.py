from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from society.database import get_db
from society.dependencies import get_current_principal
from society.models.principal import Principal
from society.schemas.notification_schemas import MarkReadResponse, NotificationResponse
from society.services.notification_service import NotificationService

router = APIRouter()


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)
):
    """Latest notifications of the caller, newest first"""
    service = NotificationService(db)
    return service.list_notifications(principal)


@router.post("", response_model=MarkReadResponse)
async def mark_all_read(
    principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)
):
    """Mark every unread notification of the caller as read"""
    service = NotificationService(db)
    updated = service.mark_all_read(principal)
    return {"message": "Notifications marked as read", "updated": updated}
