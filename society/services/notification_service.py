from sqlalchemy.orm import Session

from society.config import settings
from society.models.notification import Notification
from society.models.principal import Principal
from society.repositories.notification_repository import NotificationRepository


class NotificationService:
    """Service layer for in-app notifications"""

    def __init__(self, db: Session):
        self.db = db
        self.notification_repo = NotificationRepository(db)

    def notify_no_commit(self, user_id: int, message: str, link: str) -> Notification:
        """
        Queue a notification inside the caller's transaction.

        The caller commits together with the record that triggered it, so a
        notification never exists without its source record (or vice versa).
        """
        return self.notification_repo.create_no_commit(
            Notification(user_id=user_id, message=message, link=link, read=False)
        )

    def list_notifications(self, principal: Principal) -> list[Notification]:
        """Latest notifications for the caller"""
        return self.notification_repo.get_for_user(principal.user.id, settings.NOTIFICATION_LIMIT)

    def mark_all_read(self, principal: Principal) -> int:
        return self.notification_repo.mark_all_read(principal.user.id)
