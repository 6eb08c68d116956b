from sqlalchemy.orm import Session

from society.models.notification import Notification


class NotificationRepository:
    """Repository for Notification model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_for_user(self, user_id: int, limit: int) -> list[Notification]:
        """Latest notifications for a user, newest first"""
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all()
        )

    def mark_all_read(self, user_id: int) -> int:
        """
        Mark every unread notification of a user as read.

        Returns:
            Number of notifications updated
        """
        updated = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        self.db.commit()
        return updated

    def create_no_commit(self, notification: Notification) -> Notification:
        """Create notification without committing (for atomic ops)"""
        self.db.add(notification)
        return notification

