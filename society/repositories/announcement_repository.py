from sqlalchemy.orm import Session

from society.models.announcement import Announcement


class AnnouncementRepository:
    """Repository for Announcement model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id_and_site(self, announcement_id: int, site_id: int | None) -> Announcement | None:
        return (
            self.db.query(Announcement)
            .filter(Announcement.id == announcement_id, Announcement.site_id == site_id)
            .first()
        )

    def get_site_announcements(self, site_id: int | None) -> list[Announcement]:
        """Announcements of a site, newest first"""
        return (
            self.db.query(Announcement)
            .filter(Announcement.site_id == site_id)
            .order_by(Announcement.created_at.desc(), Announcement.id.desc())
            .all()
        )

    def create(self, announcement: Announcement) -> Announcement:
        self.db.add(announcement)
        self.db.commit()
        self.db.refresh(announcement)
        return announcement

    def update(self, announcement: Announcement) -> Announcement:
        self.db.commit()
        self.db.refresh(announcement)
        return announcement

    def delete(self, announcement: Announcement) -> None:
        self.db.delete(announcement)
        self.db.commit()
