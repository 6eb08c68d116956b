from datetime import datetime

from sqlalchemy.orm import Session

from society.models.visitor import Visitor, VisitorStatus, BlacklistEntry


class VisitorRepository:
    """Repository for Visitor and BlacklistEntry operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id_and_site(self, visitor_id: int, site_id: int | None) -> Visitor | None:
        return (
            self.db.query(Visitor)
            .filter(Visitor.id == visitor_id, Visitor.site_id == site_id)
            .first()
        )

    def get_site_visitors(
        self,
        site_id: int | None,
        limit: int | None = None,
        status: VisitorStatus | None = None,
    ) -> list[Visitor]:
        """Visitors of a site, most recent check-in first"""
        q = self.db.query(Visitor).filter(Visitor.site_id == site_id)
        if status is not None:
            q = q.filter(Visitor.status == status)
        q = q.order_by(Visitor.check_in_time.desc(), Visitor.id.desc())
        if limit is not None:
            q = q.limit(limit)
        return q.all()

    def get_flat_visitors(
        self,
        site_id: int | None,
        flat_number: str,
        status: VisitorStatus | None = None,
        limit: int | None = None,
    ) -> list[Visitor]:
        q = self.db.query(Visitor).filter(
            Visitor.site_id == site_id, Visitor.flat_number == flat_number
        )
        if status is not None:
            q = q.filter(Visitor.status == status)
        q = q.order_by(Visitor.check_in_time.desc(), Visitor.id.desc())
        if limit is not None:
            q = q.limit(limit)
        return q.all()

    def count_by_status(self, site_id: int | None, status: VisitorStatus) -> int:
        return (
            self.db.query(Visitor)
            .filter(Visitor.site_id == site_id, Visitor.status == status)
            .count()
        )

    def count_site(self, site_id: int | None) -> int:
        return self.db.query(Visitor).filter(Visitor.site_id == site_id).count()

    def count_checked_in_between(self, site_id: int | None, start: datetime, end: datetime) -> int:
        return (
            self.db.query(Visitor)
            .filter(
                Visitor.site_id == site_id,
                Visitor.check_in_time >= start,
                Visitor.check_in_time < end,
            )
            .count()
        )

    def create_no_commit(self, visitor: Visitor) -> Visitor:
        """Create visitor without committing (for atomic ops)"""
        self.db.add(visitor)
        self.db.flush()
        return visitor

    def update(self, visitor: Visitor) -> Visitor:
        self.db.commit()
        self.db.refresh(visitor)
        return visitor

    # Blacklist

    def get_blacklist(self, site_id: int | None) -> list[BlacklistEntry]:
        return (
            self.db.query(BlacklistEntry)
            .filter(BlacklistEntry.site_id == site_id)
            .order_by(BlacklistEntry.created_at.desc(), BlacklistEntry.id.desc())
            .all()
        )

    def get_blacklist_entry(self, site_id: int | None, phone: str) -> BlacklistEntry | None:
        return (
            self.db.query(BlacklistEntry)
            .filter(BlacklistEntry.site_id == site_id, BlacklistEntry.phone == phone)
            .first()
        )

    def get_blacklist_entry_by_id(self, entry_id: int, site_id: int | None) -> BlacklistEntry | None:
        return (
            self.db.query(BlacklistEntry)
            .filter(BlacklistEntry.id == entry_id, BlacklistEntry.site_id == site_id)
            .first()
        )

    def create_blacklist_entry(self, entry: BlacklistEntry) -> BlacklistEntry:
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete_blacklist_entry(self, entry: BlacklistEntry) -> None:
        self.db.delete(entry)
        self.db.commit()
