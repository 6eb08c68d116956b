from sqlalchemy import func
from sqlalchemy.orm import Session

from society.models.complaint import Complaint, ComplaintCategory, ComplaintStatus


class ComplaintRepository:
    """Repository for Complaint model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id_and_site(self, complaint_id: int, site_id: int | None) -> Complaint | None:
        return (
            self.db.query(Complaint)
            .filter(Complaint.id == complaint_id, Complaint.site_id == site_id)
            .first()
        )

    def get_site_complaints(self, site_id: int | None, limit: int | None = None) -> list[Complaint]:
        """Complaints of a site, newest first"""
        q = (
            self.db.query(Complaint)
            .filter(Complaint.site_id == site_id)
            .order_by(Complaint.created_at.desc(), Complaint.id.desc())
        )
        if limit is not None:
            q = q.limit(limit)
        return q.all()

    def get_resident_complaints(self, resident_id: int, limit: int | None = None) -> list[Complaint]:
        q = (
            self.db.query(Complaint)
            .filter(Complaint.resident_id == resident_id)
            .order_by(Complaint.created_at.desc(), Complaint.id.desc())
        )
        if limit is not None:
            q = q.limit(limit)
        return q.all()

    def count_by_status(self, site_id: int | None, statuses: list[ComplaintStatus]) -> int:
        return (
            self.db.query(Complaint)
            .filter(Complaint.site_id == site_id, Complaint.status.in_(statuses))
            .count()
        )

    def count_by_category(self, site_id: int | None) -> list[tuple[ComplaintCategory, int]]:
        """Complaint count per category, largest first"""
        count = func.count(Complaint.id)
        rows = (
            self.db.query(Complaint.category, count)
            .filter(Complaint.site_id == site_id)
            .group_by(Complaint.category)
            .order_by(count.desc(), Complaint.category)
            .all()
        )
        return [(category, total) for category, total in rows]

    def count_site(self, site_id: int | None) -> int:
        return self.db.query(Complaint).filter(Complaint.site_id == site_id).count()

    def create_no_commit(self, complaint: Complaint) -> Complaint:
        """Create complaint without committing (for atomic ops)"""
        self.db.add(complaint)
        self.db.flush()
        return complaint

    def update(self, complaint: Complaint) -> Complaint:
        self.db.commit()
        self.db.refresh(complaint)
        return complaint
