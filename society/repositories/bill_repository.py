from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from society.models.bill import MaintenanceBill, BillStatus


class BillRepository:
    """Repository for MaintenanceBill model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id_and_site(self, bill_id: int, site_id: int | None) -> MaintenanceBill | None:
        """Get bill only if it belongs to the given site (tenant isolation)"""
        return (
            self.db.query(MaintenanceBill)
            .filter(MaintenanceBill.id == bill_id, MaintenanceBill.site_id == site_id)
            .first()
        )

    def get_site_bills(self, site_id: int | None) -> list[MaintenanceBill]:
        """All bills of a site, latest billing period first"""
        return (
            self.db.query(MaintenanceBill)
            .filter(MaintenanceBill.site_id == site_id)
            .order_by(
                MaintenanceBill.year.desc(),
                MaintenanceBill.due_date.desc(),
                MaintenanceBill.id.desc(),
            )
            .all()
        )

    def get_resident_bills(
        self, resident_id: int, statuses: list[BillStatus] | None = None
    ) -> list[MaintenanceBill]:
        q = self.db.query(MaintenanceBill).filter(MaintenanceBill.resident_id == resident_id)
        if statuses:
            q = q.filter(MaintenanceBill.status.in_(statuses))
            return q.order_by(MaintenanceBill.due_date.asc()).all()
        return q.order_by(
            MaintenanceBill.year.desc(), MaintenanceBill.due_date.desc(), MaintenanceBill.id.desc()
        ).all()

    def exists_for_period(self, resident_id: int, month: str, year: int) -> bool:
        return (
            self.db.query(MaintenanceBill.id)
            .filter(
                MaintenanceBill.resident_id == resident_id,
                MaintenanceBill.month == month,
                MaintenanceBill.year == year,
            )
            .first()
            is not None
        )

    def count_by_status(
        self,
        site_id: int | None,
        statuses: list[BillStatus] | None = None,
    ) -> int:
        q = self.db.query(MaintenanceBill).filter(MaintenanceBill.site_id == site_id)
        if statuses:
            q = q.filter(MaintenanceBill.status.in_(statuses))
        return q.count()

    def sum_paid(
        self,
        site_id: int | None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> float:
        """
        Total amount of paid bills, optionally by payment date window.

        Args:
            site_id: Site to aggregate
            start: Inclusive lower bound on payment_date
            end: Exclusive upper bound on payment_date
        """
        q = self.db.query(func.coalesce(func.sum(MaintenanceBill.amount), 0)).filter(
            MaintenanceBill.site_id == site_id,
            MaintenanceBill.status == BillStatus.PAID,
        )
        if start is not None:
            q = q.filter(MaintenanceBill.payment_date >= start)
        if end is not None:
            q = q.filter(MaintenanceBill.payment_date < end)
        return float(q.scalar() or 0)

    def get_recent_paid(self, site_id: int | None, limit: int) -> list[MaintenanceBill]:
        return (
            self.db.query(MaintenanceBill)
            .filter(
                MaintenanceBill.site_id == site_id,
                MaintenanceBill.status == BillStatus.PAID,
            )
            .order_by(MaintenanceBill.payment_date.desc())
            .limit(limit)
            .all()
        )

    def create_no_commit(self, bill: MaintenanceBill) -> MaintenanceBill:
        """Create bill without committing (for atomic ops)"""
        self.db.add(bill)
        self.db.flush()
        return bill

    def update(self, bill: MaintenanceBill) -> MaintenanceBill:
        self.db.commit()
        self.db.refresh(bill)
        return bill
