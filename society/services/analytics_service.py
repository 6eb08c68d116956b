import math
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from society.models.base import utcnow
from society.models.bill import BillStatus
from society.models.principal import Principal
from society.repositories.bill_repository import BillRepository
from society.repositories.complaint_repository import ComplaintRepository
from society.repositories.visitor_repository import VisitorRepository

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def percentage(part: int, whole: int) -> int:
    """Whole-number share of part in whole, halves rounded up; 0 when whole is 0"""
    if whole <= 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def start_of_week(today: datetime) -> datetime:
    """Midnight of the Sunday that starts today's week"""
    days_since_sunday = (today.weekday() + 1) % 7
    return datetime(today.year, today.month, today.day) - timedelta(days=days_since_sunday)


class AnalyticsService:
    """Site-wide analytics for administrators"""

    def __init__(self, db: Session):
        self.db = db
        self.bill_repo = BillRepository(db)
        self.complaint_repo = ComplaintRepository(db)
        self.visitor_repo = VisitorRepository(db)

    def site_analytics(self, principal: Principal, today: datetime | None = None) -> dict:
        """
        Overview, complaint mix, payment status and this week's visitor trend
        for the caller's site.

        Returns:
            Dict shaped like SiteAnalytics
        """
        site_id = principal.site_id

        total_bills = self.bill_repo.count_by_status(site_id)
        paid = self.bill_repo.count_by_status(site_id, [BillStatus.PAID])
        pending = self.bill_repo.count_by_status(site_id, [BillStatus.PENDING])
        overdue = self.bill_repo.count_by_status(site_id, [BillStatus.OVERDUE])
        awaiting = self.bill_repo.count_by_status(site_id, [BillStatus.PENDING_CONFIRMATION])

        by_category = self.complaint_repo.count_by_category(site_id)
        categorized = sum(count for _, count in by_category)

        return {
            "overview": {
                "total_revenue": self.bill_repo.sum_paid(site_id),
                "total_complaints": self.complaint_repo.count_site(site_id),
                "total_visitors": self.visitor_repo.count_site(site_id),
                "total_bills": total_bills,
                "collection_rate": percentage(paid, total_bills),
            },
            "complaints_by_category": [
                {"category": category, "count": count, "percentage": percentage(count, categorized)}
                for category, count in by_category
            ],
            "payment_status": {
                "paid": paid,
                "pending": pending,
                "overdue": overdue,
                "pending_confirmation": awaiting,
                "paid_percentage": percentage(paid, total_bills),
                "pending_percentage": percentage(pending, total_bills),
                "overdue_percentage": percentage(overdue, total_bills),
            },
            "visitor_trends": self._visitor_trends(site_id, today or utcnow()),
        }

    def _visitor_trends(self, site_id: int | None, today: datetime) -> list[dict]:
        """Check-ins per day of the current Sunday-to-Saturday week"""
        week_start = start_of_week(today)
        trends = []
        for offset, label in enumerate(WEEKDAY_LABELS):
            day = week_start + timedelta(days=offset)
            count = self.visitor_repo.count_checked_in_between(site_id, day, day + timedelta(days=1))
            trends.append({"day": label, "count": count})
        return trends
