from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from society.models.base import utcnow
from society.models.bill import BillStatus
from society.models.complaint import ComplaintStatus
from society.models.principal import Principal
from society.models.role import Role
from society.models.visitor import VisitorStatus
from society.repositories.bill_repository import BillRepository
from society.repositories.community_repository import CommunityRepository
from society.repositories.complaint_repository import ComplaintRepository
from society.repositories.site_repository import SiteRepository
from society.repositories.user_repository import UserRepository
from society.repositories.visitor_repository import VisitorRepository
from society.services.announcement_service import AnnouncementService
from society.services.community_service import UNKNOWN_AUTHOR
from society.services.report_service import month_bounds

RECENT_LIMIT = 5
OPEN_COMPLAINT_STATUSES = [ComplaintStatus.OPEN, ComplaintStatus.IN_PROGRESS]


def day_bounds(now: datetime) -> tuple[datetime, datetime]:
    start = datetime(now.year, now.month, now.day)
    return start, start + timedelta(days=1)


def collection_rate(paid: int, total: int) -> int:
    """Percentage of bills paid; 100 when nothing has been billed"""
    if total == 0:
        return 100
    return round(paid / total * 100)


class DashboardService:
    """Per-role dashboard aggregates"""

    def __init__(self, db: Session):
        self.db = db
        self.bill_repo = BillRepository(db)
        self.complaint_repo = ComplaintRepository(db)
        self.visitor_repo = VisitorRepository(db)
        self.user_repo = UserRepository(db)
        self.site_repo = SiteRepository(db)
        self.community_repo = CommunityRepository(db)

    def admin_dashboard(self, principal: Principal, now: datetime | None = None) -> dict:
        site_id = principal.site_id
        start, end = month_bounds(*_year_month(now or utcnow()))
        return {
            "total_residents": self.user_repo.count_by_role(Role.RESIDENT, site_id),
            "pending_bills": self.bill_repo.count_by_status(
                site_id, [BillStatus.PENDING, BillStatus.OVERDUE]
            ),
            "open_complaints": self.complaint_repo.count_by_status(site_id, OPEN_COMPLAINT_STATUSES),
            "monthly_revenue": self.bill_repo.sum_paid(site_id, start, end),
            "recent_complaints": self.complaint_repo.get_site_complaints(site_id, limit=3),
            "recent_payments": self.bill_repo.get_recent_paid(site_id, 3),
        }

    def resident_dashboard(self, principal: Principal, now: datetime | None = None) -> dict:
        now = now or utcnow()
        site_id = principal.site_id
        user = principal.user

        if user.flat_number:
            recent_visitors = self.visitor_repo.get_flat_visitors(
                site_id, user.flat_number, limit=RECENT_LIMIT
            )
            pending_approvals = self.visitor_repo.get_flat_visitors(
                site_id, user.flat_number, status=VisitorStatus.PENDING
            )
        else:
            recent_visitors, pending_approvals = [], []

        names = {u.id: u.name for u in self.user_repo.get_site_users(site_id)}
        events = [
            {
                "id": post.id,
                "content": post.content,
                "event_date": post.event_date,
                "event_location": post.event_location,
                "author_name": names.get(post.author_id, UNKNOWN_AUTHOR),
            }
            for post in self.community_repo.get_upcoming_events(site_id, now, 3)
        ]

        announcements = AnnouncementService(self.db).list_visible(principal, Role.RESIDENT)

        return {
            "pending_bills": self.bill_repo.get_resident_bills(
                user.id, [BillStatus.PENDING, BillStatus.OVERDUE]
            ),
            "my_complaints": self.complaint_repo.get_resident_complaints(user.id, RECENT_LIMIT),
            "recent_visitors": recent_visitors,
            "announcements": announcements[:RECENT_LIMIT],
            "community_events": events,
            "pending_visitor_approvals": pending_approvals,
        }

    def security_dashboard(self, principal: Principal, now: datetime | None = None) -> dict:
        site_id = principal.site_id
        start, end = day_bounds(now or utcnow())
        return {
            "active_visitors": self.visitor_repo.count_by_status(site_id, VisitorStatus.CHECKED_IN),
            "today_visitors": self.visitor_repo.count_checked_in_between(site_id, start, end),
            "pending_approvals": self.visitor_repo.count_by_status(site_id, VisitorStatus.PENDING),
            "recent_visitors": self.visitor_repo.get_site_visitors(site_id, limit=RECENT_LIMIT),
        }

    def receptionist_dashboard(self, principal: Principal, now: datetime | None = None) -> dict:
        site_id = principal.site_id
        start, end = day_bounds(now or utcnow())
        return {
            "active_visitors": self.visitor_repo.count_by_status(site_id, VisitorStatus.CHECKED_IN),
            "total_today": self.visitor_repo.count_checked_in_between(site_id, start, end),
            "open_complaints": self.complaint_repo.count_by_status(site_id, OPEN_COMPLAINT_STATUSES),
            "upcoming_visitors": self.visitor_repo.get_site_visitors(
                site_id, limit=RECENT_LIMIT, status=VisitorStatus.PRE_APPROVED
            ),
        }

    def accountant_dashboard(self, principal: Principal, now: datetime | None = None) -> dict:
        site_id = principal.site_id
        start, end = month_bounds(*_year_month(now or utcnow()))
        transactions = [
            {
                "id": bill.id,
                "title": f"Maintenance Fee - {bill.month} {bill.year}",
                "amount": bill.amount,
                "status": "completed",
                "created_at": bill.payment_date,
            }
            for bill in self.bill_repo.get_recent_paid(site_id, RECENT_LIMIT)
        ]
        return {
            "total_revenue": self.bill_repo.sum_paid(site_id),
            "revenue_this_month": self.bill_repo.sum_paid(site_id, start, end),
            "pending_payments": self.bill_repo.count_by_status(site_id, [BillStatus.PENDING]),
            "overdue_bills": self.bill_repo.count_by_status(site_id, [BillStatus.OVERDUE]),
            "recent_transactions": transactions,
        }

    def superadmin_dashboard(self) -> dict:
        """Platform-wide overview across every site"""
        site_stats = []
        for site in self.site_repo.get_all():
            total_bills = self.bill_repo.count_by_status(site.id)
            paid_bills = self.bill_repo.count_by_status(site.id, [BillStatus.PAID])
            site_stats.append(
                {
                    "id": site.id,
                    "name": site.name,
                    "address": site.address,
                    "subscription_tier": site.subscription_tier.value,
                    "subscription_fee": site.subscription_fee or 0,
                    "total_residents": self.user_repo.count_by_role(Role.RESIDENT, site.id),
                    "open_complaints": self.complaint_repo.count_by_status(
                        site.id, OPEN_COMPLAINT_STATUSES
                    ),
                    "collection_rate": collection_rate(paid_bills, total_bills),
                }
            )

        return {
            "total_sites": len(site_stats),
            "total_residents": sum(s["total_residents"] for s in site_stats),
            "total_revenue": sum(s["subscription_fee"] for s in site_stats),
            "sites": site_stats,
        }


def _year_month(now: datetime) -> tuple[int, int]:
    return now.year, now.month
