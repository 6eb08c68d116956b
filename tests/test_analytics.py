from datetime import datetime

import pytest

from society.core.security import issue_session_claims
from society.models import (
    BillStatus,
    Complaint,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    MaintenanceBill,
    Visitor,
    VisitorStatus,
)
from society.models.principal import Principal
from society.services.analytics_service import AnalyticsService, percentage, start_of_week


def add_bill(db, resident, status, amount=2500):
    db.add(
        MaintenanceBill(
            site_id=resident.site_id,
            resident_id=resident.id,
            flat_number=resident.flat_number,
            amount=amount,
            month="July",
            year=2024,
            due_date=datetime(2024, 8, 10),
            status=status,
            payment_date=datetime(2024, 7, 5) if status == BillStatus.PAID else None,
        )
    )


def add_complaint(db, resident, category):
    db.add(
        Complaint(
            site_id=resident.site_id,
            resident_id=resident.id,
            flat_number=resident.flat_number,
            title=f"{category.value} issue",
            description="details",
            category=category,
            priority=ComplaintPriority.LOW,
            status=ComplaintStatus.OPEN,
        )
    )


def add_visitor(db, site, check_in_time):
    db.add(
        Visitor(
            site_id=site.id,
            name="Guest",
            phone="+91-9000000000",
            purpose="Guest",
            flat_number="A-101",
            check_in_time=check_in_time,
            security_name="Gate Guard",
            status=VisitorStatus.CHECKED_IN,
        )
    )


class TestHelpers:
    @pytest.mark.parametrize(
        "part,whole,expected", [(0, 0, 0), (1, 2, 50), (2, 3, 67), (1, 3, 33), (1, 8, 13)]
    )
    def test_percentage(self, part, whole, expected):
        """Halves round up, nothing billed is 0"""
        assert percentage(part, whole) == expected

    @pytest.mark.parametrize(
        "today",
        [datetime(2024, 7, 21, 8), datetime(2024, 7, 24, 15, 30), datetime(2024, 7, 27, 23)],
    )
    def test_week_starts_on_sunday(self, today):
        assert start_of_week(today) == datetime(2024, 7, 21)


class TestSiteAnalytics:
    def test_aggregates_site_records(
        self, db_session, admin, resident, other_resident, site, other_site
    ):
        """Totals, shares and this week's check-ins of the admin's site"""
        add_bill(db_session, resident, BillStatus.PAID, 2500)
        add_bill(db_session, resident, BillStatus.PAID, 1500)
        add_bill(db_session, resident, BillStatus.PENDING)
        add_bill(db_session, resident, BillStatus.OVERDUE)
        add_bill(db_session, other_resident, BillStatus.PAID, 9999)
        add_complaint(db_session, resident, ComplaintCategory.PLUMBING)
        add_complaint(db_session, resident, ComplaintCategory.PLUMBING)
        add_complaint(db_session, resident, ComplaintCategory.ELECTRICAL)
        add_complaint(db_session, other_resident, ComplaintCategory.CLEANING)
        add_visitor(db_session, site, datetime(2024, 7, 20, 18))
        add_visitor(db_session, site, datetime(2024, 7, 21, 10))
        add_visitor(db_session, site, datetime(2024, 7, 24, 9))
        add_visitor(db_session, site, datetime(2024, 7, 24, 11))
        add_visitor(db_session, other_site, datetime(2024, 7, 24, 11))
        db_session.commit()
        principal = Principal(user=admin, claims=issue_session_claims(admin))

        analytics = AnalyticsService(db_session).site_analytics(
            principal, today=datetime(2024, 7, 24, 15)
        )

        assert analytics["overview"] == {
            "total_revenue": 4000,
            "total_complaints": 3,
            "total_visitors": 4,
            "total_bills": 4,
            "collection_rate": 50,
        }
        assert analytics["complaints_by_category"] == [
            {"category": ComplaintCategory.PLUMBING, "count": 2, "percentage": 67},
            {"category": ComplaintCategory.ELECTRICAL, "count": 1, "percentage": 33},
        ]
        assert analytics["payment_status"] == {
            "paid": 2,
            "pending": 1,
            "overdue": 1,
            "pending_confirmation": 0,
            "paid_percentage": 50,
            "pending_percentage": 25,
            "overdue_percentage": 25,
        }
        assert analytics["visitor_trends"] == [
            {"day": "Sun", "count": 1},
            {"day": "Mon", "count": 0},
            {"day": "Tue", "count": 0},
            {"day": "Wed", "count": 2},
            {"day": "Thu", "count": 0},
            {"day": "Fri", "count": 0},
            {"day": "Sat", "count": 0},
        ]

    def test_empty_site(self, db_session, admin):
        """A site with no records reports zeros"""
        principal = Principal(user=admin, claims=issue_session_claims(admin))

        analytics = AnalyticsService(db_session).site_analytics(principal)

        assert analytics["overview"]["collection_rate"] == 0
        assert analytics["complaints_by_category"] == []
        assert analytics["payment_status"]["paid_percentage"] == 0
        assert len(analytics["visitor_trends"]) == 7


class TestAnalyticsEndpoint:
    """GET /api/analytics"""

    def test_admin(self, client, db_session, admin_headers, resident):
        add_bill(db_session, resident, BillStatus.PAID, 2500)
        db_session.commit()

        response = client.get("/api/analytics", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["overview"]["total_revenue"] == 2500
        assert data["overview"]["collection_rate"] == 100
        assert [d["day"] for d in data["visitor_trends"]][0] == "Sun"

    @pytest.mark.parametrize("role_headers", ["resident_headers", "accountant_headers"])
    def test_admin_only(self, client, request, role_headers):
        """Other roles are refused"""
        headers = request.getfixturevalue(role_headers)

        assert client.get("/api/analytics", headers=headers).status_code == 403

    def test_requires_session(self, client):
        assert client.get("/api/analytics").status_code == 401
