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
from society.services.dashboard_service import DashboardService, collection_rate, day_bounds


def principal_for(user) -> Principal:
    return Principal(user=user, claims=issue_session_claims(user))


def add_bill(db, resident, status, amount=2500, payment_date=None):
    bill = MaintenanceBill(
        site_id=resident.site_id,
        resident_id=resident.id,
        flat_number=resident.flat_number,
        amount=amount,
        month="July",
        year=2024,
        due_date=datetime(2024, 8, 10),
        status=status,
        payment_date=payment_date,
    )
    db.add(bill)
    db.commit()
    return bill


def add_complaint(db, resident, status):
    db.add(
        Complaint(
            site_id=resident.site_id,
            resident_id=resident.id,
            flat_number=resident.flat_number,
            title=f"Complaint {status.value}",
            description="details",
            category=ComplaintCategory.OTHER,
            priority=ComplaintPriority.LOW,
            status=status,
        )
    )
    db.commit()


def add_visitor(db, site, status, check_in_time, flat_number="A-101"):
    db.add(
        Visitor(
            site_id=site.id,
            name=f"Visitor {status.value}",
            phone="+91-9000000000",
            purpose="Guest",
            flat_number=flat_number,
            check_in_time=check_in_time,
            security_name="Gate Guard",
            status=status,
        )
    )
    db.commit()


class TestHelpers:
    @pytest.mark.parametrize(
        "paid,total,expected", [(0, 0, 100), (1, 2, 50), (2, 3, 67), (3, 3, 100), (0, 4, 0)]
    )
    def test_collection_rate(self, paid, total, expected):
        """Share of paid bills, 100 with no bills"""
        assert collection_rate(paid, total) == expected

    def test_day_bounds(self):
        start, end = day_bounds(datetime(2024, 7, 24, 15, 30))
        assert start == datetime(2024, 7, 24)
        assert end == datetime(2024, 7, 25)


class TestAdminDashboard:
    def test_counts_and_monthly_revenue(self, db_session, admin, resident, other_resident):
        """Admin figures cover pending bills, open complaints and this month's revenue"""
        add_bill(db_session, resident, BillStatus.PENDING)
        add_bill(db_session, resident, BillStatus.OVERDUE)
        add_bill(db_session, resident, BillStatus.PAID, payment_date=datetime(2024, 7, 5))
        add_bill(db_session, resident, BillStatus.PAID, amount=900, payment_date=datetime(2024, 6, 5))
        add_bill(db_session, other_resident, BillStatus.PENDING)
        add_complaint(db_session, resident, ComplaintStatus.OPEN)
        add_complaint(db_session, resident, ComplaintStatus.IN_PROGRESS)
        add_complaint(db_session, resident, ComplaintStatus.RESOLVED)

        data = DashboardService(db_session).admin_dashboard(
            principal_for(admin), now=datetime(2024, 7, 20)
        )

        assert data["total_residents"] == 1
        assert data["pending_bills"] == 2
        assert data["open_complaints"] == 2
        assert data["monthly_revenue"] == 2500
        assert len(data["recent_complaints"]) == 3
        assert [b.amount for b in data["recent_payments"]] == [2500, 900]

    def test_endpoint(self, client, admin_headers):
        """Empty site gives zero figures"""
        response = client.get("/api/admin/dashboard", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["total_residents"] == 0
        assert response.json()["monthly_revenue"] == 0

    def test_endpoint_role_bound(self, client, resident_headers):
        assert client.get("/api/admin/dashboard", headers=resident_headers).status_code == 403


class TestResidentDashboard:
    def test_resident_view(self, client, db_session, resident_headers, resident, site):
        """Resident sees own pending bills and flat visitors"""
        add_bill(db_session, resident, BillStatus.PENDING)
        add_bill(db_session, resident, BillStatus.PAID, payment_date=datetime(2024, 7, 5))
        add_visitor(db_session, site, VisitorStatus.PENDING, datetime(2024, 7, 24, 10))
        add_visitor(db_session, site, VisitorStatus.CHECKED_OUT, datetime(2024, 7, 23, 10))
        add_visitor(db_session, site, VisitorStatus.PENDING, datetime(2024, 7, 24, 11), "C-303")

        response = client.get("/api/resident/dashboard", headers=resident_headers)

        assert response.status_code == 200
        data = response.json()
        assert [b["status"] for b in data["pending_bills"]] == ["pending"]
        assert len(data["recent_visitors"]) == 2
        assert [v["status"] for v in data["pending_visitor_approvals"]] == ["pending"]


class TestGateDashboards:
    def test_security_dashboard(self, db_session, security, site):
        """Gate figures count today's and active visitors"""
        add_visitor(db_session, site, VisitorStatus.CHECKED_IN, datetime(2024, 7, 24, 9))
        add_visitor(db_session, site, VisitorStatus.PENDING, datetime(2024, 7, 24, 10))
        add_visitor(db_session, site, VisitorStatus.CHECKED_OUT, datetime(2024, 7, 23, 10))

        data = DashboardService(db_session).security_dashboard(
            principal_for(security), now=datetime(2024, 7, 24, 18)
        )

        assert data["active_visitors"] == 1
        assert data["today_visitors"] == 2
        assert data["pending_approvals"] == 1
        assert len(data["recent_visitors"]) == 3

    def test_receptionist_dashboard(self, db_session, receptionist, resident, site):
        """Upcoming visitors are the pre-approved ones"""
        add_visitor(db_session, site, VisitorStatus.PRE_APPROVED, datetime(2024, 7, 24, 9))
        add_visitor(db_session, site, VisitorStatus.PENDING, datetime(2024, 7, 24, 10))
        add_complaint(db_session, resident, ComplaintStatus.OPEN)

        data = DashboardService(db_session).receptionist_dashboard(
            principal_for(receptionist), now=datetime(2024, 7, 24, 18)
        )

        assert data["total_today"] == 2
        assert data["open_complaints"] == 1
        assert [v.status for v in data["upcoming_visitors"]] == [VisitorStatus.PRE_APPROVED]


class TestAccountantDashboard:
    def test_revenue_figures(self, db_session, accountant, resident):
        """Accountant sees total and monthly revenue"""
        add_bill(db_session, resident, BillStatus.PAID, payment_date=datetime(2024, 7, 5))
        add_bill(db_session, resident, BillStatus.PAID, amount=1000, payment_date=datetime(2024, 5, 5))
        add_bill(db_session, resident, BillStatus.PENDING)
        add_bill(db_session, resident, BillStatus.OVERDUE)

        data = DashboardService(db_session).accountant_dashboard(
            principal_for(accountant), now=datetime(2024, 7, 20)
        )

        assert data["total_revenue"] == 3500
        assert data["revenue_this_month"] == 2500
        assert data["pending_payments"] == 1
        assert data["overdue_bills"] == 1
        assert data["recent_transactions"][0]["title"] == "Maintenance Fee - July 2024"
        assert data["recent_transactions"][0]["status"] == "completed"


class TestSuperAdminDashboard:
    def test_platform_overview(
        self, client, db_session, superadmin_headers, resident, other_resident, site, other_site
    ):
        """Super-admin totals span every site"""
        add_bill(db_session, resident, BillStatus.PAID, payment_date=datetime(2024, 7, 5))
        add_bill(db_session, resident, BillStatus.PENDING)

        response = client.get("/api/superadmin/dashboard", headers=superadmin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_sites"] == 2
        assert data["total_residents"] == 2
        assert data["total_revenue"] == 2000
        rates = {s["name"]: s["collection_rate"] for s in data["sites"]}
        assert rates == {"Green Meadows": 50, "Blue Ridge": 100}

    def test_admin_forbidden(self, client, admin_headers):
        assert client.get("/api/superadmin/dashboard", headers=admin_headers).status_code == 403
