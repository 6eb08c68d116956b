from datetime import datetime

from society.core.security import issue_session_claims
from society.models import BillStatus, EntryType, LedgerEntry, MaintenanceBill
from society.models.principal import Principal
from society.services.report_service import ReportService, month_bounds, trailing_months


class TestMonthHelpers:
    def test_month_bounds(self):
        assert month_bounds(2024, 7) == (datetime(2024, 7, 1), datetime(2024, 8, 1))

    def test_december_rolls_over(self):
        """December ends at the next new year"""
        assert month_bounds(2024, 12) == (datetime(2024, 12, 1), datetime(2025, 1, 1))

    def test_trailing_months_cross_year(self):
        """Window crosses the year boundary"""
        assert trailing_months(datetime(2024, 2, 15), 6) == [
            (2023, 9),
            (2023, 10),
            (2023, 11),
            (2023, 12),
            (2024, 1),
            (2024, 2),
        ]


class TestFinancialReport:
    def test_six_month_window(self, db_session, accountant, resident, site):
        """Revenue and expenses are bucketed by month"""
        db_session.add_all(
            [
                MaintenanceBill(
                    site_id=site.id,
                    resident_id=resident.id,
                    flat_number="A-101",
                    amount=2500,
                    month="June",
                    year=2024,
                    due_date=datetime(2024, 7, 10),
                    status=BillStatus.PAID,
                    payment_date=datetime(2024, 7, 5),
                ),
                MaintenanceBill(
                    site_id=site.id,
                    resident_id=resident.id,
                    flat_number="A-101",
                    amount=4000,
                    month="December",
                    year=2023,
                    due_date=datetime(2024, 1, 10),
                    status=BillStatus.PAID,
                    payment_date=datetime(2024, 1, 5),
                ),
                LedgerEntry(
                    site_id=site.id,
                    date=datetime(2024, 7, 8),
                    description="Salaries",
                    category="salaries",
                    entry_type=EntryType.DEBIT,
                    amount=600,
                ),
                LedgerEntry(
                    site_id=site.id,
                    date=datetime(2024, 6, 8),
                    description="Power",
                    category="utilities",
                    entry_type=EntryType.DEBIT,
                    amount=200,
                ),
                LedgerEntry(
                    site_id=site.id,
                    date=datetime(2024, 7, 9),
                    description="Hall booking",
                    category="facility_booking",
                    entry_type=EntryType.CREDIT,
                    amount=5000,
                ),
            ]
        )
        db_session.commit()
        principal = Principal(user=accountant, claims=issue_session_claims(accountant))

        report = ReportService(db_session).financial_report(principal, today=datetime(2024, 7, 20))

        assert [m["name"] for m in report["monthly_revenue"]] == [
            "Feb",
            "Mar",
            "Apr",
            "May",
            "Jun",
            "Jul",
        ]
        assert report["monthly_revenue"][-1]["revenue"] == 2500
        assert sum(m["revenue"] for m in report["monthly_revenue"]) == 2500
        assert report["revenue_vs_expenses"][-1] == {"name": "Jul", "revenue": 2500, "expenses": 600}
        assert report["revenue_vs_expenses"][-2]["expenses"] == 200
        assert report["expense_by_category"] == [
            {"name": "salaries", "value": 600},
            {"name": "utilities", "value": 200},
        ]

    def test_endpoint_access(self, client, admin_headers, accountant_headers, resident_headers):
        """Accountants and admins can read the report"""
        assert client.get("/api/reports/financial", headers=admin_headers).status_code == 200
        response = client.get("/api/reports/financial", headers=accountant_headers)
        assert len(response.json()["monthly_revenue"]) == 6
        assert client.get("/api/reports/financial", headers=resident_headers).status_code == 403
