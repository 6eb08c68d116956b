import calendar
from datetime import datetime

from sqlalchemy.orm import Session

from society.models.base import utcnow
from society.models.ledger_entry import EntryType
from society.models.principal import Principal
from society.repositories.bill_repository import BillRepository
from society.repositories.ledger_repository import LedgerRepository

REPORT_MONTHS = 6


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """[start, end) of a calendar month"""
    start = datetime(year, month, 1)
    if month == 12:
        return start, datetime(year + 1, 1, 1)
    return start, datetime(year, month + 1, 1)


def trailing_months(today: datetime, count: int) -> list[tuple[int, int]]:
    """
    The ``count`` calendar months ending with today's, oldest first.

    Returns:
        (year, month) pairs
    """
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)
    months.reverse()
    return months


class ReportService:
    """Financial reporting over bills and the ledger"""

    def __init__(self, db: Session):
        self.db = db
        self.bill_repo = BillRepository(db)
        self.ledger_repo = LedgerRepository(db)

    def financial_report(self, principal: Principal, today: datetime | None = None) -> dict:
        """
        Six-month overview of the caller's site.

        Revenue is paid bills by payment date; expenses are debit ledger
        entries. Months are labelled by their abbreviated name.

        Returns:
            Dict shaped like FinancialReport
        """
        site_id = principal.site_id
        monthly_revenue = []
        revenue_vs_expenses = []

        for year, month in trailing_months(today or utcnow(), REPORT_MONTHS):
            start, end = month_bounds(year, month)
            label = calendar.month_abbr[month]
            revenue = self.bill_repo.sum_paid(site_id, start, end)
            expenses = self.ledger_repo.sum_by_type(site_id, EntryType.DEBIT, start, end)
            monthly_revenue.append({"name": label, "revenue": revenue})
            revenue_vs_expenses.append({"name": label, "revenue": revenue, "expenses": expenses})

        expense_by_category = [
            {"name": category, "value": total}
            for category, total in self.ledger_repo.sum_by_category(site_id, EntryType.DEBIT)
        ]

        return {
            "monthly_revenue": monthly_revenue,
            "expense_by_category": expense_by_category,
            "revenue_vs_expenses": revenue_vs_expenses,
        }
