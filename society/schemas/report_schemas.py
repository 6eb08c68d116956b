from pydantic import BaseModel


class MonthlyRevenue(BaseModel):
    name: str
    revenue: float


class CategoryTotal(BaseModel):
    name: str
    value: float


class RevenueVsExpenses(BaseModel):
    name: str
    revenue: float
    expenses: float


class FinancialReport(BaseModel):
    """Six-month financial overview of one site"""

    monthly_revenue: list[MonthlyRevenue]
    expense_by_category: list[CategoryTotal]
    revenue_vs_expenses: list[RevenueVsExpenses]
