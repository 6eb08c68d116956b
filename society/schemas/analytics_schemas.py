from pydantic import BaseModel

from society.models.complaint import ComplaintCategory


class AnalyticsOverview(BaseModel):
    total_revenue: float
    total_complaints: int
    total_visitors: int
    total_bills: int
    collection_rate: int


class CategoryShare(BaseModel):
    category: ComplaintCategory
    count: int
    percentage: int


class PaymentStatusBreakdown(BaseModel):
    paid: int
    pending: int
    overdue: int
    pending_confirmation: int
    paid_percentage: int
    pending_percentage: int
    overdue_percentage: int


class DailyVisitors(BaseModel):
    day: str
    count: int


class SiteAnalytics(BaseModel):
    """Analytics of one site for its administrators"""

    overview: AnalyticsOverview
    complaints_by_category: list[CategoryShare]
    payment_status: PaymentStatusBreakdown
    visitor_trends: list[DailyVisitors]
