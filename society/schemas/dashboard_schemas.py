from datetime import datetime
from pydantic import BaseModel

from society.models.complaint import ComplaintPriority, ComplaintStatus
from society.schemas.announcement_schemas import AnnouncementResponse
from society.schemas.bill_schemas import BillResponse
from society.schemas.complaint_schemas import ComplaintResponse
from society.schemas.visitor_schemas import VisitorResponse


class RecentComplaint(BaseModel):
    id: int
    title: str
    priority: ComplaintPriority
    status: ComplaintStatus
    flat_number: str

    model_config = {"from_attributes": True}


class RecentPayment(BaseModel):
    id: int
    flat_number: str
    amount: float
    payment_date: datetime | None

    model_config = {"from_attributes": True}


class AdminDashboard(BaseModel):
    total_residents: int
    pending_bills: int
    open_complaints: int
    monthly_revenue: float
    recent_complaints: list[RecentComplaint]
    recent_payments: list[RecentPayment]


class CommunityEvent(BaseModel):
    id: int
    content: str
    event_date: datetime | None
    event_location: str | None
    author_name: str


class ResidentDashboard(BaseModel):
    pending_bills: list[BillResponse]
    my_complaints: list[ComplaintResponse]
    recent_visitors: list[VisitorResponse]
    announcements: list[AnnouncementResponse]
    community_events: list[CommunityEvent]
    pending_visitor_approvals: list[VisitorResponse]


class SecurityDashboard(BaseModel):
    active_visitors: int
    today_visitors: int
    pending_approvals: int
    recent_visitors: list[VisitorResponse]


class ReceptionistDashboard(BaseModel):
    active_visitors: int
    total_today: int
    open_complaints: int
    upcoming_visitors: list[VisitorResponse]


class AccountantTransaction(BaseModel):
    id: int
    title: str
    amount: float
    status: str
    created_at: datetime | None


class AccountantDashboard(BaseModel):
    total_revenue: float
    revenue_this_month: float
    pending_payments: int
    overdue_bills: int
    recent_transactions: list[AccountantTransaction]


class SiteStats(BaseModel):
    id: int
    name: str
    address: str
    subscription_tier: str
    subscription_fee: float
    total_residents: int
    open_complaints: int
    collection_rate: int


class SuperAdminDashboard(BaseModel):
    total_sites: int
    total_residents: int
    total_revenue: float
    sites: list[SiteStats]
