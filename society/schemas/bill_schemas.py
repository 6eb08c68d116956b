from datetime import datetime
from pydantic import BaseModel, Field
from society.models.bill import BillStatus, PaymentMethod


class BillGenerateRequest(BaseModel):
    """Raise one bill per resident for a billing period"""

    month: str = Field(..., min_length=1, max_length=20)
    year: int = Field(..., ge=2000, le=2100)
    amount: float = Field(..., gt=0)
    due_date: datetime


class BillGenerateResponse(BaseModel):
    message: str
    count: int


class BillPayRequest(BaseModel):
    payment_method: PaymentMethod


class BillResponse(BaseModel):
    id: int
    site_id: int | None
    resident_id: int
    flat_number: str
    amount: float
    month: str
    year: int
    due_date: datetime
    status: BillStatus
    payment_date: datetime | None
    payment_id: str | None
    payment_method: PaymentMethod | None
    created_at: datetime

    model_config = {"from_attributes": True}


class BillWithResidentResponse(BillResponse):
    resident_name: str
