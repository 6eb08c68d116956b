from datetime import datetime
from pydantic import BaseModel, Field
from society.models.visitor import VisitorStatus


class VisitorCreate(BaseModel):
    """
    Visitor logged at the gate or pre-approved by a resident.

    Residents may omit flat_number; their own flat is used.
    """

    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    purpose: str = Field(..., min_length=1, max_length=255)
    flat_number: str | None = Field(None, max_length=50)
    vehicle_number: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=1000)


class VisitorResponse(BaseModel):
    id: int
    site_id: int | None
    name: str
    phone: str
    purpose: str
    flat_number: str
    check_in_time: datetime
    check_out_time: datetime | None
    vehicle_number: str | None
    security_name: str
    status: VisitorStatus
    approved_by: int | None
    notes: str | None

    model_config = {"from_attributes": True}


class BlacklistCreate(BaseModel):
    phone: str = Field(..., min_length=1, max_length=50)
    reason: str | None = Field(None, max_length=500)


class BlacklistResponse(BaseModel):
    id: int
    phone: str
    reason: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
