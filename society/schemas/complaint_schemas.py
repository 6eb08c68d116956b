from datetime import datetime
from pydantic import BaseModel, Field
from society.models.complaint import ComplaintCategory, ComplaintPriority, ComplaintStatus


class ComplaintCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=5000)
    category: ComplaintCategory
    priority: ComplaintPriority = ComplaintPriority.MEDIUM


class ComplaintUpdate(BaseModel):
    """Staff-side update; status changes are plain overwrites"""

    status: ComplaintStatus | None = None
    priority: ComplaintPriority | None = None
    assigned_to: str | None = Field(None, max_length=255)


class ComplaintResponse(BaseModel):
    id: int
    site_id: int | None
    resident_id: int
    flat_number: str
    title: str
    description: str
    category: ComplaintCategory
    priority: ComplaintPriority
    status: ComplaintStatus
    assigned_to: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ComplaintWithResidentResponse(ComplaintResponse):
    resident_name: str
