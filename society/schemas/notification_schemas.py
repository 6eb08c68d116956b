from datetime import datetime
from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: int
    message: str
    link: str
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class MarkReadResponse(BaseModel):
    message: str
    updated: int
