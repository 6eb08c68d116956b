from datetime import datetime
from pydantic import BaseModel, Field
from society.models.announcement import AnnouncementCategory


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    category: AnnouncementCategory = AnnouncementCategory.GENERAL
    target_roles: list[str] = Field(
        default_factory=lambda: ["all"], description='Role values, or "all"'
    )
    expiry_date: datetime | None = None


class AnnouncementUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    category: AnnouncementCategory | None = None
    target_roles: list[str] | None = None
    is_active: bool | None = None
    expiry_date: datetime | None = None


class AnnouncementResponse(BaseModel):
    id: int
    site_id: int | None
    author_id: int
    title: str
    content: str
    category: AnnouncementCategory
    target_roles: list[str]
    is_active: bool
    expiry_date: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}
