from datetime import datetime
from pydantic import BaseModel, Field
from society.models.site import SubscriptionTier
from society.schemas.user_schemas import EMAIL_PATTERN


class SiteCreate(BaseModel):
    """New site plus its first admin account"""

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    total_blocks: int = Field(..., ge=1)
    floors_per_block: int = Field(..., ge=1)
    units_per_floor: int = Field(..., ge=1)
    admin_name: str = Field(..., min_length=1, max_length=255)
    admin_email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    subscription_tier: SubscriptionTier
    subscription_fee: float = Field(default=0.0, ge=0)
    subscription_end_date: datetime


class SiteUpdate(BaseModel):
    """Editable site fields; the admin email is fixed at creation"""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1, max_length=500)
    total_blocks: int | None = Field(None, ge=1)
    floors_per_block: int | None = Field(None, ge=1)
    units_per_floor: int | None = Field(None, ge=1)
    admin_name: str | None = Field(None, min_length=1, max_length=255)
    subscription_tier: SubscriptionTier | None = None
    subscription_fee: float | None = Field(None, ge=0)
    subscription_end_date: datetime | None = None


class SiteResponse(BaseModel):
    id: int
    name: str
    address: str
    total_blocks: int
    floors_per_block: int
    units_per_floor: int
    admin_name: str
    admin_email: str
    subscription_tier: SubscriptionTier
    subscription_start: datetime
    subscription_end: datetime
    subscription_fee: float
    total_units: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SiteCreateResponse(BaseModel):
    message: str
    site: SiteResponse
    admin_user_id: int


class SiteDeleteResponse(BaseModel):
    message: str
    deleted_site_id: int
    removed_records: dict[str, int]
