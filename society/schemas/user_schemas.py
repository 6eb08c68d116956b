from datetime import date, datetime
from pydantic import BaseModel, Field
from society.models.role import Role
from society.models.user import ResidencyType

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserResponse(BaseModel):
    """User details (never includes the password hash)"""

    id: int
    email: str
    name: str
    role: Role
    flat_number: str | None
    phone: str | None
    residency_type: ResidencyType | None
    date_of_birth: date | None
    avatar: str | None
    site_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    """Admin creates a user in their own site"""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    phone: str = Field(..., min_length=1, max_length=50)
    flat_number: str | None = Field(None, max_length=50)
    role: Role = Role.RESIDENT
    residency_type: ResidencyType | None = None
    date_of_birth: date | None = None


class UserUpdate(BaseModel):
    """Admin edits a user of their site; password is re-hashed if present"""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    password: str | None = Field(None, min_length=6, max_length=128)
    phone: str | None = Field(None, max_length=50)
    flat_number: str | None = Field(None, max_length=50)
    role: Role | None = None
    residency_type: ResidencyType | None = None
    date_of_birth: date | None = None


class UserMutationResponse(BaseModel):
    message: str
    user: UserResponse


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile"""

    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    avatar: str | None = Field(None, max_length=500)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class ResetPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    new_password: str = Field(..., min_length=6, max_length=128)


class UserSearchResult(BaseModel):
    id: int
    name: str
    flat_number: str | None
    avatar: str | None
    role: Role

    model_config = {"from_attributes": True}
