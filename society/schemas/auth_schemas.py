from pydantic import BaseModel, Field
from society.models.role import Role


class LoginRequest(BaseModel):
    """Credentials posted to /api/auth/login"""

    email: str | None = None
    password: str | None = None


class UserSummary(BaseModel):
    """Public view of the signed-in user"""

    id: int
    email: str
    name: str
    role: Role
    flat_number: str | None = None
    site_id: int | None = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    message: str
    user: UserSummary


class SessionUser(BaseModel):
    """User identity as carried by the session claims"""

    id: str = Field(..., description="Subject ID from the session token")
    email: str
    name: str
    role: Role


class SessionResponse(BaseModel):
    user: SessionUser


class MessageResponse(BaseModel):
    message: str
