"""Principal for request authorization."""

from dataclasses import dataclass

from society.core.security import SessionClaims
from society.models.role import Role
from society.models.user import User


@dataclass
class Principal:
    """
    Authenticated actor behind a request.

    Built from the session claims and verified against the stored user, so
    role and site always reflect the database rather than the token.

    Attributes:
        user: The authenticated User object
        claims: Decoded session claims
    """

    user: User
    claims: SessionClaims

    @property
    def role(self) -> Role:
        return Role(self.user.role)

    @property
    def site_id(self) -> int | None:
        """Tenant every site-scoped query of this principal filters on"""
        return self.user.site_id

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN

    def __repr__(self) -> str:
        return f"<Principal(user_id={self.user.id}, site_id={self.site_id}, role={self.role.value})>"
