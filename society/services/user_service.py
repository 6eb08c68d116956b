import logging

from sqlalchemy.orm import Session

from society.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
)
from society.core.security import hash_password, verify_password
from society.models.principal import Principal
from society.models.role import Role
from society.models.user import User
from society.repositories.user_repository import UserRepository
from society.schemas.user_schemas import (
    UserCreate,
    UserUpdate,
    ProfileUpdate,
    ChangePasswordRequest,
    ResetPasswordRequest,
)

logger = logging.getLogger(__name__)

RESET_PASSWORD_MESSAGE = "If a user with that email exists, the password has been reset."


class UserService:
    """Service layer for user administration and self-service profile"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    # Self-service

    def get_profile(self, principal: Principal) -> User:
        return principal.user

    def update_profile(self, data: ProfileUpdate, principal: Principal) -> User:
        """
        Update name, phone, and avatar of the caller.

        Only fields that are present and non-empty are applied.
        """
        user = principal.user
        if data.name:
            user.name = data.name
        if data.phone:
            user.phone = data.phone
        if data.avatar:
            user.avatar = data.avatar
        return self.user_repo.update(user)

    def change_password(self, data: ChangePasswordRequest, principal: Principal) -> None:
        """
        Replace the caller's password after re-checking the current one.

        Raises:
            UnauthorizedException: If current_password does not match
        """
        user = principal.user
        if not verify_password(data.current_password, user.password_hash):
            raise UnauthorizedException("Invalid current password")

        user.password_hash = hash_password(data.new_password)
        self.user_repo.update(user)
        logger.info("Password changed for user %s", user.id)

    def reset_password(self, data: ResetPasswordRequest) -> str:
        """
        Reset a password by email.

        The response message is the same whether or not the email exists.
        """
        user = self.user_repo.get_by_email(data.email)
        if user is not None:
            user.password_hash = hash_password(data.new_password)
            self.user_repo.update(user)
            logger.info("Password reset for user %s", user.id)
        return RESET_PASSWORD_MESSAGE

    def search_users(self, query: str | None, principal: Principal) -> list[User]:
        """Other users of the caller's site whose name contains query"""
        return self.user_repo.search_site_users(principal.site_id, principal.user.id, query)

    # Site administration (ADMIN)

    def list_site_users(self, principal: Principal) -> list[User]:
        return self.user_repo.get_site_users(principal.site_id)

    def create_user(self, data: UserCreate, principal: Principal) -> User:
        """
        Create a user inside the admin's own site.

        Raises:
            ForbiddenException: If asked to create a super-admin
            ConflictException: If the email is already registered
        """
        if data.role == Role.SUPERADMIN:
            raise ForbiddenException("Site admins cannot create super-admin accounts")

        if self.user_repo.get_by_email(data.email):
            raise ConflictException("A user with this email already exists.")

        user = User(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            phone=data.phone,
            flat_number=data.flat_number,
            role=data.role,
            residency_type=data.residency_type,
            date_of_birth=data.date_of_birth,
            site_id=principal.site_id,
        )
        user = self.user_repo.create(user)
        logger.info("User %s created in site %s", user.id, user.site_id)
        return user

    def update_user(self, user_id: int, data: UserUpdate, principal: Principal) -> User:
        """
        Update a user of the admin's site.

        Raises:
            NotFoundException: If the user is not in the admin's site
            ForbiddenException: If asked to grant the super-admin role
            ConflictException: If the new email belongs to someone else
        """
        user = self.user_repo.get_by_id_and_site(user_id, principal.site_id)
        if not user:
            raise NotFoundException("User not found")

        if data.role == Role.SUPERADMIN:
            raise ForbiddenException("Site admins cannot grant the super-admin role")

        if data.email is not None and data.email != user.email:
            if self.user_repo.get_by_email(data.email):
                raise ConflictException("A user with this email already exists.")
            user.email = data.email

        if data.password:
            user.password_hash = hash_password(data.password)
        if data.name is not None:
            user.name = data.name
        if data.phone is not None:
            user.phone = data.phone
        if data.flat_number is not None:
            user.flat_number = data.flat_number
        if data.role is not None:
            user.role = data.role
        if data.residency_type is not None:
            user.residency_type = data.residency_type
        if data.date_of_birth is not None:
            user.date_of_birth = data.date_of_birth

        return self.user_repo.update(user)
