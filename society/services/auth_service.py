import logging

from sqlalchemy.orm import Session

from society.core.exceptions import UnauthorizedException, ValidationException
from society.core.security import (
    encode_session_token,
    issue_session_claims,
    verify_password,
)
from society.core.server_log import LogLevel, ServerLogSource
from society.models.user import User
from society.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and session token issuance"""

    def __init__(self, db: Session, server_log: ServerLogSource | None = None):
        self.db = db
        self.user_repo = UserRepository(db)
        self.server_log = server_log

    def authenticate(self, email: str | None, password: str | None) -> User:
        """
        Verify email/password.

        Unknown email and wrong password fail identically so callers cannot
        tell which accounts exist.

        Raises:
            ValidationException: If either field is missing
            UnauthorizedException: If the credentials do not match
        """
        if not email or not password:
            raise ValidationException("Email and password are required")

        user = self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for %s", email)
            if self.server_log is not None:
                self.server_log.append(LogLevel.WARN, f"Failed login attempt for {email}")
            raise UnauthorizedException("Invalid credentials")

        logger.info("User %s logged in as %s", user.email, user.role.value)
        return user

    def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """
        Authenticate and issue a session token.

        Returns:
            Tuple of (user, encoded session token)
        """
        user = self.authenticate(email, password)
        token = encode_session_token(issue_session_claims(user))
        return user, token
