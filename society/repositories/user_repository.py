from sqlalchemy.orm import Session
from society.models.user import User
from society.models.role import Role


class UserRepository:
    """Repository for User model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        """Get user by internal ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        """Get user by email (unique across all sites)"""
        return self.db.query(User).filter(User.email == email).first()

    def get_by_id_and_site(self, user_id: int, site_id: int | None) -> User | None:
        """Get user by ID, only if it belongs to the given site"""
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.site_id == site_id)
            .first()
        )

    def get_site_users(self, site_id: int | None) -> list[User]:
        """All users of a site, newest first"""
        return (
            self.db.query(User)
            .filter(User.site_id == site_id)
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    def get_site_users_by_role(self, site_id: int | None, role: Role) -> list[User]:
        return (
            self.db.query(User)
            .filter(User.site_id == site_id, User.role == role)
            .order_by(User.id)
            .all()
        )

    def get_resident_by_flat(self, site_id: int | None, flat_number: str) -> User | None:
        return (
            self.db.query(User)
            .filter(
                User.site_id == site_id,
                User.role == Role.RESIDENT,
                User.flat_number == flat_number,
            )
            .first()
        )

    def search_site_users(
        self, site_id: int | None, exclude_user_id: int, query: str | None, limit: int = 20
    ) -> list[User]:
        """
        Find users of a site by name (case-insensitive substring).

        Args:
            site_id: Site to search in
            exclude_user_id: Caller's own ID, never returned
            query: Name fragment; None or empty matches everyone
            limit: Max results

        Returns:
            Matching users ordered by name
        """
        q = self.db.query(User).filter(User.site_id == site_id, User.id != exclude_user_id)
        if query:
            pattern = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            q = q.filter(User.name.ilike(f"%{pattern}%", escape="\\"))
        return q.order_by(User.name).limit(limit).all()

    def count_by_role(self, role: Role, site_id: int | None) -> int:
        return self.db.query(User).filter(User.role == role, User.site_id == site_id).count()

    def create_no_commit(self, user: User) -> User:
        """Create user without committing (for atomic ops)"""
        self.db.add(user)
        self.db.flush()
        return user

    def create(self, user: User) -> User:
        """
        Create a new user.

        Raises:
            IntegrityError: If the email already exists
        """
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User) -> User:
        self.db.commit()
        self.db.refresh(user)
        return user
