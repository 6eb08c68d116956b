from sqlalchemy.orm import Session

from society.core.exceptions import NotFoundException, ValidationException
from society.models.announcement import Announcement
from society.models.base import utcnow
from society.models.principal import Principal
from society.models.role import Role
from society.repositories.announcement_repository import AnnouncementRepository
from society.schemas.announcement_schemas import AnnouncementCreate, AnnouncementUpdate

ALL_ROLES = "all"


def validate_target_roles(target_roles: list[str]) -> list[str]:
    """
    Check every target is a role value or "all".

    Raises:
        ValidationException: On an unknown target
    """
    allowed = {role.value for role in Role} | {ALL_ROLES}
    unknown = [target for target in target_roles if target not in allowed]
    if unknown:
        raise ValidationException(f"Unknown target roles: {', '.join(unknown)}")
    return list(target_roles) or [ALL_ROLES]


class AnnouncementService:
    """Service layer for site announcements"""

    def __init__(self, db: Session):
        self.db = db
        self.announcement_repo = AnnouncementRepository(db)

    def list_site_announcements(self, principal: Principal) -> list[Announcement]:
        return self.announcement_repo.get_site_announcements(principal.site_id)

    def list_visible(self, principal: Principal, role: Role | None = None) -> list[Announcement]:
        """Active, unexpired announcements targeted at role (default: the caller's)"""
        role = role or principal.role
        now = utcnow()
        return [
            announcement
            for announcement in self.announcement_repo.get_site_announcements(principal.site_id)
            if announcement.is_visible_to(role.value, now)
        ]

    def get_announcement(self, announcement_id: int, principal: Principal) -> Announcement:
        announcement = self.announcement_repo.get_by_id_and_site(announcement_id, principal.site_id)
        if not announcement:
            raise NotFoundException("Announcement not found")
        return announcement

    def get_visible_announcement(self, announcement_id: int, principal: Principal) -> Announcement:
        """One announcement of the caller's site; non-admins only see what is visible to them"""
        announcement = self.get_announcement(announcement_id, principal)
        if not principal.has_role(Role.ADMIN) and not announcement.is_visible_to(
            principal.role.value, utcnow()
        ):
            raise NotFoundException("Announcement not found")
        return announcement

    def create_announcement(self, data: AnnouncementCreate, principal: Principal) -> Announcement:
        return self.announcement_repo.create(
            Announcement(
                site_id=principal.site_id,
                author_id=principal.user.id,
                title=data.title,
                content=data.content,
                category=data.category,
                target_roles=validate_target_roles(data.target_roles),
                is_active=True,
                expiry_date=data.expiry_date,
            )
        )

    def update_announcement(
        self, announcement_id: int, data: AnnouncementUpdate, principal: Principal
    ) -> Announcement:
        announcement = self.get_announcement(announcement_id, principal)

        if data.title is not None:
            announcement.title = data.title
        if data.content is not None:
            announcement.content = data.content
        if data.category is not None:
            announcement.category = data.category
        if data.target_roles is not None:
            announcement.target_roles = validate_target_roles(data.target_roles)
        if data.is_active is not None:
            announcement.is_active = data.is_active
        if data.expiry_date is not None:
            announcement.expiry_date = data.expiry_date

        return self.announcement_repo.update(announcement)

    def delete_announcement(self, announcement_id: int, principal: Principal) -> None:
        announcement = self.get_announcement(announcement_id, principal)
        self.announcement_repo.delete(announcement)
