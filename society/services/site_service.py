import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from society.core.exceptions import ConflictException, NotFoundException
from society.core.security import hash_password
from society.core.server_log import LogLevel, ServerLogSource
from society.models.announcement import Announcement
from society.models.base import utcnow
from society.models.bill import MaintenanceBill
from society.models.chat import Chat, ChatMember, ChatMessage
from society.models.community import CommunityPost, PostComment, PostLike
from society.models.complaint import Complaint
from society.models.ledger_entry import LedgerEntry
from society.models.notification import Notification
from society.models.role import Role
from society.models.site import Site
from society.models.user import User
from society.models.visitor import BlacklistEntry, Visitor
from society.repositories.site_repository import SiteRepository
from society.repositories.user_repository import UserRepository
from society.schemas.site_schemas import SiteCreate, SiteUpdate

logger = logging.getLogger(__name__)

# Site-owned tables, in an order that is safe to delete from.
SITE_OWNED_MODELS = (
    ("chats", Chat),
    ("community_posts", CommunityPost),
    ("ledger_entries", LedgerEntry),
    ("maintenance_bills", MaintenanceBill),
    ("complaints", Complaint),
    ("visitors", Visitor),
    ("visitor_blacklist", BlacklistEntry),
    ("announcements", Announcement),
    ("users", User),
)


def default_admin_password(admin_email: str) -> str:
    """Initial password given to a site's first admin"""
    return f"{admin_email}123"


class SiteService:
    """Service layer for site (tenant) management by super-admins"""

    def __init__(self, db: Session, server_log: ServerLogSource | None = None):
        self.db = db
        self.site_repo = SiteRepository(db)
        self.user_repo = UserRepository(db)
        self.server_log = server_log

    def list_sites(self) -> list[Site]:
        return self.site_repo.get_all()

    def get_site(self, site_id: int) -> Site:
        site = self.site_repo.get_by_id(site_id)
        if not site:
            raise NotFoundException("Site not found")
        return site

    def create_site(self, data: SiteCreate) -> tuple[Site, User]:
        """
        Create a site and provision its first admin user.

        Both rows are written in one transaction; if either fails neither
        is kept.

        Raises:
            ConflictException: If the admin email is already in use
        """
        if self.user_repo.get_by_email(data.admin_email) or self.site_repo.get_by_admin_email(
            data.admin_email
        ):
            raise ConflictException("An admin with this email already exists.")

        try:
            site = self.site_repo.create_no_commit(
                Site(
                    name=data.name,
                    address=data.address,
                    total_blocks=data.total_blocks,
                    floors_per_block=data.floors_per_block,
                    units_per_floor=data.units_per_floor,
                    admin_name=data.admin_name,
                    admin_email=data.admin_email,
                    subscription_tier=data.subscription_tier,
                    subscription_start=utcnow(),
                    subscription_end=data.subscription_end_date,
                    subscription_fee=data.subscription_fee,
                )
            )
            admin = self.user_repo.create_no_commit(
                User(
                    name=data.admin_name,
                    email=data.admin_email,
                    password_hash=hash_password(default_admin_password(data.admin_email)),
                    role=Role.ADMIN,
                    site_id=site.id,
                    phone="0000000000",
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(site)
        self.db.refresh(admin)
        logger.info("Site %s created with admin %s", site.id, admin.email)
        return site, admin

    def update_site(self, site_id: int, data: SiteUpdate) -> Site:
        site = self.get_site(site_id)

        if data.name is not None:
            site.name = data.name
        if data.address is not None:
            site.address = data.address
        if data.total_blocks is not None:
            site.total_blocks = data.total_blocks
        if data.floors_per_block is not None:
            site.floors_per_block = data.floors_per_block
        if data.units_per_floor is not None:
            site.units_per_floor = data.units_per_floor
        if data.admin_name is not None:
            site.admin_name = data.admin_name
        if data.subscription_tier is not None:
            site.subscription_tier = data.subscription_tier
        if data.subscription_fee is not None:
            site.subscription_fee = data.subscription_fee
        if data.subscription_end_date is not None:
            site.subscription_end = data.subscription_end_date

        return self.site_repo.update(site)

    def count_dependents(self, site_id: int) -> dict[str, int]:
        """Number of rows per site-owned table that reference the site"""
        return {
            label: self.db.query(model).filter(model.site_id == site_id).count()
            for label, model in SITE_OWNED_MODELS
        }

    def delete_site(self, site_id: int, force: bool = False) -> dict[str, int]:
        """
        Delete a site.

        Without ``force`` the deletion is refused while anything still
        references the site. With ``force`` every dependent record is
        deleted together with the site in one transaction.

        Returns:
            Number of removed rows per table (site row excluded)

        Raises:
            NotFoundException: If the site does not exist
            ConflictException: If dependents exist and force is False
        """
        site = self.get_site(site_id)
        counts = self.count_dependents(site_id)
        remaining = {label: n for label, n in counts.items() if n}

        if remaining and not force:
            summary = ", ".join(f"{n} {label}" for label, n in remaining.items())
            raise ConflictException(
                f"Site still has dependent records ({summary}); "
                "delete with force=true to remove them as well"
            )

        removed: dict[str, int] = {}
        try:
            site_users = select(User.id).where(User.site_id == site_id)
            site_posts = select(CommunityPost.id).where(CommunityPost.site_id == site_id)
            site_chats = select(Chat.id).where(Chat.site_id == site_id)

            removed["chat_messages"] = (
                self.db.query(ChatMessage)
                .filter(ChatMessage.chat_id.in_(site_chats))
                .delete(synchronize_session=False)
            )
            removed["chat_members"] = (
                self.db.query(ChatMember)
                .filter(ChatMember.chat_id.in_(site_chats))
                .delete(synchronize_session=False)
            )

            removed["post_comments"] = (
                self.db.query(PostComment)
                .filter(PostComment.post_id.in_(site_posts))
                .delete(synchronize_session=False)
            )
            removed["post_likes"] = (
                self.db.query(PostLike)
                .filter(PostLike.post_id.in_(site_posts))
                .delete(synchronize_session=False)
            )
            removed["notifications"] = (
                self.db.query(Notification)
                .filter(Notification.user_id.in_(site_users))
                .delete(synchronize_session=False)
            )
            for label, model in SITE_OWNED_MODELS:
                removed[label] = (
                    self.db.query(model)
                    .filter(model.site_id == site_id)
                    .delete(synchronize_session=False)
                )

            self.site_repo.delete(site)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.warning("Site %s deleted (force=%s): %s", site_id, force, removed)
        if self.server_log is not None:
            self.server_log.append(LogLevel.WARN, f"Site {site_id} deleted")
        return removed
