from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import String, Integer, ForeignKey, Enum, DateTime, Text, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column

from society.models.base import Base, TimestampMixin


class AnnouncementCategory(str, PyEnum):
    GENERAL = "general"
    MAINTENANCE = "maintenance"
    EVENT = "event"
    EMERGENCY = "emergency"


class Announcement(Base, TimestampMixin):
    """
    Notice published by a site admin.

    target_roles holds role values plus the wildcard "all".
    """

    __tablename__ = "announcements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    site_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sites.id"), nullable=True, index=True
    )
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[AnnouncementCategory] = mapped_column(
        Enum(
            AnnouncementCategory, native_enum=False, values_callable=lambda x: [e.value for e in x]
        ),
        nullable=False,
    )
    target_roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expiry_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def is_visible_to(self, role: str, now: datetime) -> bool:
        """Active, unexpired, and targeted at role (or everyone)"""
        if not self.is_active:
            return False
        if self.expiry_date is not None and self.expiry_date <= now:
            return False
        targets = self.target_roles or []
        return role in targets or "all" in targets
