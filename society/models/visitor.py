from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import String, Integer, ForeignKey, Enum, DateTime, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from society.models.base import Base, TimestampMixin


class VisitorStatus(str, PyEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    PRE_APPROVED = "pre-approved"


class Visitor(Base, TimestampMixin):
    """
    Gate log entry for a visitor to a flat.

    Logged by security/reception as PENDING (the flat's resident decides), or
    by the resident as PRE_APPROVED.
    """

    __tablename__ = "visitors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    site_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sites.id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    purpose: Mapped[str] = mapped_column(String(255), nullable=False)
    flat_number: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    check_in_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    check_out_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    vehicle_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    security_name: Mapped[str] = mapped_column(String(255), nullable=False, default="N/A")
    status: Mapped[VisitorStatus] = mapped_column(
        Enum(VisitorStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    approved_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class BlacklistEntry(Base, TimestampMixin):
    """Phone number refused entry at one site"""

    __tablename__ = "visitor_blacklist"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    site_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sites.id"), nullable=True, index=True
    )
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (UniqueConstraint("site_id", "phone", name="uq_blacklist_site_phone"),)
