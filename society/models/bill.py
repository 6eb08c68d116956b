from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import String, Integer, Numeric, ForeignKey, Enum, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from society.models.base import Base, TimestampMixin


class BillStatus(str, PyEnum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    PENDING_CONFIRMATION = "pending_confirmation"


class PaymentMethod(str, PyEnum):
    CARD = "card"
    UPI = "upi"
    CASH = "cash"


class MaintenanceBill(Base, TimestampMixin):
    """
    Monthly maintenance charge raised against one resident's flat.

    At most one bill exists per (resident, month, year); generation skips
    residents that already have one.
    """

    __tablename__ = "maintenance_bills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    site_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sites.id"), nullable=True, index=True
    )
    resident_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    flat_number: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[float] = mapped_column(
        Numeric(precision=12, scale=2, asdecimal=False), nullable=False
    )
    month: Mapped[str] = mapped_column(String(20), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[BillStatus] = mapped_column(
        Enum(BillStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=BillStatus.PENDING,
    )
    payment_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    payment_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    payment_method: Mapped[PaymentMethod | None] = mapped_column(
        Enum(PaymentMethod, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_bills_resident_period", "resident_id", "year", "month"),
        Index("ix_bills_site_status", "site_id", "status"),
    )
