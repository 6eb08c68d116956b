from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import String, Integer, Numeric, ForeignKey, Enum, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from society.models.base import Base, TimestampMixin


class EntryType(str, PyEnum):
    CREDIT = "credit"
    DEBIT = "debit"


class LedgerEntry(Base, TimestampMixin):
    """
    Society cash book line.

    Amount is always positive; the entry type decides its sign in the
    running balance (credit adds, debit subtracts).
    """

    __tablename__ = "ledger_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    site_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sites.id"), nullable=True, index=True
    )
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    entry_type: Mapped[EntryType] = mapped_column(
        Enum(EntryType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    amount: Mapped[float] = mapped_column(
        Numeric(precision=12, scale=2, asdecimal=False), nullable=False
    )
    bill_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("maintenance_bills.id"), nullable=True
    )
    # bill_id is set for credits recorded when a maintenance bill is approved

    __table_args__ = (Index("ix_ledger_site_date", "site_id", "date"),)

    @property
    def signed_amount(self) -> float:
        return self.amount if self.entry_type == EntryType.CREDIT else -self.amount
