from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from society.models.ledger_entry import LedgerEntry, EntryType


class LedgerRepository:
    """Repository for LedgerEntry data access"""

    def __init__(self, db: Session):
        self.db = db

    def get_site_entries(self, site_id: int | None) -> list[LedgerEntry]:
        """All entries of a site in chronological order (oldest first)"""
        return (
            self.db.query(LedgerEntry)
            .filter(LedgerEntry.site_id == site_id)
            .order_by(LedgerEntry.date.asc(), LedgerEntry.id.asc())
            .all()
        )

    def sum_by_type(
        self,
        site_id: int | None,
        entry_type: EntryType,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> float:
        q = self.db.query(func.coalesce(func.sum(LedgerEntry.amount), 0)).filter(
            LedgerEntry.site_id == site_id, LedgerEntry.entry_type == entry_type
        )
        if start is not None:
            q = q.filter(LedgerEntry.date >= start)
        if end is not None:
            q = q.filter(LedgerEntry.date < end)
        return float(q.scalar() or 0)

    def sum_by_category(self, site_id: int | None, entry_type: EntryType) -> list[tuple[str, float]]:
        """
        Totals per category for one entry type.

        Returns:
            (category, total) pairs ordered by category
        """
        rows = (
            self.db.query(LedgerEntry.category, func.sum(LedgerEntry.amount))
            .filter(LedgerEntry.site_id == site_id, LedgerEntry.entry_type == entry_type)
            .group_by(LedgerEntry.category)
            .order_by(LedgerEntry.category)
            .all()
        )
        return [(category, float(total or 0)) for category, total in rows]

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Create a new ledger entry"""
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def create_no_commit(self, entry: LedgerEntry) -> LedgerEntry:
        """Create ledger entry without committing (for atomic ops)"""
        self.db.add(entry)
        self.db.flush()
        return entry
