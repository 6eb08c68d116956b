from sqlalchemy.orm import Session

from society.models.ledger_entry import EntryType, LedgerEntry
from society.models.principal import Principal
from society.repositories.ledger_repository import LedgerRepository
from society.schemas.ledger_schemas import LedgerEntryCreate


def running_balances(entries: list[LedgerEntry]) -> list[tuple[LedgerEntry, float]]:
    """
    Pair each entry with the balance after it.

    Args:
        entries: Entries in chronological order

    Returns:
        (entry, balance) pairs in the same order
    """
    balance = 0.0
    result = []
    for entry in entries:
        balance += entry.signed_amount
        result.append((entry, round(balance, 2)))
    return result


class LedgerService:
    """Service layer for the society cash book"""

    def __init__(self, db: Session):
        self.db = db
        self.ledger_repo = LedgerRepository(db)

    def get_ledger(self, principal: Principal) -> dict:
        """
        Ledger of the caller's site.

        Balances are accumulated oldest to newest; entries are returned
        newest first.

        Returns:
            Dict shaped like LedgerResponse
        """
        chronological = self.ledger_repo.get_site_entries(principal.site_id)

        total_credits = 0.0
        total_debits = 0.0
        entries = []
        for entry, balance in running_balances(chronological):
            if entry.entry_type == EntryType.CREDIT:
                total_credits += entry.amount
            else:
                total_debits += entry.amount
            entries.append(
                {
                    "id": entry.id,
                    "date": entry.date,
                    "description": entry.description,
                    "category": entry.category,
                    "entry_type": entry.entry_type,
                    "amount": entry.amount,
                    "bill_id": entry.bill_id,
                    "balance": balance,
                }
            )
        entries.reverse()

        return {
            "entries": entries,
            "total_credits": round(total_credits, 2),
            "total_debits": round(total_debits, 2),
            "balance": round(total_credits - total_debits, 2),
        }

    def create_entry(self, data: LedgerEntryCreate, principal: Principal) -> LedgerEntry:
        return self.ledger_repo.create(
            LedgerEntry(
                site_id=principal.site_id,
                date=data.date,
                description=data.description,
                category=data.category,
                entry_type=data.entry_type,
                amount=data.amount,
            )
        )
