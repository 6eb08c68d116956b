from datetime import datetime
from pydantic import BaseModel, Field
from society.models.ledger_entry import EntryType


class LedgerEntryCreate(BaseModel):
    date: datetime
    description: str = Field(..., min_length=1, max_length=500)
    category: str = Field(..., min_length=1, max_length=100)
    entry_type: EntryType
    amount: float = Field(..., gt=0)


class LedgerEntryResponse(BaseModel):
    id: int
    date: datetime
    description: str
    category: str
    entry_type: EntryType
    amount: float
    bill_id: int | None

    model_config = {"from_attributes": True}


class LedgerEntryWithBalance(LedgerEntryResponse):
    balance: float = Field(..., description="Running balance after this entry")


class LedgerResponse(BaseModel):
    """Entries newest first, each carrying its running balance"""

    entries: list[LedgerEntryWithBalance]
    total_credits: float
    total_debits: float
    balance: float
