"""Import every model so Base.metadata knows all tables."""

from society.models.base import Base, TimestampMixin
from society.models.role import Role
from society.models.site import Site, SubscriptionTier
from society.models.user import User, ResidencyType
from society.models.bill import MaintenanceBill, BillStatus, PaymentMethod
from society.models.complaint import (
    Complaint,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
)
from society.models.visitor import Visitor, VisitorStatus, BlacklistEntry
from society.models.announcement import Announcement, AnnouncementCategory
from society.models.ledger_entry import LedgerEntry, EntryType
from society.models.notification import Notification
from society.models.community import CommunityPost, PostComment, PostLike, PostCategory
from society.models.chat import Chat, ChatMember, ChatMessage, MessageType

__all__ = [
    "Base",
    "TimestampMixin",
    "Role",
    "Site",
    "SubscriptionTier",
    "User",
    "ResidencyType",
    "MaintenanceBill",
    "BillStatus",
    "PaymentMethod",
    "Complaint",
    "ComplaintCategory",
    "ComplaintPriority",
    "ComplaintStatus",
    "Visitor",
    "VisitorStatus",
    "BlacklistEntry",
    "Announcement",
    "AnnouncementCategory",
    "LedgerEntry",
    "EntryType",
    "Notification",
    "CommunityPost",
    "PostComment",
    "PostLike",
    "PostCategory",
    "Chat",
    "ChatMember",
    "ChatMessage",
    "MessageType",
]
