"""
Demo data loader.

Creates the schema and fills an empty database with two sites, one user
per role and a handful of records for each module. Every demo password is
``<role>123``. Run with ``python -m society.seed`` or ``society-seed``.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from society.core.logging_config import configure_logging
from society.core.security import hash_password
from society.database import engine, session_scope
from society.models import (
    Announcement,
    AnnouncementCategory,
    Base,
    BillStatus,
    Chat,
    ChatMember,
    ChatMessage,
    CommunityPost,
    Complaint,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    EntryType,
    LedgerEntry,
    MaintenanceBill,
    PaymentMethod,
    PostCategory,
    Role,
    Site,
    SubscriptionTier,
    User,
    Visitor,
    VisitorStatus,
)

logger = logging.getLogger(__name__)


def _user(name: str, email: str, role: Role, phone: str, site: Site | None, flat: str | None = None):
    return User(
        name=name,
        email=email,
        password_hash=hash_password(f"{role.value}123"),
        role=role,
        phone=phone,
        flat_number=flat,
        site_id=site.id if site else None,
    )


def seed(db: Session) -> None:
    """Insert the demo data set into an empty database"""
    prestige = Site(
        name="Prestige Falcon City",
        address="Kanakapura Road, Bangalore",
        total_blocks=10,
        floors_per_block=20,
        units_per_floor=8,
        admin_name="Rajesh Kumar",
        admin_email="admin@prestige.com",
        subscription_tier=SubscriptionTier.ACTIVE,
        subscription_start=datetime(2023, 1, 1),
        subscription_end=datetime(2025, 12, 31),
        subscription_fee=50000,
    )
    sobha = Site(
        name="Sobha Dream Acres",
        address="Panathur Road, Bangalore",
        total_blocks=15,
        floors_per_block=14,
        units_per_floor=6,
        admin_name="Priya Sharma",
        admin_email="admin@sobha.com",
        subscription_tier=SubscriptionTier.TRIAL,
        subscription_start=datetime(2024, 7, 1),
        subscription_end=datetime(2024, 9, 30),
        subscription_fee=0,
    )
    db.add_all([prestige, sobha])
    db.flush()

    admin = _user("Admin User", "admin@society.com", Role.ADMIN, "1112223330", prestige)
    resident = _user(
        "John Resident", "resident@society.com", Role.RESIDENT, "1112223331", prestige, "A-101"
    )
    security = _user("Security Guard", "security@society.com", Role.SECURITY, "1112223332", prestige)
    jane = _user(
        "Jane Smith", "jane.smith@society.com", Role.RESIDENT, "1112223335", sobha, "B-205"
    )
    db.add_all(
        [
            _user("Super Admin", "superadmin@society.com", Role.SUPERADMIN, "1112223300", None),
            admin,
            resident,
            security,
            _user(
                "Receptionist", "receptionist@society.com", Role.RECEPTIONIST, "1112223333", prestige
            ),
            _user("Accountant", "accountant@society.com", Role.ACCOUNTANT, "1112223334", prestige),
            jane,
        ]
    )
    db.flush()

    db.add_all(
        [
            Announcement(
                site_id=prestige.id,
                author_id=admin.id,
                title="Annual General Body Meeting",
                content="The Annual General Body Meeting will be held in the society clubhouse. "
                "All residents are requested to attend.",
                category=AnnouncementCategory.EVENT,
                target_roles=["resident", "admin"],
                is_active=True,
            ),
            Announcement(
                site_id=prestige.id,
                author_id=admin.id,
                title="Urgent: Water Supply Disruption",
                content="Water supply will be suspended from 10:00 AM to 4:00 PM for pipeline repairs.",
                category=AnnouncementCategory.MAINTENANCE,
                target_roles=["resident"],
                is_active=True,
            ),
            Announcement(
                site_id=sobha.id,
                author_id=admin.id,
                title="Independence Day Celebration",
                content="Flag hoisting at 9:00 AM near the main gate, followed by breakfast.",
                category=AnnouncementCategory.EVENT,
                target_roles=["all"],
                is_active=True,
            ),
            Complaint(
                site_id=prestige.id,
                resident_id=resident.id,
                flat_number="A-101",
                title="Water leakage in kitchen sink",
                description="Constant drip from the kitchen sink for the past two days.",
                category=ComplaintCategory.PLUMBING,
                priority=ComplaintPriority.HIGH,
                status=ComplaintStatus.IN_PROGRESS,
            ),
            Complaint(
                site_id=prestige.id,
                resident_id=resident.id,
                flat_number="A-101",
                title="Corridor lights not working",
                description="The 2nd floor corridor lights in A-wing are out.",
                category=ComplaintCategory.ELECTRICAL,
                priority=ComplaintPriority.MEDIUM,
                status=ComplaintStatus.RESOLVED,
            ),
            Complaint(
                site_id=sobha.id,
                resident_id=jane.id,
                flat_number="B-205",
                title="Stray dogs menace in Block C",
                description="A pack of stray dogs has been aggressive near Block C in the evenings.",
                category=ComplaintCategory.SECURITY,
                priority=ComplaintPriority.URGENT,
                status=ComplaintStatus.OPEN,
            ),
            MaintenanceBill(
                site_id=prestige.id,
                resident_id=resident.id,
                flat_number="A-101",
                amount=2500,
                month="June",
                year=2024,
                due_date=datetime(2024, 7, 10),
                status=BillStatus.PAID,
                payment_date=datetime(2024, 7, 5, 11),
                payment_id="PAY123456",
                payment_method=PaymentMethod.UPI,
            ),
            MaintenanceBill(
                site_id=prestige.id,
                resident_id=resident.id,
                flat_number="A-101",
                amount=2500,
                month="July",
                year=2024,
                due_date=datetime(2024, 8, 10),
                status=BillStatus.PENDING,
            ),
            MaintenanceBill(
                site_id=sobha.id,
                resident_id=jane.id,
                flat_number="B-205",
                amount=3000,
                month="July",
                year=2024,
                due_date=datetime(2024, 8, 10),
                status=BillStatus.PENDING_CONFIRMATION,
                payment_method=PaymentMethod.CASH,
            ),
            Visitor(
                site_id=prestige.id,
                name="Courier Delivery",
                phone="+91-9988776655",
                purpose="Delivery",
                flat_number="A-101",
                check_in_time=datetime(2024, 7, 24, 14),
                security_name=security.name,
                status=VisitorStatus.CHECKED_IN,
                vehicle_number="MH12AB3456",
            ),
            Visitor(
                site_id=sobha.id,
                name="Alice Wonderland",
                phone="+91-9123456789",
                purpose="Guest",
                flat_number="B-205",
                check_in_time=datetime(2024, 7, 23, 18),
                check_out_time=datetime(2024, 7, 23, 22),
                security_name="N/A",
                status=VisitorStatus.CHECKED_OUT,
            ),
            CommunityPost(
                site_id=prestige.id,
                author_id=resident.id,
                content="Weekend cricket match at the clubhouse ground, all welcome!",
                category=PostCategory.EVENT,
                hashtags=["cricket", "weekend"],
                event_date=datetime(2030, 1, 5, 9),
                event_location="Clubhouse ground",
            ),
            Chat(
                site_id=prestige.id,
                last_message_at=datetime(2024, 7, 22, 19, 5),
                members=[ChatMember(user_id=resident.id), ChatMember(user_id=admin.id)],
                messages=[
                    ChatMessage(
                        sender_id=resident.id,
                        content="Is the clubhouse free on Saturday evening?",
                        created_at=datetime(2024, 7, 22, 19),
                    ),
                    ChatMessage(
                        sender_id=admin.id,
                        content="Yes, I have blocked it for you.",
                        created_at=datetime(2024, 7, 22, 19, 5),
                    ),
                ],
            ),
        ]
    )

    ledger = [
        (datetime(2024, 7, 5), "Maintenance fees for June", "maintenance_fee", EntryType.CREDIT, 150000),
        (datetime(2024, 7, 8), "Security staff salary", "salaries", EntryType.DEBIT, 60000),
        (datetime(2024, 7, 10), "Electricity bill for common areas", "utilities", EntryType.DEBIT, 22000),
        (datetime(2024, 7, 15), "Clubhouse booking income", "facility_booking", EntryType.CREDIT, 5000),
        (datetime(2024, 7, 21), "Elevator repair work", "repairs", EntryType.DEBIT, 12000),
    ]
    db.add_all(
        LedgerEntry(
            site_id=prestige.id,
            date=date,
            description=description,
            category=category,
            entry_type=entry_type,
            amount=amount,
        )
        for date, description, category, entry_type, amount in ledger
    )


def main() -> None:
    configure_logging()
    Base.metadata.create_all(bind=engine)

    with session_scope() as db:
        if db.query(Site).first() is not None:
            logger.info("Database already contains data, skipping seed")
            return
        seed(db)

    logger.info("Demo data loaded")


if __name__ == "__main__":
    main()
