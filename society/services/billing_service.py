import logging

from sqlalchemy.orm import Session

from society.core.exceptions import NotFoundException, ValidationException
from society.core.security import current_time_ms
from society.core.server_log import LogLevel, ServerLogSource
from society.models.base import utcnow
from society.models.bill import BillStatus, MaintenanceBill, PaymentMethod
from society.models.ledger_entry import EntryType, LedgerEntry
from society.models.principal import Principal
from society.models.role import Role
from society.repositories.bill_repository import BillRepository
from society.repositories.ledger_repository import LedgerRepository
from society.repositories.user_repository import UserRepository
from society.schemas.bill_schemas import BillGenerateRequest, BillPayRequest
from society.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

MAINTENANCE_CATEGORY = "maintenance"


class BillingService:
    """Service layer for maintenance bills"""

    def __init__(self, db: Session, server_log: ServerLogSource | None = None):
        self.db = db
        self.bill_repo = BillRepository(db)
        self.ledger_repo = LedgerRepository(db)
        self.user_repo = UserRepository(db)
        self.notifications = NotificationService(db)
        self.server_log = server_log

    def list_site_bills(self, principal: Principal) -> list[dict]:
        """
        Bills of the caller's site with each resident's name attached.

        Returns:
            List of dicts shaped like BillWithResidentResponse
        """
        bills = self.bill_repo.get_site_bills(principal.site_id)
        names = {user.id: user.name for user in self.user_repo.get_site_users(principal.site_id)}
        return [self._with_resident_name(bill, names) for bill in bills]

    def list_resident_bills(self, principal: Principal) -> list[MaintenanceBill]:
        return self.bill_repo.get_resident_bills(principal.user.id)

    def generate_bills(self, data: BillGenerateRequest, principal: Principal) -> int:
        """
        Raise one bill per resident for (month, year).

        Residents without a flat number, and residents already billed for
        the period, are skipped. Bills and their notifications are written
        in a single transaction.

        Returns:
            Number of bills created
        """
        residents = self.user_repo.get_site_users_by_role(principal.site_id, Role.RESIDENT)
        message = f"New maintenance bill of ₹{data.amount:g} generated for {data.month}, {data.year}."

        created = 0
        try:
            for resident in residents:
                if not resident.flat_number:
                    continue
                if self.bill_repo.exists_for_period(resident.id, data.month, data.year):
                    continue

                self.bill_repo.create_no_commit(
                    MaintenanceBill(
                        site_id=principal.site_id,
                        resident_id=resident.id,
                        flat_number=resident.flat_number,
                        amount=data.amount,
                        month=data.month,
                        year=data.year,
                        due_date=data.due_date,
                        status=BillStatus.PENDING,
                    )
                )
                self.notifications.notify_no_commit(resident.id, message, "/resident/bills")
                created += 1

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Generated %d bills for %s %s in site %s", created, data.month, data.year, principal.site_id
        )
        if self.server_log is not None:
            self.server_log.append(
                LogLevel.INFO, f"Generated {created} maintenance bills for {data.month} {data.year}"
            )
        return created

    def pay_bill(self, bill_id: int, data: BillPayRequest, principal: Principal) -> MaintenanceBill:
        """
        Record a resident's payment of their own bill.

        Card payments settle immediately; UPI and cash wait for staff
        confirmation.

        Raises:
            NotFoundException: If the bill is not the caller's
            ValidationException: If the bill is already paid
        """
        bill = self.bill_repo.get_by_id_and_site(bill_id, principal.site_id)
        if not bill or bill.resident_id != principal.user.id:
            raise NotFoundException("Bill not found")

        if bill.status == BillStatus.PAID:
            raise ValidationException("Bill is already paid")

        bill.payment_method = data.payment_method
        try:
            if data.payment_method == PaymentMethod.CARD:
                bill.payment_id = f"PAY{current_time_ms()}"
                self._mark_paid_no_commit(bill)
            else:
                bill.status = BillStatus.PENDING_CONFIRMATION
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(bill)
        return bill

    def approve_bill(self, bill_id: int, principal: Principal) -> MaintenanceBill:
        """
        Confirm payment of a bill (staff side).

        Raises:
            NotFoundException: If the bill is not in the caller's site
            ValidationException: If the bill is already paid
        """
        bill = self.bill_repo.get_by_id_and_site(bill_id, principal.site_id)
        if not bill:
            raise NotFoundException("Bill not found")

        if bill.status == BillStatus.PAID:
            raise ValidationException("Bill is already paid")

        try:
            self._mark_paid_no_commit(bill)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(bill)
        logger.info("Bill %s approved by user %s", bill.id, principal.user.id)
        return bill

    def _mark_paid_no_commit(self, bill: MaintenanceBill) -> None:
        """Set the bill paid and book its amount as a ledger credit"""
        paid_at = utcnow()
        bill.status = BillStatus.PAID
        bill.payment_date = paid_at
        self.ledger_repo.create_no_commit(
            LedgerEntry(
                site_id=bill.site_id,
                date=paid_at,
                description=f"Maintenance Fee - {bill.month} {bill.year} ({bill.flat_number})",
                category=MAINTENANCE_CATEGORY,
                entry_type=EntryType.CREDIT,
                amount=bill.amount,
                bill_id=bill.id,
            )
        )

    @staticmethod
    def _with_resident_name(bill: MaintenanceBill, names: dict[int, str]) -> dict:
        return {
            "id": bill.id,
            "site_id": bill.site_id,
            "resident_id": bill.resident_id,
            "resident_name": names.get(bill.resident_id, "Unknown"),
            "flat_number": bill.flat_number,
            "amount": bill.amount,
            "month": bill.month,
            "year": bill.year,
            "due_date": bill.due_date,
            "status": bill.status,
            "payment_date": bill.payment_date,
            "payment_id": bill.payment_id,
            "payment_method": bill.payment_method,
            "created_at": bill.created_at,
        }
