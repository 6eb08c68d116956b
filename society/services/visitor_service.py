import logging

from sqlalchemy.orm import Session

from society.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from society.models.base import utcnow
from society.models.principal import Principal
from society.models.role import Role
from society.models.visitor import BlacklistEntry, Visitor, VisitorStatus
from society.repositories.user_repository import UserRepository
from society.repositories.visitor_repository import VisitorRepository
from society.schemas.visitor_schemas import BlacklistCreate, VisitorCreate
from society.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

CHECK_IN_ALLOWED = (VisitorStatus.APPROVED, VisitorStatus.PRE_APPROVED)


class VisitorService:
    """Service layer for the gate visitor log and the site blacklist"""

    def __init__(self, db: Session):
        self.db = db
        self.visitor_repo = VisitorRepository(db)
        self.user_repo = UserRepository(db)
        self.notifications = NotificationService(db)

    def create_visitor(self, data: VisitorCreate, principal: Principal) -> Visitor:
        """
        Log a visitor.

        Residents pre-approve visitors for their own flat. Gate staff log
        visitors as pending and the flat's resident is notified.

        Raises:
            ForbiddenException: If the phone is blacklisted, or a resident
                names a flat other than their own
            ValidationException: If no flat number can be determined
        """
        if self.visitor_repo.get_blacklist_entry(principal.site_id, data.phone):
            raise ForbiddenException(f"Visitor with phone number {data.phone} is blacklisted.")

        if principal.role == Role.RESIDENT:
            own_flat = principal.user.flat_number
            if data.flat_number and data.flat_number != own_flat:
                raise ForbiddenException("Residents can only pre-approve visitors for their own flat")
            flat_number = own_flat
            status = VisitorStatus.PRE_APPROVED
            security_name = "N/A"
        else:
            flat_number = data.flat_number
            status = VisitorStatus.PENDING
            security_name = principal.user.name

        if not flat_number:
            raise ValidationException("Flat number is required")

        try:
            visitor = self.visitor_repo.create_no_commit(
                Visitor(
                    site_id=principal.site_id,
                    name=data.name,
                    phone=data.phone,
                    purpose=data.purpose,
                    flat_number=flat_number,
                    vehicle_number=data.vehicle_number,
                    notes=data.notes,
                    check_in_time=utcnow(),
                    security_name=security_name,
                    status=status,
                )
            )
            if status == VisitorStatus.PENDING:
                resident = self.user_repo.get_resident_by_flat(principal.site_id, flat_number)
                if resident:
                    self.notifications.notify_no_commit(
                        resident.id,
                        f"{data.name} is at the gate. Please approve or reject their entry.",
                        "/resident",
                    )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(visitor)
        return visitor

    def list_site_visitors(self, principal: Principal) -> list[Visitor]:
        return self.visitor_repo.get_site_visitors(principal.site_id)

    def list_flat_visitors(self, principal: Principal) -> list[Visitor]:
        """Visitors of the resident's own flat"""
        if not principal.user.flat_number:
            return []
        return self.visitor_repo.get_flat_visitors(principal.site_id, principal.user.flat_number)

    def respond(self, visitor_id: int, approve: bool, principal: Principal) -> Visitor:
        """
        Approve or reject a visitor as the resident of the visited flat.

        Raises:
            NotFoundException: If the visitor is not in the caller's site
            ForbiddenException: If the visitor is for another flat
        """
        visitor = self._get_visitor(visitor_id, principal)
        if visitor.flat_number != principal.user.flat_number:
            raise ForbiddenException("You can only respond to visitors for your own flat")

        visitor.status = VisitorStatus.APPROVED if approve else VisitorStatus.REJECTED
        visitor.approved_by = principal.user.id
        return self.visitor_repo.update(visitor)

    def check_in(self, visitor_id: int, principal: Principal) -> Visitor:
        """
        Raises:
            ValidationException: If the visitor has not been approved
        """
        visitor = self._get_visitor(visitor_id, principal)
        if visitor.status not in CHECK_IN_ALLOWED:
            raise ValidationException("Visitor not approved for check-in.")

        visitor.status = VisitorStatus.CHECKED_IN
        visitor.check_in_time = utcnow()
        return self.visitor_repo.update(visitor)

    def check_out(self, visitor_id: int, principal: Principal) -> Visitor:
        """
        Raises:
            ValidationException: If the visitor is not checked in
        """
        visitor = self._get_visitor(visitor_id, principal)
        if visitor.status != VisitorStatus.CHECKED_IN:
            raise ValidationException("Visitor is not checked in.")

        visitor.status = VisitorStatus.CHECKED_OUT
        visitor.check_out_time = utcnow()
        return self.visitor_repo.update(visitor)

    # Blacklist

    def list_blacklist(self, principal: Principal) -> list[BlacklistEntry]:
        return self.visitor_repo.get_blacklist(principal.site_id)

    def add_to_blacklist(self, data: BlacklistCreate, principal: Principal) -> BlacklistEntry:
        if self.visitor_repo.get_blacklist_entry(principal.site_id, data.phone):
            raise ConflictException("Phone number is already blacklisted")

        entry = self.visitor_repo.create_blacklist_entry(
            BlacklistEntry(site_id=principal.site_id, phone=data.phone, reason=data.reason)
        )
        logger.info("Phone blacklisted in site %s by user %s", principal.site_id, principal.user.id)
        return entry

    def remove_from_blacklist(self, entry_id: int, principal: Principal) -> None:
        entry = self.visitor_repo.get_blacklist_entry_by_id(entry_id, principal.site_id)
        if not entry:
            raise NotFoundException("Blacklist entry not found")
        self.visitor_repo.delete_blacklist_entry(entry)

    def _get_visitor(self, visitor_id: int, principal: Principal) -> Visitor:
        visitor = self.visitor_repo.get_by_id_and_site(visitor_id, principal.site_id)
        if not visitor:
            raise NotFoundException("Visitor not found")
        return visitor
