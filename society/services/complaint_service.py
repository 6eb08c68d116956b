from sqlalchemy.orm import Session

from society.core.exceptions import NotFoundException, ValidationException
from society.models.complaint import Complaint, ComplaintStatus
from society.models.principal import Principal
from society.models.role import Role
from society.repositories.complaint_repository import ComplaintRepository
from society.repositories.user_repository import UserRepository
from society.schemas.complaint_schemas import ComplaintCreate, ComplaintUpdate
from society.services.notification_service import NotificationService


class ComplaintService:
    """Service layer for resident complaints"""

    def __init__(self, db: Session):
        self.db = db
        self.complaint_repo = ComplaintRepository(db)
        self.user_repo = UserRepository(db)
        self.notifications = NotificationService(db)

    def create_complaint(self, data: ComplaintCreate, principal: Principal) -> Complaint:
        """
        Raise a complaint for the resident's own flat and notify the site's admins.

        Raises:
            ValidationException: If the resident has no flat number
        """
        flat_number = principal.user.flat_number
        if not flat_number:
            raise ValidationException("A flat number is required to raise a complaint")

        try:
            complaint = self.complaint_repo.create_no_commit(
                Complaint(
                    site_id=principal.site_id,
                    resident_id=principal.user.id,
                    flat_number=flat_number,
                    title=data.title,
                    description=data.description,
                    category=data.category,
                    priority=data.priority,
                    status=ComplaintStatus.OPEN,
                )
            )
            message = f'New complaint "{data.title}" from {flat_number}.'
            for admin in self.user_repo.get_site_users_by_role(principal.site_id, Role.ADMIN):
                self.notifications.notify_no_commit(admin.id, message, "/admin/complaints")
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(complaint)
        return complaint

    def list_site_complaints(self, principal: Principal) -> list[dict]:
        complaints = self.complaint_repo.get_site_complaints(principal.site_id)
        names = {user.id: user.name for user in self.user_repo.get_site_users(principal.site_id)}
        result = []
        for complaint in complaints:
            item = {
                column.name: getattr(complaint, column.name)
                for column in Complaint.__table__.columns
            }
            item["resident_name"] = names.get(complaint.resident_id, "Unknown")
            result.append(item)
        return result

    def list_resident_complaints(self, principal: Principal) -> list[Complaint]:
        return self.complaint_repo.get_resident_complaints(principal.user.id)

    def update_complaint(
        self, complaint_id: int, data: ComplaintUpdate, principal: Principal
    ) -> Complaint:
        """
        Apply a staff update to a complaint of the caller's site.

        Raises:
            NotFoundException: If the complaint is not in the caller's site
        """
        complaint = self.complaint_repo.get_by_id_and_site(complaint_id, principal.site_id)
        if not complaint:
            raise NotFoundException("Complaint not found")

        if data.status is not None:
            complaint.status = data.status
        if data.priority is not None:
            complaint.priority = data.priority
        if data.assigned_to is not None:
            complaint.assigned_to = data.assigned_to

        return self.complaint_repo.update(complaint)
