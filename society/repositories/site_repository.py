"""Repository for Site model operations."""

from sqlalchemy.orm import Session
from society.models.site import Site


class SiteRepository:
    """Repository for Site model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, site_id: int) -> Site | None:
        """
        Get site by ID.

        Args:
            site_id: Site ID

        Returns:
            Site object or None if not found
        """
        return self.db.query(Site).filter(Site.id == site_id).first()

    def get_by_admin_email(self, admin_email: str) -> Site | None:
        return self.db.query(Site).filter(Site.admin_email == admin_email).first()

    def get_all(self) -> list[Site]:
        """
        Get all sites, newest first.

        Returns:
            List of all Site objects
        """
        return self.db.query(Site).order_by(Site.created_at.desc(), Site.id.desc()).all()

    def create_no_commit(self, site: Site) -> Site:
        """Create site without committing; flush assigns the ID"""
        self.db.add(site)
        self.db.flush()
        return site

    def update(self, site: Site) -> Site:
        """
        Update an existing site.

        Args:
            site: Site object with updated fields

        Returns:
            Updated Site object
        """
        self.db.commit()
        self.db.refresh(site)
        return site

    def delete(self, site: Site) -> None:
        """
        Stage deletion of a site (caller commits).

        Dependent records are not touched here; see SiteService.delete_site.
        """
        self.db.delete(site)
