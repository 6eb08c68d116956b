"""Role enum and the role-keyed lookup tables for routing and navigation."""

from dataclasses import dataclass
from enum import Enum as PyEnum


class Role(str, PyEnum):
    """
    Closed set of access levels governing route access.

    Every role owns a top-level page prefix (``/admin``, ``/resident``, ...)
    that only principals holding that role may enter. ``SUPERADMIN`` is the
    only role that operates across sites; every other role is bound to the
    site recorded on its user.
    """

    ADMIN = "admin"
    RESIDENT = "resident"
    SECURITY = "security"
    RECEPTIONIST = "receptionist"
    ACCOUNTANT = "accountant"
    SUPERADMIN = "superadmin"

    @property
    def home_path(self) -> str:
        """Landing page for the role (also the role-mismatch redirect target)"""
        return f"/{self.value}"


# Protected page prefix -> required role. Checked in order, first match wins.
PROTECTED_PREFIXES: tuple[tuple[str, Role], ...] = (
    ("/admin", Role.ADMIN),
    ("/resident", Role.RESIDENT),
    ("/security", Role.SECURITY),
    ("/receptionist", Role.RECEPTIONIST),
    ("/accountant", Role.ACCOUNTANT),
    ("/superadmin", Role.SUPERADMIN),
)


def prefix_matches(path: str, prefix: str) -> bool:
    """Segment-bounded prefix match: "/admin" covers "/admin/users", not "/administrator"."""
    return path == prefix or path.startswith(prefix + "/")


def required_role_for_path(
    path: str, table: tuple[tuple[str, Role], ...] = PROTECTED_PREFIXES
) -> Role | None:
    """
    Map a request path to the role required to view it.

    Args:
        path: Request path (no query string)
        table: Ordered (prefix, role) pairs

    Returns:
        Required Role, or None for public paths
    """
    for prefix, role in table:
        if prefix_matches(path, prefix):
            return role
    return None


@dataclass(frozen=True)
class MenuItem:
    """One navigation entry on a role's dashboard"""

    label: str
    href: str

    @property
    def slug(self) -> str:
        """Last path segment, or "" for the role's home entry"""
        parts = self.href.strip("/").split("/", 1)
        return parts[1] if len(parts) > 1 else ""


ROLE_MENUS: dict[Role, tuple[MenuItem, ...]] = {
    Role.ADMIN: (
        MenuItem("Dashboard", "/admin"),
        MenuItem("Users", "/admin/users"),
        MenuItem("Maintenance", "/admin/maintenance"),
        MenuItem("Complaints", "/admin/complaints"),
        MenuItem("Visitors", "/admin/visitors"),
        MenuItem("Announcements", "/admin/announcements"),
        MenuItem("Community", "/admin/community"),
        MenuItem("Analytics", "/admin/analytics"),
        MenuItem("Server", "/admin/server"),
        MenuItem("Settings", "/admin/settings"),
    ),
    Role.RESIDENT: (
        MenuItem("Dashboard", "/resident"),
        MenuItem("Bills", "/resident/bills"),
        MenuItem("Complaints", "/resident/complaints"),
        MenuItem("Visitors", "/resident/visitors"),
        MenuItem("Notices", "/resident/notices"),
        MenuItem("Community", "/resident/community"),
        MenuItem("Settings", "/resident/settings"),
    ),
    Role.SECURITY: (
        MenuItem("Dashboard", "/security"),
        MenuItem("Visitor Log", "/security/visitors"),
        MenuItem("Settings", "/security/settings"),
    ),
    Role.RECEPTIONIST: (
        MenuItem("Dashboard", "/receptionist"),
        MenuItem("Visitors", "/receptionist/visitors"),
        MenuItem("Complaints", "/receptionist/complaints"),
    ),
    Role.ACCOUNTANT: (
        MenuItem("Dashboard", "/accountant"),
        MenuItem("Billing", "/accountant/billing"),
        MenuItem("Ledger", "/accountant/ledger"),
        MenuItem("Reports", "/accountant/reports"),
        MenuItem("Settings", "/accountant/settings"),
    ),
    Role.SUPERADMIN: (
        MenuItem("Dashboard", "/superadmin/dashboard"),
        MenuItem("Sites", "/superadmin/sites"),
    ),
}
