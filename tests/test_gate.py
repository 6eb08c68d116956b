import pytest

from society.core.gate import login_redirect_target
from society.core.security import SessionClaims, current_time_ms, encode_session_token
from society.models.role import PROTECTED_PREFIXES, Role, required_role_for_path


class TestRequiredRoleForPath:
    """Prefix table lookup"""

    @pytest.mark.parametrize(
        "path,role",
        [
            ("/admin", Role.ADMIN),
            ("/admin/users", Role.ADMIN),
            ("/resident/bills", Role.RESIDENT),
            ("/security", Role.SECURITY),
            ("/receptionist/visitors", Role.RECEPTIONIST),
            ("/accountant/ledger", Role.ACCOUNTANT),
            ("/superadmin/dashboard", Role.SUPERADMIN),
        ],
    )
    def test_protected_paths(self, path, role):
        """Protected prefixes resolve to their role"""
        assert required_role_for_path(path) == role

    @pytest.mark.parametrize(
        "path", ["/", "/login", "/health", "/api/admin/users", "/administrator", "/residents"]
    )
    def test_public_paths(self, path):
        """Prefixes only match whole path segments"""
        assert required_role_for_path(path) is None

    def test_first_match_wins(self):
        """Earlier table entries take precedence"""
        table = (("/admin", Role.ADMIN), ("/admin", Role.SUPERADMIN))
        assert required_role_for_path("/admin/users", table) == Role.ADMIN

    def test_every_role_has_a_prefix(self):
        assert {role for _, role in PROTECTED_PREFIXES} == set(Role)

    def test_login_redirect_keeps_path_readable(self):
        assert login_redirect_target("/admin/users") == "/login?redirectedFrom=/admin/users"


class TestAuthorizationGate:
    """Redirect behaviour of the gate middleware"""

    def test_protected_page_without_session_redirects_to_login(self, client):
        """No cookie on /admin/users goes to the login page with a return path"""
        response = client.get("/admin/users", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/login?redirectedFrom=/admin/users"

    def test_role_mismatch_redirects_to_own_home(self, client, resident_headers):
        """A resident opening /admin/users lands on /resident"""
        response = client.get("/admin/users", headers=resident_headers, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/resident"

    def test_matching_role_passes(self, client, admin_headers):
        """Matching role reaches the page"""
        response = client.get("/admin/users", headers=admin_headers, follow_redirects=False)

        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    def test_signed_in_user_on_login_goes_home(self, client, accountant_headers):
        """Signed-in users skip the login page"""
        response = client.get("/login", headers=accountant_headers, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/accountant"

    def test_login_page_is_public(self, client):
        response = client.get("/login", follow_redirects=False)

        assert response.status_code == 200
        assert response.json()["page"] == "login"

    def test_superadmin_root_redirects_to_dashboard(self, client, superadmin_headers):
        """Bare /superadmin goes to the dashboard"""
        response = client.get("/superadmin", headers=superadmin_headers, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/superadmin/dashboard"

    def test_superadmin_dashboard_requires_superadmin(self, client, admin_headers):
        response = client.get(
            "/superadmin/dashboard", headers=admin_headers, follow_redirects=False
        )

        assert response.status_code == 307
        assert response.headers["location"] == "/admin"

    def test_expired_cookie_counts_as_no_session(self, client, resident):
        """Expired cookie is treated as anonymous"""
        claims = SessionClaims(
            subject_id=str(resident.id),
            email=resident.email,
            role=Role.RESIDENT,
            name=resident.name,
            expires_at=current_time_ms() - 1_000,
        )
        headers = {"Cookie": f"token={encode_session_token(claims)}"}

        response = client.get("/resident", headers=headers, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/login?redirectedFrom=/resident"

    def test_forged_cookie_counts_as_no_session(self, client):
        headers = {"Cookie": "token=forged.token.value"}

        response = client.get("/accountant/ledger", headers=headers, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"].startswith("/login")

    def test_similar_public_path_is_not_gated(self, client):
        """/administrator is not under /admin"""
        response = client.get("/administrator", follow_redirects=False)
        assert response.status_code == 404

    def test_api_paths_are_not_redirected(self, client):
        """API endpoints answer with status codes rather than redirects"""
        response = client.get("/api/admin/users", follow_redirects=False)
        assert response.status_code == 401

    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
