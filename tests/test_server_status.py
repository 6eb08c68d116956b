from fastapi import APIRouter, FastAPI
from sqlalchemy.exc import OperationalError

from society.core.server_log import EndpointCatalog, EndpointInfo, InMemoryServerLog, LogLevel
from society.services.server_status_service import CLEARED_MESSAGE, ServerStatusService


class TestInMemoryServerLog:
    def test_newest_first(self):
        """Latest entry comes first"""
        log = InMemoryServerLog(capacity=5)
        log.append(LogLevel.INFO, "first")
        log.append(LogLevel.WARN, "second")

        assert [e.message for e in log.entries()] == ["second", "first"]
        assert log.entries()[0].level == LogLevel.WARN

    def test_capacity_drops_oldest(self):
        """Oldest entries fall off at capacity"""
        log = InMemoryServerLog(capacity=3)
        for i in range(5):
            log.append(LogLevel.INFO, f"entry {i}")

        assert [e.message for e in log.entries()] == ["entry 4", "entry 3", "entry 2"]

    def test_clear_leaves_marker(self):
        """Clearing leaves a single marker entry"""
        log = InMemoryServerLog()
        log.append(LogLevel.ERROR, "boom")

        log.clear(CLEARED_MESSAGE)

        entries = log.entries()
        assert len(entries) == 1
        assert entries[0].message == CLEARED_MESSAGE
        assert entries[0].level == LogLevel.INFO


class BrokenSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))


class TestEndpointCatalog:
    def test_collects_included_routers(self):
        """Routes registered through included routers are listed"""
        router = APIRouter()

        @router.get("/widgets", summary="List widgets")
        async def list_widgets():
            return []

        @router.post("/widgets")
        async def create_widget():
            return {}

        @router.get("/widgets/{widget_id}")
        async def get_widget(widget_id: int):
            return {}

        app = FastAPI()
        app.include_router(router, prefix="/api")

        @app.get("/dashboard")
        async def dashboard():
            return {}

        endpoints = {e.path: e for e in EndpointCatalog.from_app(app).endpoints()}

        assert set(endpoints) == {"/api/widgets", "/api/widgets/{widget_id}"}
        assert endpoints["/api/widgets"].methods == "GET, POST"
        assert endpoints["/api/widgets"].description == "List widgets"
        assert endpoints["/api/widgets/{widget_id}"].methods == "GET"


class TestServerStatusService:
    def test_degraded_when_database_down(self):
        """Endpoints are degraded while the database is down"""
        catalog = EndpointCatalog([EndpointInfo("/api/bills", "GET", "List bills")])
        service = ServerStatusService(BrokenSession(), InMemoryServerLog(), catalog)

        stats = service.stats()

        assert stats["db_status"] == "offline"
        assert stats["api_endpoints"] == [
            {"path": "/api/bills", "method": "GET", "status": "degraded", "description": "List bills"}
        ]


class TestServerStatsEndpoint:
    """/api/server/stats"""

    def test_stats(self, client, admin_headers):
        """Stats report database, endpoints and logs"""
        response = client.get("/api/server/stats", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["db_status"] == "online"
        paths = {e["path"] for e in data["api_endpoints"]}
        assert "/api/auth/login" in paths
        assert "/api/bills/{bill_id}/pay" in paths
        assert all(e["status"] == "online" for e in data["api_endpoints"])

    def test_endpoint_catalog_skips_pages(self, client, admin_headers):
        data = client.get("/api/server/stats", headers=admin_headers).json()

        assert all(e["path"].startswith("/api") for e in data["api_endpoints"])

    def test_clear_logs(self, client, admin_headers):
        """Admin can clear the log"""
        client.app.state.server_log.append(LogLevel.ERROR, "something broke")

        response = client.post("/api/server/stats/clear-logs", headers=admin_headers)

        assert response.status_code == 200
        logs = client.get("/api/server/stats", headers=admin_headers).json()["logs"]
        assert [entry["message"] for entry in logs] == [CLEARED_MESSAGE]

    def test_admin_only(self, client, resident_headers, superadmin_headers):
        """Only site admins see server status"""
        assert client.get("/api/server/stats", headers=resident_headers).status_code == 403
        assert client.get("/api/server/stats", headers=superadmin_headers).status_code == 403
