from sqlalchemy.orm import Session

from society.core.server_log import EndpointCatalog, ServerLogSource
from society.database import ping

CLEARED_MESSAGE = "Log cleared by administrator."


class ServerStatusService:
    """Operator view of database health, API endpoints and recent log entries"""

    def __init__(self, db: Session, server_log: ServerLogSource, catalog: EndpointCatalog):
        self.db = db
        self.server_log = server_log
        self.catalog = catalog

    def stats(self) -> dict:
        """
        Returns:
            Dict shaped like ServerStatsResponse. Endpoints are reported
            degraded while the database is unreachable.
        """
        db_online = ping(self.db)
        endpoint_status = "online" if db_online else "degraded"
        return {
            "db_status": "online" if db_online else "offline",
            "api_endpoints": [
                {
                    "path": endpoint.path,
                    "method": endpoint.methods,
                    "status": endpoint_status,
                    "description": endpoint.description,
                }
                for endpoint in self.catalog.endpoints()
            ],
            "logs": [
                {"timestamp": entry.timestamp, "level": entry.level.value, "message": entry.message}
                for entry in self.server_log.entries()
            ],
        }

    def clear_logs(self) -> None:
        self.server_log.clear(CLEARED_MESSAGE)
