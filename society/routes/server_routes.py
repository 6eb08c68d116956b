from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from society.core.server_log import EndpointCatalog, ServerLogSource
from society.database import get_db
from society.dependencies import get_endpoint_catalog, get_server_log, require_roles
from society.models.role import Role
from society.schemas.auth_schemas import MessageResponse
from society.schemas.server_schemas import ServerStatsResponse
from society.services.server_status_service import ServerStatusService

router = APIRouter(dependencies=[Depends(require_roles(Role.ADMIN))])


@router.get("/stats", response_model=ServerStatsResponse)
async def server_stats(
    db: Session = Depends(get_db),
    server_log: ServerLogSource = Depends(get_server_log),
    catalog: EndpointCatalog = Depends(get_endpoint_catalog),
):
    """Database status, API endpoints and recent server log entries"""
    service = ServerStatusService(db, server_log, catalog)
    return service.stats()


@router.post("/stats/clear-logs", response_model=MessageResponse)
async def clear_logs(
    db: Session = Depends(get_db),
    server_log: ServerLogSource = Depends(get_server_log),
    catalog: EndpointCatalog = Depends(get_endpoint_catalog),
):
    service = ServerStatusService(db, server_log, catalog)
    service.clear_logs()
    return {"message": "Logs cleared"}
