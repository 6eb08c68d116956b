from datetime import datetime
from typing import Literal
from pydantic import BaseModel


class EndpointStatus(BaseModel):
    path: str
    method: str
    status: Literal["online", "degraded", "offline"]
    description: str


class LogEntryResponse(BaseModel):
    timestamp: datetime
    level: str
    message: str


class ServerStatsResponse(BaseModel):
    db_status: Literal["online", "offline"]
    api_endpoints: list[EndpointStatus]
    logs: list[LogEntryResponse]
