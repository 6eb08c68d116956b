import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from society.config import settings
from society.core.exceptions import (
    UnauthorizedException,
    NotFoundException,
    ForbiddenException,
    ValidationException,
    ConflictException,
)
from society.core.gate import AuthorizationGate
from society.core.logging_config import configure_logging
from society.core.server_log import EndpointCatalog, InMemoryServerLog, LogLevel
from society.routes import (
    admin_user_routes,
    analytics_routes,
    announcement_routes,
    auth_routes,
    bill_routes,
    chat_routes,
    community_routes,
    complaint_routes,
    dashboard_routes,
    ledger_routes,
    notification_routes,
    page_routes,
    report_routes,
    resident_routes,
    server_routes,
    site_routes,
    user_routes,
    visitor_routes,
)

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Role gate for the page prefixes (/admin, /resident, ...)
app.add_middleware(AuthorizationGate)

# CORS middleware
cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.state.server_log = InMemoryServerLog(settings.SERVER_LOG_CAPACITY)
app.state.server_log.append(LogLevel.INFO, f"{settings.APP_NAME} {settings.APP_VERSION} started")


# Exception handlers
@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Cookie"},
    )


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(ConflictException)
async def conflict_exception_handler(request: Request, exc: ConflictException):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    request.app.state.server_log.append(
        LogLevel.ERROR, f"{request.method} {request.url.path} failed: {type(exc).__name__}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Society Management API",
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }


# Include routers
app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
app.include_router(user_routes.router, prefix="/api/users", tags=["Users"])
app.include_router(admin_user_routes.router, prefix="/api/admin/users", tags=["Admin"])
app.include_router(site_routes.router, prefix="/api/superadmin/sites", tags=["Sites"])
app.include_router(bill_routes.router, prefix="/api/bills", tags=["Billing"])
app.include_router(complaint_routes.router, prefix="/api/complaints", tags=["Complaints"])
app.include_router(visitor_routes.router, prefix="/api/visitors", tags=["Visitors"])
app.include_router(
    announcement_routes.router, prefix="/api/announcements", tags=["Announcements"]
)
app.include_router(resident_routes.router, prefix="/api/resident", tags=["Resident"])
app.include_router(ledger_routes.router, prefix="/api/ledger", tags=["Ledger"])
app.include_router(
    notification_routes.router, prefix="/api/notifications", tags=["Notifications"]
)
app.include_router(community_routes.router, prefix="/api/community/posts", tags=["Community"])
app.include_router(chat_routes.router, prefix="/api/community/chats", tags=["Community"])
app.include_router(dashboard_routes.router, prefix="/api", tags=["Dashboards"])
app.include_router(report_routes.router, prefix="/api/reports", tags=["Reports"])
app.include_router(analytics_routes.router, prefix="/api/analytics", tags=["Analytics"])
app.include_router(server_routes.router, prefix="/api/server", tags=["Server"])
app.include_router(page_routes.router)

# Built after every router is registered
app.state.endpoint_catalog = EndpointCatalog.from_app(app)
