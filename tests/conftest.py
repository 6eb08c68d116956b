import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-tokens")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from society.core.security import encode_session_token, hash_password, issue_session_claims
from society.database import get_db
from society.models import Base, Role, Site, SubscriptionTier, User
# Import FastAPI app AFTER model imports
from society.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def session_headers(user: User) -> dict:
    """Cookie header carrying a valid session for user"""
    token = encode_session_token(issue_session_claims(user))
    return {"Cookie": f"token={token}"}


def make_site(db, name: str, admin_email: str) -> Site:
    site = Site(
        name=name,
        address=f"{name} Road",
        total_blocks=2,
        floors_per_block=4,
        units_per_floor=4,
        admin_name=f"{name} Admin",
        admin_email=admin_email,
        subscription_tier=SubscriptionTier.ACTIVE,
        subscription_start=datetime(2024, 1, 1),
        subscription_end=datetime(2030, 12, 31),
        subscription_fee=1000,
    )
    db.add(site)
    db.commit()
    db.refresh(site)
    return site


def make_user(
    db,
    role: Role,
    site: Site | None,
    email: str | None = None,
    flat_number: str | None = None,
    name: str | None = None,
) -> User:
    user = User(
        name=name or f"{role.value.title()} User",
        email=email or f"{role.value}@society.com",
        password_hash=hash_password(f"{role.value}123"),
        role=role,
        phone="1112223330",
        flat_number=flat_number,
        site_id=site.id if site else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def site(db_session):
    """Primary test site"""
    return make_site(db_session, "Green Meadows", "admin@greenmeadows.com")


@pytest.fixture
def other_site(db_session):
    """Second site, for tenant isolation checks"""
    return make_site(db_session, "Blue Ridge", "admin@blueridge.com")


@pytest.fixture
def admin(db_session, site):
    return make_user(db_session, Role.ADMIN, site)


@pytest.fixture
def resident(db_session, site):
    return make_user(db_session, Role.RESIDENT, site, flat_number="A-101", name="John Resident")


@pytest.fixture
def security(db_session, site):
    return make_user(db_session, Role.SECURITY, site, name="Gate Guard")


@pytest.fixture
def receptionist(db_session, site):
    return make_user(db_session, Role.RECEPTIONIST, site)


@pytest.fixture
def accountant(db_session, site):
    return make_user(db_session, Role.ACCOUNTANT, site)


@pytest.fixture
def superadmin(db_session):
    return make_user(db_session, Role.SUPERADMIN, None)


@pytest.fixture
def other_resident(db_session, other_site):
    """Resident of the second site"""
    return make_user(
        db_session,
        Role.RESIDENT,
        other_site,
        email="jane.smith@society.com",
        flat_number="B-205",
        name="Jane Smith",
    )


@pytest.fixture
def other_admin(db_session, other_site):
    return make_user(db_session, Role.ADMIN, other_site, email="admin@blueridge.com")


@pytest.fixture
def admin_headers(admin):
    return session_headers(admin)


@pytest.fixture
def resident_headers(resident):
    return session_headers(resident)


@pytest.fixture
def security_headers(security):
    return session_headers(security)


@pytest.fixture
def receptionist_headers(receptionist):
    return session_headers(receptionist)


@pytest.fixture
def accountant_headers(accountant):
    return session_headers(accountant)


@pytest.fixture
def superadmin_headers(superadmin):
    return session_headers(superadmin)


@pytest.fixture
def other_resident_headers(other_resident):
    return session_headers(other_resident)


@pytest.fixture
def other_admin_headers(other_admin):
    return session_headers(other_admin)


@pytest.fixture
def headers_for():
    """Build session headers for any user created inside a test"""
    return session_headers


@pytest.fixture
def user_factory(db_session):
    """Create extra users: user_factory(Role.RESIDENT, site, email=..., flat_number=...)"""

    def factory(role: Role, site: Site | None, **kwargs) -> User:
        return make_user(db_session, role, site, **kwargs)

    return factory
