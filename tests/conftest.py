import pytest
import os
import tempfile
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="emp-uploads-")

from app.database import Base, get_db
from app.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    # Use sessionmaker with the active connection
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def admin_user(db_session):
    """Create a default admin user for tests."""
    from app.models.user import User, UserRole
    from app.services import auth as auth_service

    user = User(
        name="System Admin",
        email="admin@example.com",
        hashed_password=auth_service.get_password_hash("AdminPassword123!"),
        role=UserRole.ADMIN,
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(scope="function")
def make_employee(db_session):
    """Factory creating a user with an employee profile."""
    from app.models.user import User, UserRole
    from app.models.employee import Employee
    from app.services import auth as auth_service

    def _make_employee(email="jane@example.com", doj=None, code=None, name="Jane Doe", salary=50000.0):
        user = User(
            name=name,
            email=email,
            hashed_password=auth_service.get_password_hash("EmployeePass1!"),
            role=UserRole.EMPLOYEE,
            is_active=True,
        )
        db_session.add(user)
        db_session.flush()
        employee = Employee(
            user_id=user.id,
            employee_code=code or f"EMP-{user.id:03d}",
            doj=doj,
            salary=salary,
        )
        db_session.add(employee)
        db_session.commit()
        return user, employee
    return _make_employee


@pytest.fixture(scope="function")
def employee_user(make_employee):
    """Employee who joined before this year, so a full 12 days of each type have accrued."""
    today = date.today()
    return make_employee(doj=date(today.year - 1, 1, 15))


@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens."""
    from app.services.auth import token_for_user

    def _get_token(user):
        return token_for_user(user)
    return _get_token


@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {get_token(user)}"}
    return _auth_headers


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
