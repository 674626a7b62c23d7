from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from app.core.config import settings

DATABASE_URL = settings.database_url
_is_sqlite = DATABASE_URL.startswith("sqlite")

# SQLite connections are shared across the threadpool FastAPI runs sync routes in
engine = create_engine(
    DATABASE_URL,
    echo=settings.sql_echo,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)

if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # ON DELETE CASCADE on leave requests and salaries needs this on SQLite
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    One session per request. Services commit explicitly; anything left
    uncommitted is discarded when the session closes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create any missing tables. Called from the application lifespan."""
    from app.models import user, department, employee, salary, leave_request  # noqa: F401
    Base.metadata.create_all(bind=engine)
