import threading
from functools import wraps

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from budget_planner.app.config import get_settings

settings = get_settings()
DATABASE_URL = settings.database_url

def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")

# An in-memory ledger must live on a single shared connection
if _is_memory_url(DATABASE_URL):
    engine = create_engine(
        DATABASE_URL,
        echo=settings.sql_echo,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(
        DATABASE_URL,
        echo=settings.sql_echo,
        connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
    )

# Create sessionmaker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Operations are applied one at a time. Reentrant so a batch can hold it
# across the calls it applies.
ledger_lock = threading.RLock()

def serialized(func):
    """Run a ledger operation while holding the ledger lock"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        with ledger_lock:
            return func(*args, **kwargs)
    return wrapper

def close_session(db):
    """
    Close a session under the ledger lock.

    Returning the shared connection resets it with a rollback, which must
    not land in the middle of another operation.
    """
    with ledger_lock:
        db.close()

# Create the ledger tables
def create_tables():
    from budget_planner.app.models.models import Base
    Base.metadata.create_all(bind=engine)

# Dependency to get the database session
def get_db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        close_session(db)
