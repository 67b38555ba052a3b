import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from budget_planner.app.models.models import Base, Budget
from budget_planner.app.database import get_db_session
from budget_planner.app.main import app

# Use an in-memory test ledger
TEST_DATABASE_URL = "sqlite://"

@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(db_engine):
    """Returns a session on a fresh, empty ledger for each test"""
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()
    yield session
    session.close()

@pytest.fixture
def client(db_session):
    """Test client fixture that uses the db_session fixture"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db_session] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def test_budget(db_session):
    """Creates budget 1 with a total of 10000 and returns it"""
    budget = Budget(id=1, total=10000, spent_total=0, created_by="deployer")
    db_session.add(budget)
    db_session.commit()
    db_session.refresh(budget)
    return budget
