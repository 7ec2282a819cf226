import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

os.environ["QUOTE_TOOL_DATABASE_URL"] = "sqlite://"
os.environ["QUOTE_TOOL_ENV"] = "test"

from quote_tool.config.settings import reset_settings
from quote_tool.data.build_catalog import load_default_catalog
from quote_tool.db.database import SessionLocal, create_db_engine, init_db
from quote_tool.engine import PricingEngine


@pytest.fixture(autouse=True)
def _no_email_worker(monkeypatch):
    """Tests run with the email worker unconfigured unless they opt in."""
    monkeypatch.delenv("EMAIL_WORKER_URL", raising=False)
    monkeypatch.delenv("EMAIL_WORKER_API_KEY", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(scope="session")
def catalog():
    return load_default_catalog()


@pytest.fixture
def engine(catalog):
    return PricingEngine(catalog)


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    db_engine = create_db_engine("sqlite://")
    init_db(db_engine)
    session = SessionLocal()
    yield session
    session.close()
    db_engine.dispose()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from quote_tool.api.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
