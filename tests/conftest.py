"""
Pytest configuration and shared fixtures.
Main configuration file for the test suite.
"""

import logging
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from dotenv import load_dotenv

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Shared model fixtures
from tests.fixtures.models import (  # noqa: E402,F401
    sample_agent,
    sample_agent_row,
    sample_agents,
    sample_session_user,
)

# Load environment variables from .env file if it exists
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)
    logging.info(f"✓ Loaded environment variables from {env_file}")

os.environ.setdefault("APPLICATION_ENV", "test")

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--run-slow", action="store_true", default=False, help="Run slow tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection based on options"""
    # Skip slow tests unless --run-slow
    if not config.getoption("--run-slow"):
        skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ==================== Flask ====================


@pytest.fixture
def app():
    """Create the full app with test configuration"""
    from meetai import create_app

    app = create_app("test")
    app.config["MEETING_LINK_API_BASE_URL"] = "http://meet.test"
    return app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


# ==================== Mock Services ====================


@pytest.fixture
def mock_auth_session(sample_session_user):
    """Auth service that resolves every cookie to sample_session_user"""
    mock = Mock()
    mock.get_session.return_value = sample_session_user
    with patch(
        "meetai.auth.decorators.get_auth_session_service", return_value=mock
    ):
        yield mock


@pytest.fixture
def anonymous_auth_session():
    """Auth service that knows no session"""
    mock = Mock()
    mock.get_session.return_value = None
    with patch(
        "meetai.auth.decorators.get_auth_session_service", return_value=mock
    ):
        yield mock


@pytest.fixture
def mock_supabase():
    """
    Supabase client whose query builder chains back to itself.

    Set ``mock_supabase.query.execute.return_value.data`` to control rows.
    """
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "insert", "update", "eq", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = Mock(data=[])
    client.table.return_value = query
    client.query = query
    return client


# ==================== Logging ====================


@pytest.fixture(autouse=True)
def setup_test_logging(caplog):
    """Configure logging for tests"""
    caplog.set_level(logging.INFO)
