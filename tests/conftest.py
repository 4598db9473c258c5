import os
import tempfile
from pathlib import Path

import pytest

# Point the app at a throwaway SQLite file before roi_api is imported
_TMP = Path(tempfile.mkdtemp(prefix="roi_api_test_"))
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP / 'roi_test.db'}")
os.environ.setdefault("LOG_DIR", str(_TMP / "logs"))
os.environ.setdefault("ENV", "test")

from fastapi.testclient import TestClient

from roi_api.core.rate_limit import limiter
from roi_api.main import app

VALID_INPUT = {
    "monthlyInvocations": 1_000_000,
    "averageExecutionTime": 200,
    "memorySize": 512,
    "traditionalServerCost": 500,
}


@pytest.fixture(scope="session")
def client():
    """TestClient with lifespan events (tables are created on enter)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_rate_limit():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def valid_input():
    return dict(VALID_INPUT)


@pytest.fixture
def anyio_backend():
    return "asyncio"
