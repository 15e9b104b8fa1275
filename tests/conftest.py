"""
tests/conftest.py - Shared pytest fixtures

A fake provider driver for orchestrator tests and moto fixtures for the AWS
driver.

Usage:
    def test_something(fake_driver):
        driver = fake_driver({FakeService.COMPUTE: collect_compute})

    def test_aws(moto_aws):
        ...
"""

import os
import sys
from enum import Enum
from pathlib import Path

import pytest

# Add the project root to sys.path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cloud_inventory.drivers.base import Driver  # noqa: E402

# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Test environment variables"""
    os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

    yield


# =============================================================================
# Fake driver
# =============================================================================


class FakeService(Enum):
    COMPUTE = "compute"
    STORAGE = "storage"
    NETWORK = "network"
    DATABASE = "database"


class FakeDriver(Driver):
    """Driver whose catalog is supplied by the test"""

    provider = "fake"
    service_enum = FakeService
    sensitive_fields = frozenset({"password"})

    def __init__(self, catalog=None, **kwargs):
        kwargs.setdefault("driver", "fake")
        super().__init__(**kwargs)
        self.catalog = dict(catalog or {})
        self.initialize_calls = 0

    def default_regions(self):
        return ["r1"]

    def service_catalog(self):
        return self.catalog

    def _initialize(self):
        self.initialize_calls += 1
        self.account_id = "acct-1"


@pytest.fixture
def fake_driver():
    """Factory: fake_driver(catalog, config=..., logger=...)"""

    def make(catalog=None, **kwargs):
        return FakeDriver(catalog, **kwargs)

    return make


@pytest.fixture
def log_records():
    """Logger sink collecting (level, message, meta) tuples"""
    records = []

    def sink(level, message, meta):
        records.append((level, message, meta))

    sink.records = records
    return sink


# =============================================================================
# moto
# =============================================================================


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake AWS credentials so no real account is ever reached"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)


@pytest.fixture
def moto_aws(aws_credentials):
    """Every AWS API mocked by moto"""
    moto = pytest.importorskip("moto")
    with moto.mock_aws():
        yield
