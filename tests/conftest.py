"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from worklog.core.ledger import TimeLedger
from worklog.core.storage import StorageManager


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: Integration tests")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's worklog environment out of the tests."""
    for name in (
        "WORKLOG_CONFIG",
        "WORKLOG_DATABASE_URL",
        "WORKLOG_LANG",
        "DB_HOST",
        "DB_PORT",
        "DB_USER",
        "DB_PASSWORD",
        "DB_NAME",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_url(temp_dir: Path) -> str:
    """SQLite database URL inside the temporary directory."""
    return f"sqlite:///{temp_dir / 'worklog.db'}"


@pytest.fixture
def storage(db_url: str):
    """Create a storage manager backed by a fresh SQLite file."""
    manager = StorageManager(db_url)
    yield manager
    manager.close()


@pytest.fixture
def ledger(storage: StorageManager) -> TimeLedger:
    """Create a ledger without configured defaults."""
    return TimeLedger(storage)
