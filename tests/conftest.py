"""Shared pytest fixtures for agencyledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from agencyledger.database.factories import create_sqlite_database
from agencyledger.domain.store import FinanceStore
from agencyledger.domain.client import ClientService
from agencyledger.domain.project import ProjectService
from agencyledger.domain.cost import CostService
from agencyledger.domain.report import ReportService
from agencyledger.domain.settings import SettingsService
from agencyledger.domain.backup import BackupService

TODAY = date(2024, 6, 15)


@pytest.fixture
def db_path():
    """Create a temporary database file path."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def temp_db(db_path):
    """Create a temporary database for testing."""
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()


@pytest.fixture
def store(temp_db):
    """Create a FinanceStore pinned to 2024-06-15 (FY 2024, April start)."""
    return FinanceStore(temp_db, today=TODAY)


@pytest.fixture
def client_service(store):
    return ClientService(store)


@pytest.fixture
def project_service(store):
    return ProjectService(store)


@pytest.fixture
def cost_service(store):
    return CostService(store)


@pytest.fixture
def report_service(store):
    return ReportService(store)


@pytest.fixture
def settings_service(store):
    return SettingsService(store)


@pytest.fixture
def backup_service(store):
    return BackupService(store)


@pytest.fixture
def sample_entities(client_service, project_service, cost_service):
    """Create one retainer, one one-time client, a project and two costs."""
    return {
        "retainer": client_service.create_client(
            "Acme Ltd", Decimal("1000"), start_date="2024-05-01"
        ),
        "one_time": client_service.create_client(
            "Beta Co", Decimal("500"), client_type="one-time", start_date="2024-05-01"
        ),
        "project": project_service.create_project(
            "Website", Decimal("2000"), start_date="2024-07-01"
        ),
        "salary": cost_service.create_cost("Designer", "team", Decimal("300")),
        "ads": cost_service.create_cost("Ads", "marketing", Decimal("200")),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
