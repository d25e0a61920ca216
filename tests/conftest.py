"""
Shared test fixtures — test client, sample configurations, quote session.
"""

import pytest
from fastapi.testclient import TestClient

from solar_quotation.main import app
from solar_quotation.quote_session import QuoteSession
from solar_quotation.schemas import (
    BatteryOption,
    CustomerRecord,
    ProjectConfig,
    ProjectType,
    SystemType,
)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def customer():
    return CustomerRecord(name="Asha  Rao", mobile="9876543210", email="asha@example.com")


@pytest.fixture
def residential_config(customer):
    """Example 1 — residential on-grid 3 kW, no extras."""
    return ProjectConfig(
        project_type=ProjectType.RESIDENTIAL,
        system_type=SystemType.ONGRID,
        capacity_kw=3,
        battery_option=BatteryOption.NONE,
        monitoring_enabled=False,
        customer=customer,
        location="Chennai, 600052",
    )


@pytest.fixture
def quote_session(tmp_path, residential_config):
    """Session writing into a per-test directory."""
    return QuoteSession(config=residential_config, output_dir=tmp_path / "quotes")
