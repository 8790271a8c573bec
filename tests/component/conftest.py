"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── taxcloud/    TaxCloudClient and TicCatalogClient against MockTransport
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from taxcloud.client import TaxCloudClient
from taxcloud.models import Credentials
from tests.component.mocks import MockTransport


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Transport Mocks
# =============================================================================

@pytest.fixture
def mock_transport() -> MockTransport:
    """Recording transport; answers 200 with an empty body unless configured"""
    return MockTransport()


@pytest.fixture
def client(mock_transport: MockTransport, credentials: Credentials) -> TaxCloudClient:
    """TaxCloudClient wired to the mock transport"""
    return TaxCloudClient(credentials, transport=mock_transport)
