"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/  : Component tests (client with a mocked transport)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ.setdefault("ENV", "testing")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from taxcloud.models import Credentials
from tests.contracts.taxcloud.data_contract import TaxCloudTestDataFactory


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def factory() -> type:
    """Test data factory"""
    return TaxCloudTestDataFactory


@pytest.fixture
def credentials() -> Credentials:
    """Credentials used by the documented verifyAddress scenario"""
    return Credentials(api_login_id="ABC", api_key="XYZ", usps_user_id="123")
