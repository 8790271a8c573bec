"""
TaxCloud Client Factory

Factory functions for creating client instances.
This is the place that reads configuration from the environment.

Usage:
    from taxcloud.factory import create_taxcloud_client
    client = create_taxcloud_client()
"""
import logging
from typing import Optional

from core.config import TaxCloudConfig, get_settings

from .client import TaxCloudClient
from .models import Credentials
from .protocols import TransportProtocol

logger = logging.getLogger(__name__)


def create_taxcloud_client(
    config: Optional[TaxCloudConfig] = None,
    transport: Optional[TransportProtocol] = None,
) -> TaxCloudClient:
    """
    Create TaxCloudClient from configuration.

    Args:
        config: TaxCloud configuration (defaults to the environment settings)
        transport: Transport override; an HttpTransport is created when omitted

    Returns:
        Configured TaxCloudClient
    """
    config = config or get_settings()
    if not config.is_configured:
        logger.warning("TaxCloud credentials are not configured; tax calls will be rejected")

    credentials = Credentials(
        api_login_id=config.api_login_id,
        api_key=config.api_key,
        usps_user_id=config.usps_user_id,
    )
    return TaxCloudClient(
        credentials,
        transport=transport,
        api_url=config.api_url,
        catalog_url=config.tic_url,
        timeout=config.timeout,
    )


def create_taxcloud_client_for_testing(
    transport: TransportProtocol,
    credentials: Optional[Credentials] = None,
) -> TaxCloudClient:
    """
    Create TaxCloudClient around a mock transport.

    Args:
        transport: Mock transport recording requests
        credentials: Credentials to use (dummy values by default)
    """
    credentials = credentials or Credentials(
        api_login_id="test-login",
        api_key="test-key",
        usps_user_id="test-usps",
    )
    return TaxCloudClient(credentials, transport=transport)


__all__ = ["create_taxcloud_client", "create_taxcloud_client_for_testing"]
