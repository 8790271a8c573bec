#!/usr/bin/env python3
"""TaxCloud configuration

Credentials and endpoints for the TaxCloud SOAP API, the USPS address
verification call and the TIC catalog.
"""
import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.taxcloud.net/1.0/TaxCloud.asmx"
DEFAULT_TIC_URL = "https://taxcloud.net/tic/json/"


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass(frozen=True)
class TaxCloudConfig:
    """TaxCloud account and endpoint settings"""

    # ===========================================
    # Credentials
    # ===========================================
    api_login_id: str = ""
    api_key: str = ""
    usps_user_id: str = ""

    # ===========================================
    # Endpoints
    # ===========================================
    api_url: str = DEFAULT_API_URL
    tic_url: str = DEFAULT_TIC_URL

    # Transport timeout in seconds
    timeout: float = 30.0

    @property
    def is_configured(self) -> bool:
        """True when the tax API credentials are present"""
        return bool(self.api_login_id and self.api_key)

    @classmethod
    def from_env(cls) -> 'TaxCloudConfig':
        """Load TaxCloud configuration from environment variables"""
        return cls(
            api_login_id=os.getenv("TAXCLOUD_API_LOGIN_ID", ""),
            api_key=os.getenv("TAXCLOUD_API_KEY", ""),
            usps_user_id=os.getenv("TAXCLOUD_USPS_USER_ID", ""),
            api_url=os.getenv("TAXCLOUD_API_URL", DEFAULT_API_URL),
            tic_url=os.getenv("TAXCLOUD_TIC_URL", DEFAULT_TIC_URL),
            timeout=_float(os.getenv("TAXCLOUD_TIMEOUT", "30"), 30.0),
        )
