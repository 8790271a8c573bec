"""
TaxCloud Client

Async client for the TaxCloud sales tax API, USPS address verification and
the TIC catalog.
"""

from .client import TaxCloudClient
from .catalog_client import TicCatalogClient, flatten_code_list
from .factory import create_taxcloud_client
from .models import (
    Address,
    Cart,
    CartItem,
    Credentials,
    LookupResult,
    ResponseType,
    TaxabilityCode,
    TaxCloudOperation,
)
from .protocols import (
    TaxCloudError,
    RequestValidationError,
    TaxCloudTransportError,
    ServiceHTTPError,
    ServiceResponseError,
    ResponseParseError,
)

__version__ = "1.0.0"
__all__ = [
    "TaxCloudClient",
    "TicCatalogClient",
    "flatten_code_list",
    "create_taxcloud_client",
    "Address",
    "Cart",
    "CartItem",
    "Credentials",
    "LookupResult",
    "ResponseType",
    "TaxabilityCode",
    "TaxCloudOperation",
    "TaxCloudError",
    "RequestValidationError",
    "TaxCloudTransportError",
    "ServiceHTTPError",
    "ServiceResponseError",
    "ResponseParseError",
]
