"""
TaxCloud Client

Async binding for the TaxCloud SOAP API (tax lookup and order lifecycle),
USPS address verification and the TIC catalog.
"""

import logging
from typing import Any, List, Optional, Sequence

from core.config import DEFAULT_API_URL, DEFAULT_TIC_URL
from core.http_transport import HttpTransport, TransportError

from .catalog_client import TicCatalogClient
from .models import Address, Credentials, LookupResult, TaxabilityCode, TaxCloudOperation
from .protocols import ServiceHTTPError, TaxCloudTransportError, TransportProtocol
from .request_builder import (
    AddressInput,
    CartInput,
    CartItemInput,
    build_authorized_request,
    build_authorized_with_captured_request,
    build_captured_request,
    build_lookup_request,
    build_ping_request,
    build_returned_request,
    build_verify_address_request,
)
from .response_parser import (
    parse_lookup_response,
    parse_status_response,
    parse_verify_address_response,
)
from .soap import SoapRequest

logger = logging.getLogger(__name__)


class TaxCloudClient:
    """
    TaxCloud API client.

    Credentials are fixed at construction and only read afterwards; no
    per-call state is kept, so one instance can serve concurrent calls.

    使用示例：
        async with TaxCloudClient.initialize("LOGIN", "KEY", "USPS") as client:
            if await client.ping():
                result = await client.lookup(customer_id, cart, origin, destination)
                print(result.per_item_tax)
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: Optional[TransportProtocol] = None,
        api_url: str = DEFAULT_API_URL,
        catalog_url: str = DEFAULT_TIC_URL,
        timeout: float = 30.0
    ):
        """
        Args:
            credentials: TaxCloud login id, API key and USPS user id
            transport: Transport to use; an HttpTransport is created when omitted
            api_url: TaxCloud SOAP endpoint
            catalog_url: TIC catalog endpoint
            timeout: Timeout for the created transport (seconds)
        """
        self._credentials = credentials
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(timeout=timeout)
        self.api_url = api_url
        self.catalog = TicCatalogClient(transport=self.transport, url=catalog_url)
        logger.debug(f"TaxCloudClient initialized for {api_url}")

    @classmethod
    def initialize(
        cls,
        api_login_id: str,
        api_key: str,
        usps_user_id: str,
        transport: Optional[TransportProtocol] = None,
        **kwargs
    ) -> "TaxCloudClient":
        """Create a client from the three account identifiers."""
        credentials = Credentials(
            api_login_id=api_login_id,
            api_key=api_key,
            usps_user_id=usps_user_id,
        )
        return cls(credentials, transport=transport, **kwargs)

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    async def close(self):
        """关闭HTTP客户端"""
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =============================================================================
    # Transport
    # =============================================================================

    async def _send(self, request: SoapRequest) -> bytes:
        """POST a SOAP request; returns the body of a 200 response."""
        operation = request.operation.value
        logger.debug(f"TaxCloud {operation} -> {self.api_url}")
        try:
            response = await self.transport.request(
                "POST", self.api_url, body=request.body, headers=request.headers
            )
        except TransportError as e:
            raise TaxCloudTransportError(operation, str(e)) from e

        if response.status_code != 200:
            logger.error(f"TaxCloud {operation} failed: HTTP {response.status_code}")
            raise ServiceHTTPError(response.status_code, response.text)
        return response.body

    # =============================================================================
    # Tax operations
    # =============================================================================

    async def ping(self) -> bool:
        """
        Verify the account credentials.

        Returns:
            True when TaxCloud answers OK, False otherwise
        """
        request = build_ping_request(self._credentials)
        body = await self._send(request)
        return parse_status_response(body, TaxCloudOperation.PING)

    async def lookup(
        self,
        customer_id: str,
        cart: CartInput,
        origin: AddressInput,
        destination: AddressInput,
    ) -> LookupResult:
        """
        Compute the tax of each cart item for a shipment.

        Args:
            customer_id: Caller customer id
            cart: Cart (or mapping) with an id and 1-100 items
            origin: Ship-from address
            destination: Ship-to address

        Returns:
            LookupResult whose per_item_tax follows the cart item order

        Raises:
            RequestValidationError: an argument failed validation (nothing sent)
            ServiceResponseError: TaxCloud rejected the lookup
        """
        request = build_lookup_request(self._credentials, customer_id, cart, origin, destination)
        body = await self._send(request)
        return parse_lookup_response(body)

    async def authorize(
        self,
        customer_id: str,
        cart_id: str,
        order_id: str,
        date_authorized: str,
    ) -> bool:
        """Mark a looked-up cart as an authorized order."""
        request = build_authorized_request(
            self._credentials, customer_id, cart_id, order_id, date_authorized
        )
        body = await self._send(request)
        return parse_status_response(body, TaxCloudOperation.AUTHORIZED)

    async def capture(self, order_id: str) -> bool:
        """Capture a previously authorized order."""
        request = build_captured_request(self._credentials, order_id)
        body = await self._send(request)
        return parse_status_response(body, TaxCloudOperation.CAPTURED)

    async def authorize_with_capture(
        self,
        customer_id: str,
        cart_id: str,
        order_id: str,
        date_authorized: str,
        date_captured: str,
    ) -> bool:
        """Authorize and capture in one call."""
        request = build_authorized_with_captured_request(
            self._credentials, customer_id, cart_id, order_id, date_authorized, date_captured
        )
        body = await self._send(request)
        return parse_status_response(body, TaxCloudOperation.AUTHORIZED_WITH_CAPTURED)

    async def returned(
        self,
        order_id: str,
        cart_items: Sequence[CartItemInput],
        returned_date: str,
    ) -> bool:
        """Record a full or partial return of a captured order."""
        request = build_returned_request(self._credentials, order_id, cart_items, returned_date)
        body = await self._send(request)
        return parse_status_response(body, TaxCloudOperation.RETURNED)

    # =============================================================================
    # Address verification
    # =============================================================================

    async def verify_address(self, address: AddressInput) -> Address:
        """
        Standardize an address through USPS.

        Returns:
            The verified address, zipcode as ZIP+4

        Raises:
            RequestValidationError: the address is incomplete (nothing sent)
            ServiceResponseError: USPS could not verify the address
        """
        request = build_verify_address_request(self._credentials, address)
        body = await self._send(request)
        return parse_verify_address_response(body)

    # =============================================================================
    # TIC catalog
    # =============================================================================

    async def fetch_catalog(self) -> List[TaxabilityCode]:
        return await self.catalog.fetch_catalog()

    async def fetch_flat_code_list(self) -> List[str]:
        return await self.catalog.fetch_flat_code_list()


__all__ = ["TaxCloudClient"]
