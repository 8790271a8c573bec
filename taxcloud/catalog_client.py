"""
TIC Catalog Client

Read-only, unauthenticated access to the TaxCloud Taxability Information
Code catalog (JSON).
"""

import json
import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from core.config import DEFAULT_TIC_URL
from core.http_transport import HttpTransport, TransportError

from .models import TaxabilityCode
from .protocols import (
    ResponseParseError,
    ServiceHTTPError,
    TaxCloudTransportError,
    TransportProtocol,
)

logger = logging.getLogger(__name__)

CATALOG_OPERATION = "TicCatalog"


def flatten_code_list(codes: Iterable[TaxabilityCode]) -> List[str]:
    """
    Parent ids followed by every direct child id, sorted numerically.

    A parent without children contributes only its own id; duplicates in
    the catalog are kept.
    """
    codes = list(codes)
    parent_ids = [code.id for code in codes]
    child_ids = [child.id for code in codes for child in code.children]
    return sorted(parent_ids + child_ids, key=_numeric_key)


def _numeric_key(code_id: str):
    try:
        return (0, int(code_id), code_id)
    except ValueError:
        # Non-numeric ids sort after every numeric one
        return (1, 0, code_id)


class TicCatalogClient:
    """Client for the TIC catalog endpoint"""

    def __init__(
        self,
        transport: Optional[TransportProtocol] = None,
        url: str = DEFAULT_TIC_URL,
        timeout: float = 30.0
    ):
        """
        Args:
            transport: Transport to use; an HttpTransport is created when omitted
            url: Catalog URL
            timeout: Timeout for the created transport (seconds)
        """
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(timeout=timeout)
        self.url = url

    async def close(self):
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def fetch_catalog(self) -> List[TaxabilityCode]:
        """
        Fetch the full TIC catalog.

        Returns:
            Top-level catalog entries with their nested children

        Raises:
            TaxCloudTransportError, ServiceHTTPError, ResponseParseError
        """
        try:
            response = await self.transport.request(
                "GET", self.url, headers={"Accept": "application/json"}
            )
        except TransportError as e:
            raise TaxCloudTransportError(CATALOG_OPERATION, str(e)) from e

        if response.status_code != 200:
            logger.error(f"TIC catalog request failed: HTTP {response.status_code}")
            raise ServiceHTTPError(response.status_code, response.text)

        try:
            payload = json.loads(response.body)
            entries = payload["tic_list"]
            codes = [TaxabilityCode.model_validate(entry) for entry in entries]
        except (ValueError, TypeError, KeyError, ValidationError) as e:
            raise ResponseParseError(CATALOG_OPERATION, f"invalid catalog document ({e})") from e

        logger.debug(f"Fetched {len(codes)} top-level TIC entries")
        return codes

    async def fetch_flat_code_list(self) -> List[str]:
        """Fetch the catalog and return every parent and child id, numerically sorted."""
        codes = await self.fetch_catalog()
        return flatten_code_list(codes)


__all__ = ["TicCatalogClient", "flatten_code_list"]
