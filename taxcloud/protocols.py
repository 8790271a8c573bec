"""
TaxCloud Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Dict, List, Optional, Protocol, runtime_checkable

from core.http_transport import TransportResponse


# =============================================================================
# Custom Exceptions (defined here to avoid importing the client)
# =============================================================================


class TaxCloudError(Exception):
    """Base exception for the TaxCloud client"""
    pass


class RequestValidationError(TaxCloudError):
    """Raised when a caller argument fails a pre-flight check; nothing is sent"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class TaxCloudTransportError(TaxCloudError):
    """Raised when the HTTP exchange fails before a response is received"""
    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class ServiceHTTPError(TaxCloudError):
    """Raised on a non-200 response; the raw body is the message"""
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(body or f"HTTP {status_code}")


class ServiceResponseError(TaxCloudError):
    """Raised when the service answers 200 but reports a failure"""
    def __init__(self, operation: str, messages: List[str]):
        self.operation = operation
        self.messages = messages
        super().__init__("; ".join(messages) if messages else f"{operation} failed")


class ResponseParseError(TaxCloudError):
    """Raised when a response body is not the expected document"""
    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Unexpected {operation} response: {reason}")


# =============================================================================
# Transport Protocol
# =============================================================================


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Interface for the HTTP transport.

    Implementations:
    - HttpTransport (production - httpx)
    - MockTransport (testing)
    """

    async def request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        """
        Send one request.

        Returns:
            TransportResponse for any HTTP status

        Raises:
            TransportError: when no response could be obtained
        """
        ...

    async def close(self) -> None:
        """Release connections."""
        ...


__all__ = [
    "TaxCloudError",
    "RequestValidationError",
    "TaxCloudTransportError",
    "ServiceHTTPError",
    "ServiceResponseError",
    "ResponseParseError",
    "TransportProtocol",
]
