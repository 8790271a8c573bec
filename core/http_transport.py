"""
HTTP Transport

Thin async transport used by the TaxCloud clients. It sends a request and
hands back the status code and raw body; it never interprets the payload.
"""

import httpx
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP response: status code and body bytes"""
    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class TransportError(Exception):
    """Raised when the HTTP exchange itself fails (DNS, connect, timeout...)"""

    def __init__(self, method: str, url: str, cause: Exception):
        self.method = method
        self.url = url
        self.cause = cause
        super().__init__(f"{method} {url} failed: {cause}")


class HttpTransport:
    """
    httpx based transport

    使用示例：
        async with HttpTransport(timeout=10.0) as transport:
            response = await transport.request("GET", "https://taxcloud.net/tic/json/")
            print(response.status_code, response.text)
    """

    def __init__(
        self,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: str = "taxcloud-client"
    ):
        """
        Args:
            timeout: 请求超时时间（秒）
            client: Pre-built httpx.AsyncClient (the caller keeps ownership)
            user_agent: User-Agent header sent with every request
        """
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent}
        )

    async def request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        """
        Send one HTTP request.

        Returns:
            TransportResponse for any HTTP status

        Raises:
            TransportError: the request could not be completed
        """
        try:
            response = await self.client.request(method, url, content=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"HTTP {method} {url} failed: {e}")
            raise TransportError(method, url, e) from e

        logger.debug(f"HTTP {method} {url} -> {response.status_code}")
        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    async def close(self):
        """关闭HTTP客户端"""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ["HttpTransport", "TransportResponse", "TransportError"]
