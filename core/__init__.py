#!/usr/bin/env python3
"""
Core Module

Shared infrastructure for the TaxCloud client.

COMPONENTS:
    - config/: environment driven configuration (TaxCloud credentials, logging)
    - http_transport.py: async HTTP transport built on httpx

USAGE:
    from core.config import get_settings
    from core.http_transport import HttpTransport

    settings = get_settings()
    transport = HttpTransport(timeout=settings.timeout)
"""

from .http_transport import HttpTransport, TransportResponse, TransportError

__all__ = [
    "HttpTransport",
    "TransportResponse",
    "TransportError",
]
