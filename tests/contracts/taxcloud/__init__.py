"""
TaxCloud Client Contracts Package

Test data factory and canned service responses for the TaxCloud client.
"""

from .data_contract import TaxCloudTestDataFactory

__all__ = [
    "TaxCloudTestDataFactory",
]
