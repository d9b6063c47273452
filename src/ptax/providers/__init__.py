"""
PTAX Data Providers Module
"""

from ptax.providers.base import (
    BaseQuotationProvider,
    DataValidationError,
    FetchRetriesExhaustedError,
    NoQuotationFoundError,
    RateProviderError,
    TransportError,
)
from ptax.providers.bcb import BCBClient

__all__ = [
    "BaseQuotationProvider",
    "RateProviderError",
    "TransportError",
    "FetchRetriesExhaustedError",
    "DataValidationError",
    "NoQuotationFoundError",
    "BCBClient",
]
