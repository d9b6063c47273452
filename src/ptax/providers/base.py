"""
Base Quotation Provider Interface

Provider errors are split into transport failures (retryable), data
validation failures (terminal) and search exhaustion (terminal).
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Any

from ptax.models import RateQuotation


class RateProviderError(Exception):
    """Base exception for rate provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        error_type: str = "UNKNOWN",
        details: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.provider = provider
        self.error_type = error_type
        self.details = details or {}


class TransportError(RateProviderError):
    """Timeout, connection failure or non-success HTTP status. Retryable."""


class FetchRetriesExhaustedError(RateProviderError):
    """Every attempt for a single date failed at the transport level."""

    def __init__(self, message: str, provider: str, attempts: int, details: dict[str, Any] | None = None):
        super().__init__(message, provider, "RETRIES_EXHAUSTED", details)
        self.attempts = attempts


class DataValidationError(RateProviderError):
    """Well-formed response with an invalid payload. Never retried."""


class NoQuotationFoundError(RateProviderError):
    """The fall-forward search ran out of candidate days."""

    def __init__(self, provider: str, period_key: str, start_date: date, days_tried: int):
        super().__init__(
            message=(
                f"No quotation found for bimonth {period_key}: "
                f"tried the first {days_tried} days from {start_date:%d/%m/%Y}"
            ),
            provider=provider,
            error_type="NO_QUOTATION",
            details={
                "period_key": period_key,
                "start_date": start_date.isoformat(),
                "days_tried": days_tried,
            }
        )
        self.period_key = period_key
        self.start_date = start_date
        self.days_tried = days_tried


class BaseQuotationProvider(ABC):
    """
    Abstract base class for single-date quotation providers.

    All implementations MUST return rates as Decimal type.
    """

    PROVIDER_NAME: str = "base"

    @abstractmethod
    async def fetch_quotation_for(self, day: date) -> RateQuotation | None:
        """
        Fetch the quotation recorded for exactly one calendar date.

        Returns:
            The quotation, or None when the provider has no quotation for
            that date (weekend, holiday).

        Raises:
            RateProviderError: If fetching or validation fails
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if provider is reachable and responding."""

    def _to_decimal(self, value: Any) -> Decimal:
        """Convert a provider number to Decimal through its string form."""
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))
