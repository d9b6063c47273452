"""
Banco Central do Brasil PTAX API Client

API Documentation: https://dadosabertos.bcb.gov.br/dataset/dolar-americano-usd-todos-os-boletins-diarios
Response format: {"value": [{"cotacaoCompra": 5.3, "cotacaoVenda": 5.3, "dataHoraCotacao": "..."}]}
"""

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable
from datetime import date
from decimal import Decimal
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ptax.config import Settings, get_settings
from ptax.models import RateQuotation
from ptax.providers.base import (
    BaseQuotationProvider,
    DataValidationError,
    FetchRetriesExhaustedError,
    TransportError,
)

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class BCBClient(BaseQuotationProvider):
    """
    Client for the BCB PTAX "CotacaoDolarDia" OData resource.

    One GET per calendar date. Transport failures are retried with
    exponential backoff; invalid payloads are not.
    """

    PROVIDER_NAME = "bcb"
    RATE_FIELDS = {"buy_rate": "cotacaoCompra", "sell_rate": "cotacaoVenda"}

    def __init__(
        self,
        settings: Settings | None = None,
        sleep: SleepFunc = asyncio.sleep
    ):
        self.settings = settings or get_settings()
        self.base_url = self.settings.bcb_base_url.rstrip("/")
        self.timeout = self.settings.request_timeout_seconds
        self.max_attempts = self.settings.max_network_retries
        self.initial_delay = self.settings.initial_retry_delay_seconds
        self._sleep = sleep

    def build_url(self, day: date) -> str:
        """BCB expects the date as 'MM-DD-YYYY' in an OData parameter alias."""
        bcb_date = day.strftime("%m-%d-%Y")
        return (
            f"{self.base_url}/CotacaoDolarDia(dataCotacao=@dataCotacao)"
            f"?@dataCotacao='{bcb_date}'&$format=json"
        )

    async def fetch_quotation_for(self, day: date) -> RateQuotation | None:
        """
        Fetch the PTAX quotation for one calendar date.

        Args:
            day: Calendar date to query

        Returns:
            RateQuotation, or None if BCB published nothing for that date

        Raises:
            FetchRetriesExhaustedError: If every attempt failed in transport
            DataValidationError: If the payload is malformed
        """
        logger.info(f"Requesting PTAX quotation for {day:%m-%d-%Y}")

        response = await self._get_with_retry(self.build_url(day))

        try:
            data = response.json()
        except ValueError as e:
            raise DataValidationError(
                message=f"Invalid JSON from BCB API: {e}",
                provider=self.PROVIDER_NAME,
                error_type="PARSE_ERROR",
                details={"date": day.isoformat()}
            ) from e

        return self._parse_quotation(data, day)

    async def _get_with_retry(self, url: str) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.initial_delay, exp_base=2),
            retry=retry_if_exception_type(TransportError),
            sleep=self._sleep,
            before_sleep=self._log_retry,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._get(url)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            raise FetchRetriesExhaustedError(
                message=(
                    f"BCB connection failed after {self.max_attempts} attempts: "
                    f"{last_error}"
                ),
                provider=self.PROVIDER_NAME,
                attempts=self.max_attempts,
                details={"url": url}
            ) from last_error

        return response

    async def _get(self, url: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                # httpx timeouts are per phase; the deadline covers the whole attempt
                response = await asyncio.wait_for(
                    client.get(url, headers={"Accept": "application/json"}),
                    timeout=self.timeout
                )
                response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            raise TransportError(
                message=f"HTTP {e.response.status_code}: {e.response.reason_phrase}",
                provider=self.PROVIDER_NAME,
                error_type=f"HTTP_{e.response.status_code}",
                details={"url": str(e.request.url)}
            ) from e

        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise TransportError(
                message="Request timeout",
                provider=self.PROVIDER_NAME,
                error_type="TIMEOUT",
                details={"timeout_seconds": self.timeout}
            ) from e

        except httpx.RequestError as e:
            raise TransportError(
                message=f"Connection error: {e}",
                provider=self.PROVIDER_NAME,
                error_type="CONNECTION_ERROR",
                details={"url": url}
            ) from e

    def _log_retry(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            f"BCB retry {retry_state.attempt_number}/{self.max_attempts - 1} "
            f"in {delay * 1000:.0f}ms: {retry_state.outcome.exception()}"
        )

    def _parse_quotation(self, data: Any, day: date) -> RateQuotation | None:
        if not isinstance(data, dict) or not isinstance(data.get("value"), list):
            raise DataValidationError(
                message="Invalid response from BCB API: missing 'value' list",
                provider=self.PROVIDER_NAME,
                error_type="PARSE_ERROR",
                details={"date": day.isoformat()}
            )

        records = data["value"]
        if not records:
            logger.info(f"No PTAX quotation available for {day:%m-%d-%Y}")
            return None

        record = records[0]
        if not isinstance(record, dict):
            raise DataValidationError(
                message="Invalid response from BCB API: quotation record is not an object",
                provider=self.PROVIDER_NAME,
                error_type="PARSE_ERROR",
                details={"date": day.isoformat()}
            )

        rates = {
            name: self._validate_rate(record.get(field), field, day)
            for name, field in self.RATE_FIELDS.items()
        }

        timestamp = record.get("dataHoraCotacao")
        if timestamp is not None and not isinstance(timestamp, str):
            raise DataValidationError(
                message=f"Invalid dataHoraCotacao: {timestamp!r}",
                provider=self.PROVIDER_NAME,
                error_type="PARSE_ERROR",
                details={"date": day.isoformat(), "field": "dataHoraCotacao"}
            )

        return RateQuotation(
            buy_rate=rates["buy_rate"],
            sell_rate=rates["sell_rate"],
            quotation_timestamp=timestamp,
        )

    def _validate_rate(self, value: Any, field: str, day: date) -> Decimal:
        # bool is an int subclass in Python; JSON true/false is not a rate
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        try:
            is_finite = is_number and math.isfinite(value)
        except OverflowError:
            # JSON integer too large for a float
            is_finite = False
        if not is_finite or value <= 0:
            raise DataValidationError(
                message=f"Invalid {field}: {value!r}",
                provider=self.PROVIDER_NAME,
                error_type="INVALID_RATE",
                details={"date": day.isoformat(), "field": field}
            )
        return self._to_decimal(value)

    async def health_check(self) -> bool:
        """Check if BCB PTAX API is reachable."""
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(self.base_url)
                return response.status_code == 200
        except Exception:
            return False
