"""Shared fixtures and fakes for the PTAX test suite."""

from datetime import date
from decimal import Decimal

import pytest

from ptax.config import Settings
from ptax.models import RateQuotation
from ptax.providers.base import BaseQuotationProvider

BCB_TEST_URL = "https://bcb.test/odata"


class RecordingSleep:
    """Stands in for asyncio.sleep and records every requested delay."""

    def __init__(self):
        self.delays: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeToday:
    """Injectable "today" for the period calculator."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


class ScriptedFetcher(BaseQuotationProvider):
    """
    Fetcher returning scripted outcomes per date.

    Dates missing from the script return None (no quotation). An exception
    in the script is raised when that date is probed.
    """

    PROVIDER_NAME = "scripted"

    def __init__(self, script: dict | None = None, healthy: bool = True):
        self.script = script or {}
        self.healthy = healthy
        self.calls: list[date] = []

    async def fetch_quotation_for(self, day: date) -> RateQuotation | None:
        self.calls.append(day)
        outcome = self.script.get(day)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def health_check(self) -> bool:
        return self.healthy


def make_quotation(sell: str = "5.3424", buy: str = "5.3418") -> RateQuotation:
    return RateQuotation(
        sell_rate=Decimal(sell),
        buy_rate=Decimal(buy),
        quotation_timestamp="2026-01-02 13:04:29.163",
    )


def bcb_body(sell=5.3424, buy=5.3418, timestamp="2026-01-02 13:04:29.163") -> dict:
    return {
        "@odata.context": "https://bcb.test/odata/$metadata#_CotacaoDolarDia",
        "value": [
            {"cotacaoCompra": buy, "cotacaoVenda": sell, "dataHoraCotacao": timestamp}
        ],
    }


EMPTY_BCB_BODY = {"value": []}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        bcb_base_url=BCB_TEST_URL,
        max_network_retries=3,
        initial_retry_delay_ms=1000,
        max_lookahead_days=5,
        request_timeout_seconds=10.0,
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
