"""
Period Rate Resolver Tests
"""

from datetime import date, timedelta
from decimal import Decimal
from urllib.parse import unquote

import pytest
import respx
from httpx import Response

from conftest import BCB_TEST_URL, EMPTY_BCB_BODY, ScriptedFetcher, bcb_body, make_quotation
from ptax.bimonth.period import PeriodCalculator
from ptax.bimonth.resolver import PeriodRateResolver
from ptax.providers.base import (
    DataValidationError,
    FetchRetriesExhaustedError,
    NoQuotationFoundError,
)
from ptax.providers.bcb import BCBClient

PERIOD = PeriodCalculator().current_period(date(2026, 3, 18))
START = PERIOD.start_date


class TestFallForward:
    """Tests for PeriodRateResolver.resolve with a scripted fetcher."""

    @pytest.mark.asyncio
    async def test_first_day_has_quotation(self):
        fetcher = ScriptedFetcher({START: make_quotation()})
        resolver = PeriodRateResolver(fetcher, max_lookahead_days=5)

        result = await resolver.resolve(PERIOD)

        assert result.reference_date == START
        assert result.quotation_date == START
        assert result.period_key == "2026-B2"
        assert result.from_cache is False
        assert fetcher.calls == [START]

    @pytest.mark.asyncio
    async def test_falls_forward_to_fourth_day(self):
        """Days 0-2 empty, day 3 quoted: exactly 4 probes in order."""
        found_on = START + timedelta(days=3)
        fetcher = ScriptedFetcher({found_on: make_quotation(sell="5.7012")})
        resolver = PeriodRateResolver(fetcher, max_lookahead_days=5)

        result = await resolver.resolve(PERIOD)

        assert result.quotation_date == found_on
        assert result.reference_date == START
        assert result.sell_rate == Decimal("5.7012")
        assert fetcher.calls == [START + timedelta(days=i) for i in range(4)]

    @pytest.mark.asyncio
    async def test_quotation_date_is_probed_date_not_provider_timestamp(self):
        found_on = START + timedelta(days=1)
        fetcher = ScriptedFetcher({found_on: make_quotation()})

        result = await PeriodRateResolver(fetcher).resolve(PERIOD)

        # make_quotation carries a January timestamp
        assert result.quotation_date == found_on
        assert result.quotation_timestamp == "2026-01-02 13:04:29.163"

    @pytest.mark.asyncio
    async def test_exhaustion_raises_no_quotation_found(self):
        fetcher = ScriptedFetcher()
        resolver = PeriodRateResolver(fetcher, max_lookahead_days=5)

        with pytest.raises(NoQuotationFoundError) as exc_info:
            await resolver.resolve(PERIOD)

        error = exc_info.value
        assert len(fetcher.calls) == 5
        assert error.days_tried == 5
        assert error.period_key == "2026-B2"
        assert error.start_date == START
        assert "2026-B2" in str(error)
        assert "01/03/2026" in str(error)

    @pytest.mark.asyncio
    async def test_lookahead_bound_is_configurable(self):
        fetcher = ScriptedFetcher({START + timedelta(days=3): make_quotation()})
        resolver = PeriodRateResolver(fetcher, max_lookahead_days=2)

        with pytest.raises(NoQuotationFoundError):
            await resolver.resolve(PERIOD)

        assert len(fetcher.calls) == 2

    @pytest.mark.asyncio
    async def test_validation_error_stops_search(self):
        error = DataValidationError("Invalid cotacaoVenda", provider="scripted")
        fetcher = ScriptedFetcher({
            START: error,
            START + timedelta(days=1): make_quotation(),
        })

        with pytest.raises(DataValidationError) as exc_info:
            await PeriodRateResolver(fetcher).resolve(PERIOD)

        assert exc_info.value is error
        assert fetcher.calls == [START]

    @pytest.mark.asyncio
    async def test_transport_exhaustion_propagates(self):
        fetcher = ScriptedFetcher({
            START + timedelta(days=1): FetchRetriesExhaustedError(
                "BCB connection failed after 3 attempts", provider="scripted", attempts=3
            ),
        })

        with pytest.raises(FetchRetriesExhaustedError):
            await PeriodRateResolver(fetcher).resolve(PERIOD)

        assert len(fetcher.calls) == 2


def _bcb_router(bodies: dict[str, dict]):
    """respx side effect answering per 'MM-DD-YYYY' date in the query."""

    def handler(request):
        url = unquote(str(request.url))
        for bcb_date, body in bodies.items():
            if f"'{bcb_date}'" in url:
                return Response(200, json=body)
        return Response(200, json=EMPTY_BCB_BODY)

    return handler


class TestResolverWithBCBClient:
    """Resolver driving the real HTTP client against a mocked endpoint."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_weekend_start_falls_forward(self, settings, recording_sleep):
        period = PeriodCalculator().current_period(date(2026, 11, 20))
        route = respx.get(url__startswith=BCB_TEST_URL).mock(
            side_effect=_bcb_router({"11-03-2026": bcb_body(sell=5.4102, buy=5.4096)})
        )
        resolver = PeriodRateResolver(BCBClient(settings, sleep=recording_sleep.sleep))

        result = await resolver.resolve(period)

        assert result.quotation_date == date(2026, 11, 3)
        assert result.sell_rate == Decimal("5.4102")
        assert route.call_count == 3

    @respx.mock
    @pytest.mark.asyncio
    async def test_invalid_sell_rate_does_not_retry_or_fall_forward(self, settings, recording_sleep):
        route = respx.get(url__startswith=BCB_TEST_URL).mock(
            side_effect=_bcb_router({
                "03-01-2026": bcb_body(sell="n/a"),
                "03-02-2026": bcb_body(),
            })
        )
        resolver = PeriodRateResolver(BCBClient(settings, sleep=recording_sleep.sleep))

        with pytest.raises(DataValidationError):
            await resolver.resolve(PERIOD)

        assert route.call_count == 1
        assert recording_sleep.delays == []
