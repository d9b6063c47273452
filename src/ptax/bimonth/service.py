"""
Bimonthly Rate Service

Business rule: the rate in force is always the PTAX of the FIRST quoted
day of the CURRENT bimonth.

Flow: current period -> cache check -> [miss] fall-forward resolve -> store.
"""

import asyncio
import logging

from ptax.bimonth.cache import RateCache
from ptax.bimonth.period import PeriodCalculator
from ptax.bimonth.resolver import PeriodRateResolver
from ptax.config import Settings, get_settings
from ptax.models import PeriodInfo, ResolvedRate
from ptax.providers.bcb import BCBClient

logger = logging.getLogger(__name__)


class BimonthlyRateService:
    """
    Orchestrates period calculation, caching and resolution.

    Errors raised while resolving propagate unchanged; translating them
    into user-facing responses is the API layer's job.
    """

    def __init__(
        self,
        calculator: PeriodCalculator,
        resolver: PeriodRateResolver,
        cache: RateCache | None = None,
        cache_ttl_seconds: float = 7 * 24 * 60 * 60
    ):
        self.calculator = calculator
        self.resolver = resolver
        self.cache = cache if cache is not None else RateCache()
        self.cache_ttl_seconds = cache_ttl_seconds
        # Coalesces concurrent misses into a single resolution per period
        self._resolve_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "BimonthlyRateService":
        """Wire the production collaborators from configuration."""
        settings = settings or get_settings()
        return cls(
            calculator=PeriodCalculator(timezone=settings.calendar_timezone),
            resolver=PeriodRateResolver(
                fetcher=BCBClient(settings),
                max_lookahead_days=settings.max_lookahead_days,
            ),
            cache=RateCache(),
            cache_ttl_seconds=settings.cache_ttl_seconds,
        )

    async def get_current_rate(self) -> ResolvedRate:
        """
        Return the reference rate for the current bimonth.

        Returns:
            ResolvedRate with from_cache=True when served from the cache

        Raises:
            RateProviderError: If resolution fails
        """
        period = self.calculator.current_period()

        cached = self._from_cache(period.key)
        if cached is not None:
            return cached

        async with self._resolve_lock:
            # Another caller may have resolved this period while we waited
            cached = self._from_cache(period.key)
            if cached is not None:
                return cached

            logger.info(f"Resolving PTAX for bimonth {period.key}...")
            result = await self.resolver.resolve(period)
            result = result.model_copy(update={"from_cache": False})

            self.cache.put(period.key, result, ttl=self.cache_ttl_seconds)

        logger.info(
            f"✅ PTAX {period.key}: sell R$ {result.sell_rate:.4f} "
            f"({result.quotation_date:%d/%m/%Y})"
        )
        return result

    def _from_cache(self, period_key: str) -> ResolvedRate | None:
        entry = self.cache.get(period_key)
        if entry is None:
            return None
        logger.info(f"Returning cached PTAX (bimonth: {period_key})")
        return entry.payload.model_copy(update={"from_cache": True})

    def get_current_period_info(self) -> PeriodInfo:
        """Current bimonth presentation. No cache, no network."""
        return self.calculator.describe(self.calculator.current_period())
