"""
Period Rate Resolver - Fall-forward search for the first quoted day

Providers publish nothing on weekends and holidays, so the bimonth's first
day may not carry a quotation. Candidate days are probed one at a time in
increasing order, bounded by a maximum lookahead.
"""

import logging
from datetime import timedelta

from ptax.models import BimonthPeriod, ResolvedRate
from ptax.providers.base import BaseQuotationProvider, NoQuotationFoundError

logger = logging.getLogger(__name__)


class PeriodRateResolver:
    """Resolve the reference rate for a bimonth by falling forward day by day."""

    def __init__(self, fetcher: BaseQuotationProvider, max_lookahead_days: int = 5):
        self.fetcher = fetcher
        self.max_lookahead_days = max_lookahead_days

    async def resolve(self, period: BimonthPeriod) -> ResolvedRate:
        """
        Find the first date from period.start_date that has a quotation.

        Dates are never probed in parallel: a later success must not be
        reported before an earlier date's absence is confirmed.

        Raises:
            NoQuotationFoundError: If no candidate day has a quotation
            RateProviderError: Any fetcher error, unchanged
        """
        for offset in range(self.max_lookahead_days):
            candidate = period.start_date + timedelta(days=offset)

            quotation = await self.fetcher.fetch_quotation_for(candidate)
            if quotation is None:
                continue

            logger.info(
                f"Quotation for {period.key} found on {candidate:%d/%m/%Y} "
                f"(+{offset} days)"
            )
            return ResolvedRate(
                sell_rate=quotation.sell_rate,
                buy_rate=quotation.buy_rate,
                reference_date=period.start_date,
                quotation_date=candidate,
                quotation_timestamp=quotation.quotation_timestamp,
                period_key=period.key,
                from_cache=False,
            )

        raise NoQuotationFoundError(
            provider=self.fetcher.PROVIDER_NAME,
            period_key=period.key,
            start_date=period.start_date,
            days_tried=self.max_lookahead_days,
        )
