"""
Period Calculator - Locate the fiscal bimonth containing a date

Bimonths are fixed two-month blocks: Jan/Feb (B1), Mar/Apr (B2), ...,
Nov/Dec (B6). "Today" is read from an explicit civil calendar so that
boundaries do not drift with the host timezone.
"""

from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from ptax.models import BimonthPeriod, PeriodInfo


class PeriodCalculator:
    """
    Compute the current bimonth and its presentation.

    Pure: no I/O and no failure modes.
    """

    # Indexed by BimonthPeriod.index - 1
    BIMONTH_NAMES = (
        "Janeiro/Fevereiro",
        "Março/Abril",
        "Maio/Junho",
        "Julho/Agosto",
        "Setembro/Outubro",
        "Novembro/Dezembro",
    )

    def __init__(
        self,
        timezone: str = "America/Sao_Paulo",
        today: Callable[[], date] | None = None
    ):
        self.timezone = ZoneInfo(timezone)
        self._today = today or self._civil_today

    def _civil_today(self) -> date:
        return datetime.now(self.timezone).date()

    def current_period(self, reference_date: date | None = None) -> BimonthPeriod:
        """
        Return the bimonth containing reference_date (default: today).

        Args:
            reference_date: Any calendar date

        Returns:
            BimonthPeriod whose start_date is the 1st of the block's first month
        """
        if reference_date is None:
            reference_date = self._today()

        month0 = reference_date.month - 1
        start_month0 = (month0 // 2) * 2

        return BimonthPeriod(
            year=reference_date.year,
            index=start_month0 // 2 + 1,
            start_date=date(reference_date.year, start_month0 + 1, 1),
        )

    def describe(self, period: BimonthPeriod) -> PeriodInfo:
        """Read-only presentation of a period."""
        return PeriodInfo(
            key=period.key,
            display_name=self.BIMONTH_NAMES[period.index - 1],
            start_date_display=period.start_date.strftime("%d/%m/%Y"),
            year=period.year,
        )
