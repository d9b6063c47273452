"""
PTAX Data Models

Rates are always carried as decimal.Decimal, never as binary floats.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

DEFAULT_SOURCE_LABEL = "Banco Central do Brasil - API PTAX"


class BimonthPeriod(BaseModel):
    """
    A fixed two-month accounting block (Jan/Feb, Mar/Apr, ..., Nov/Dec).

    Exactly one period contains any given date.
    """
    year: int
    index: int = Field(ge=1, le=6, description="1 = Jan/Feb, ..., 6 = Nov/Dec")
    start_date: date = Field(description="First day of the block's first month")

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """Canonical identity used as the cache invalidation key, e.g. 2026-B1."""
        return f"{self.year}-B{self.index}"


class PeriodInfo(BaseModel):
    """Read-only presentation of a bimonth."""
    key: str
    display_name: str = Field(description="Month pair, e.g. Janeiro/Fevereiro")
    start_date_display: str = Field(description="DD/MM/YYYY")
    year: int


class RateQuotation(BaseModel):
    """A single provider-reported buy/sell pair for one calendar date."""
    buy_rate: Decimal = Field(gt=Decimal("0"))
    sell_rate: Decimal = Field(gt=Decimal("0"))
    quotation_timestamp: str | None = Field(
        default=None,
        description="Provider timestamp for when the quotation was recorded"
    )


class ResolvedRate(BaseModel):
    """
    Caller-facing result of a bimonthly rate lookup.

    reference_date is the bimonth start (the intended date); quotation_date
    is the calendar date actually probed that returned a quotation.
    """
    sell_rate: Decimal
    buy_rate: Decimal
    reference_date: date
    quotation_date: date
    quotation_timestamp: str | None = None
    period_key: str
    source_label: str = DEFAULT_SOURCE_LABEL
    from_cache: bool = False

    model_config = {
        "json_schema_extra": {
            "example": {
                "sell_rate": "6.1923",
                "buy_rate": "6.1917",
                "reference_date": "2026-01-01",
                "quotation_date": "2026-01-02",
                "quotation_timestamp": "2026-01-02 13:04:29.163",
                "period_key": "2026-B1",
                "source_label": DEFAULT_SOURCE_LABEL,
                "from_cache": False
            }
        }
    }


class CacheEntry(BaseModel):
    """Single cache slot: the payload and the period it is valid for."""
    payload: ResolvedRate
    period_key: str
    expires_at: float = Field(description="Clock reading after which the entry is stale")
