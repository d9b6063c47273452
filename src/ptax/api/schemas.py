"""
PTAX API Response Schemas

Every response uses the envelope {"success": bool, "data" | "error": ...}.
"""

from pydantic import BaseModel, Field

from ptax.models import PeriodInfo, ResolvedRate


class RateResponse(BaseModel):
    """Response schema for /api/rate"""
    success: bool = True
    data: ResolvedRate


class PeriodInfoResponse(BaseModel):
    """Response schema for /api/rate/info"""
    success: bool = True
    data: PeriodInfo

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "data": {
                    "key": "2026-B1",
                    "display_name": "Janeiro/Fevereiro",
                    "start_date_display": "01/01/2026",
                    "year": 2026
                }
            }
        }
    }


class ErrorResponse(BaseModel):
    """Error envelope returned when a rate lookup fails."""
    success: bool = False
    error: str = Field(description="Human-readable error message")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "error": "BCB connection failed after 3 attempts: Request timeout"
            }
        }
    }


class HealthResponse(BaseModel):
    """Health check response for /api/health"""
    status: str = Field(description="healthy or degraded")
    version: str = Field(description="API version")
    provider: str = Field(description="Quotation provider reachability")
    cached_period: str | None = Field(
        default=None,
        description="Bimonth key currently held in the cache"
    )
