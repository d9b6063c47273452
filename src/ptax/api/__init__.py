"""
PTAX API Module
"""

from ptax.api.routes import router, get_rate_service
from ptax.api.schemas import (
    RateResponse,
    PeriodInfoResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "router",
    "get_rate_service",
    "RateResponse",
    "PeriodInfoResponse",
    "HealthResponse",
    "ErrorResponse",
]
