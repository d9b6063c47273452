"""
PTAX API Routes

The core raises; this layer is the only place errors are turned into
the {"success": false, "error": ...} envelope.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from ptax import __version__
from ptax.api.schemas import (
    ErrorResponse,
    HealthResponse,
    PeriodInfoResponse,
    RateResponse,
)
from ptax.bimonth.service import BimonthlyRateService
from ptax.providers.base import RateProviderError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["PTAX"])


def get_rate_service(request: Request) -> BimonthlyRateService:
    """Service instance created in the application lifespan."""
    return request.app.state.rate_service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump()
    )


@router.get(
    "/rate",
    response_model=RateResponse,
    summary="Get current bimonthly PTAX rate",
    description="PTAX of the first quoted day of the current bimonth",
    responses={
        502: {"model": ErrorResponse, "description": "Quotation provider failure"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    }
)
async def get_rate(
    service: BimonthlyRateService = Depends(get_rate_service)
) -> RateResponse | JSONResponse:
    try:
        rate = await service.get_current_rate()
    except RateProviderError as e:
        logger.error(f"❌ PTAX lookup failed ({e.error_type}): {e}")
        return _error(status.HTTP_502_BAD_GATEWAY, str(e))
    except Exception as e:
        logger.exception(f"Unexpected error fetching PTAX: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return RateResponse(data=rate)


@router.get(
    "/rate/info",
    response_model=PeriodInfoResponse,
    summary="Get current bimonth info",
    description="Current bimonth key, name and start date. No provider call."
)
async def get_rate_info(
    service: BimonthlyRateService = Depends(get_rate_service)
) -> PeriodInfoResponse:
    return PeriodInfoResponse(data=service.get_current_period_info())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Health check for load balancers and monitoring"
)
async def health_check(
    service: BimonthlyRateService = Depends(get_rate_service)
) -> HealthResponse:
    provider_ok = await service.resolver.fetcher.health_check()

    return HealthResponse(
        status="healthy" if provider_ok else "degraded",
        version=__version__,
        provider="reachable" if provider_ok else "unreachable",
        cached_period=service.cache.period_key,
    )
