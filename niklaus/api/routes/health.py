"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from niklaus import __version__
from niklaus.api.dependencies import get_registry
from niklaus.application.dto.responses import HealthResponse, ProviderHealthResponse
from niklaus.application.services import SessionRegistry, get_backend

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    registry: SessionRegistry = Depends(get_registry),
) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and open client sessions.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        sessions=len(registry),
    )


@router.get("/inference", response_model=HealthResponse)
async def inference_health(
    registry: SessionRegistry = Depends(get_registry),
) -> HealthResponse:
    """
    Support assistant provider health check.

    Tests provider connectivity and response time.
    """
    try:
        provider = get_backend().inference
        start = time.time()
        result = await provider.check_health()

        inference_status = ProviderHealthResponse(
            name=provider.__class__.__name__,
            available=result.available,
            latency_ms=(time.time() - start) * 1000,
            error=result.error,
        )

    except Exception as e:
        inference_status = ProviderHealthResponse(
            name="unknown",
            available=False,
            error=str(e),
        )

    return HealthResponse(
        status="healthy" if inference_status.available else "degraded",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        sessions=len(registry),
        inference=inference_status,
    )
