"""
StoreGate API - Health Check Route
===================================

What:  Liveness endpoint for monitoring and load balancer probes.
How:   Reports process uptime and memory usage (psutil); there are no
       external dependencies to probe.
Who:   Docker health checks, load balancers, monitoring.

Not rate limited, not cached, not authenticated, and skipped by the access
log.
"""

import logging
import time

import psutil
from fastapi import APIRouter, Depends

from app import __version__
from app.dependencies import get_timestamp
from app.schemas.common import HealthResponse, MemoryStats

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_process = psutil.Process()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(timestamp: str = Depends(get_timestamp)) -> HealthResponse:
    memory = _process.memory_info()
    return HealthResponse(
        status="OK",
        uptime=round(time.time() - _process.create_time(), 3),
        memory=MemoryStats(
            rss=memory.rss,
            vms=memory.vms,
            percent=round(_process.memory_percent(), 2),
        ),
        version=__version__,
        timestamp=timestamp,
    )
