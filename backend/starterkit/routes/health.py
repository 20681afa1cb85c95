"""
StarterKit Backend — Health Check Route
=========================================

What:  Liveness endpoint for monitoring and load balancer probes.
How:   Reports a fixed "OK" status with the server time, environment and version.
       There are no dependencies to probe, so the endpoint never fails.
"""

from fastapi import APIRouter, Depends

from starterkit import __version__
from starterkit.config import Settings, get_settings_dep
from starterkit.routes.base import LenientAPIRoute
from starterkit.schemas.api import HealthStatus, iso_timestamp

router = APIRouter(tags=["Health"], route_class=LenientAPIRoute)


@router.get(
    "/health",
    response_model=HealthStatus,
    summary="Service health check",
)
async def health_check(settings: Settings = Depends(get_settings_dep)) -> HealthStatus:
    return HealthStatus(
        status="OK",
        timestamp=iso_timestamp(),
        environment=settings.node_env,
        version=__version__,
    )
