"""Health check endpoints.

Prefix: /health
"""

from fastapi import APIRouter, Request

from tts_convert.api.dependencies import SettingsDep
from tts_convert.api.models.responses import HealthResponse, ReadinessResponse

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthResponse)
@router.get("/", response_model=HealthResponse, include_in_schema=False)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Basic health check - the service is up."""
    return HealthResponse(status="OK", service=settings.app.name)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Readiness check: the conversion orchestrator is wired."""
    checks = {
        "orchestrator": getattr(request.app.state, "orchestrator", None) is not None,
    }
    return ReadinessResponse(ready=all(checks.values()), checks=checks)


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """Liveness check: always alive while responding."""
    return {"status": "alive"}
