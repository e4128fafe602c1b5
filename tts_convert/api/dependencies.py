"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from tts_convert.api.exceptions import UpstreamError
from tts_convert.config import Settings
from tts_convert.core.orchestrator import ConversionOrchestrator


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_orchestrator(request: Request) -> ConversionOrchestrator:
    """Get the conversion orchestrator from application state."""
    orchestrator: ConversionOrchestrator | None = getattr(
        request.app.state, "orchestrator", None
    )
    if orchestrator is None:
        raise UpstreamError("Conversion service is not initialized")
    return orchestrator


# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
OrchestratorDep = Annotated[ConversionOrchestrator, Depends(get_orchestrator)]
