"""Main entry point for the conversion backend.

Usage:
    python -m tts_convert.main
    uvicorn tts_convert.main:app --reload
"""

from tts_convert.api.app import create_app
from tts_convert.config import get_settings

app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "tts_convert.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    run()
