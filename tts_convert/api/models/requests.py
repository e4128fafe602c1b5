"""API request models."""

from pydantic import Field

from tts_convert.core.models import CamelModel


class ConvertRequest(CamelModel):
    """JSON body accepted by POST /convert for inline text."""

    user_id: str | None = Field(default=None, description="Owner of the conversion")
    text: str | None = Field(default=None, description="Text to convert to speech")
    voice_name: str | None = Field(
        default=None,
        description="Google voice name, e.g. 'en-US-Wavenet-D'",
    )

    model_config = {"extra": "ignore"}
