"""Mock synthesizer for local development and tests."""

import hashlib
from collections import deque

from tts_convert.core.interfaces import SpeechSynthesizer
from tts_convert.synthesis.google import language_code_from_voice
from tts_convert.utils.logging import get_logger

logger = get_logger("synthesis")

# ID3v2.4 header with an empty tag, followed by an MPEG-1 Layer III frame header
_MP3_PREFIX = b"ID3\x04\x00\x00\x00\x00\x00\x00" + b"\xff\xfb\x90\x64"

# Most recent (text, voice) pairs kept for inspection
MAX_RECORDED_CALLS = 100


class MockSpeechSynthesizer(SpeechSynthesizer):
    """Returns deterministic MP3-framed bytes without calling any service."""

    def __init__(self, max_recorded_calls: int = MAX_RECORDED_CALLS) -> None:
        self.calls: deque[tuple[str, str]] = deque(maxlen=max_recorded_calls)

    async def synthesize(self, text: str, voice_name: str) -> bytes:
        self.calls.append((text, voice_name))
        digest = hashlib.sha256(f"{voice_name}:{text}".encode("utf-8")).digest()
        logger.debug(
            "Mock synthesis",
            voice_name=voice_name,
            language_code=language_code_from_voice(voice_name),
            text_length=len(text),
        )
        return _MP3_PREFIX + digest
