"""Speech synthesis adapters."""

from tts_convert.synthesis.google import GoogleSpeechSynthesizer, language_code_from_voice
from tts_convert.synthesis.mock import MockSpeechSynthesizer

__all__ = [
    "GoogleSpeechSynthesizer",
    "MockSpeechSynthesizer",
    "language_code_from_voice",
]
