"""Google Cloud Text-to-Speech synthesizer."""

from google.cloud import texttospeech

from tts_convert.api.exceptions import SynthesisFailedError
from tts_convert.config.settings import SynthesisSettings
from tts_convert.core.interfaces import SpeechSynthesizer
from tts_convert.utils.logging import get_logger

logger = get_logger("synthesis")


def language_code_from_voice(voice_name: str) -> str:
    """`en-US-Wavenet-D` -> `en-US` (first two hyphen-delimited segments)."""
    return "-".join(voice_name.split("-")[:2])


class GoogleSpeechSynthesizer(SpeechSynthesizer):
    """
    Synthesizes MP3 audio with Google Cloud Text-to-Speech.

    Encoding, pitch, speaking rate and the effects profile are fixed per process
    by SynthesisSettings; only the voice varies per request.
    """

    def __init__(
        self,
        settings: SynthesisSettings,
        client: texttospeech.TextToSpeechAsyncClient | None = None,
        credentials=None,
    ) -> None:
        self._settings = settings
        self._client = client or texttospeech.TextToSpeechAsyncClient(credentials=credentials)

    def build_request(self, text: str, voice_name: str) -> texttospeech.SynthesizeSpeechRequest:
        return texttospeech.SynthesizeSpeechRequest(
            input=texttospeech.SynthesisInput(text=text),
            voice=texttospeech.VoiceSelectionParams(
                name=voice_name,
                language_code=language_code_from_voice(voice_name),
            ),
            audio_config=texttospeech.AudioConfig(
                audio_encoding=texttospeech.AudioEncoding.MP3,
                effects_profile_id=[self._settings.effects_profile_id],
                pitch=self._settings.pitch,
                speaking_rate=self._settings.speaking_rate,
            ),
        )

    async def synthesize(self, text: str, voice_name: str) -> bytes:
        request = self.build_request(text, voice_name)

        logger.info(
            "Converting text to audio",
            voice_name=voice_name,
            language_code=request.voice.language_code,
            text_preview=text[:50],
        )

        try:
            response = await self._client.synthesize_speech(request=request)
        except Exception as e:
            logger.error("Speech synthesis failed", voice_name=voice_name, error=str(e))
            raise SynthesisFailedError(voice_name, str(e)) from e

        audio = response.audio_content
        logger.info("Audio generated", voice_name=voice_name, size_bytes=len(audio))
        return audio

    async def close(self) -> None:
        await self._client.transport.close()
