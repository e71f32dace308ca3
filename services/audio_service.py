"""
Audio Service - the speech engines behind the console's voice capabilities.

This service is pure Python with no Streamlit dependencies.
- Recognition: SpeechRecognition's Google recognizer, Mandarin by default
- Synthesis: edge-tts neural voices, returned as MP3 bytes

Both calls block; services.speech runs them on worker threads. Engine
failures are logged and reported as None so a missing network never
interrupts a cooking session.
"""

import asyncio
import io
import logging
from typing import Optional

import edge_tts
import speech_recognition as sr

from config.settings import get_settings
from models.user_preferences import DEFAULT_VOICE_NAME, DEFAULT_VOICE_RATE

logger = logging.getLogger(__name__)


class AudioService:
    """Blocking speech recognition and synthesis."""

    def __init__(self, language: Optional[str] = None):
        self.recognizer = sr.Recognizer()
        self.language = language or get_settings().voice_language

    def transcribe(self, audio_bytes: bytes) -> Optional[str]:
        """
        Recognize a WAV recording.

        Returns:
            The transcript, or None if nothing was understood
        """
        try:
            with sr.AudioFile(io.BytesIO(audio_bytes)) as source:
                recording = self.recognizer.record(source)
            return self.recognizer.recognize_google(recording, language=self.language)
        except sr.UnknownValueError:
            logger.info("No speech recognized in recording")
        except sr.RequestError as e:
            logger.error(f"Speech recognition service error: {e}")
        except (ValueError, EOFError) as e:
            logger.warning(f"Unreadable recording: {e}")
        return None

    def text_to_speech(
        self,
        text: str,
        voice: str = DEFAULT_VOICE_NAME,
        rate: str = DEFAULT_VOICE_RATE
    ) -> Optional[bytes]:
        """
        Synthesize text with edge-tts.

        Args:
            text: Prompt to speak
            voice: Edge-TTS voice ID (e.g., 'zh-CN-XiaoxiaoNeural')
            rate: Speech rate (e.g., '+20%', '-10%')

        Returns:
            MP3 audio bytes, or None if synthesis failed
        """
        try:
            return asyncio.run(self._synthesize(text, voice, rate))
        except Exception as e:
            logger.error(f"TTS error for {text!r}: {e}")
            return None

    @staticmethod
    async def _synthesize(text: str, voice: str, rate: str) -> Optional[bytes]:
        communicate = edge_tts.Communicate(text, voice, rate=rate)
        chunks = [
            chunk["data"]
            async for chunk in communicate.stream()
            if chunk["type"] == "audio"
        ]
        return b"".join(chunks) or None
