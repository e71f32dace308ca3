"""
Edge-TTS speech output.

Synthesis runs on a worker thread so the console never waits on the
network. Each speak() bumps a generation counter; audio from an older
generation is dropped, which is how an in-flight utterance is cancelled.
The finished MP3 is kept as pending audio for the view to play.
"""

import logging
import threading
from typing import Callable, Optional

from config.settings import get_settings
from models.user_preferences import DEFAULT_VOICE_NAME, DEFAULT_VOICE_RATE
from services.audio_service import AudioService
from services.speech.base import SpeechOutput

logger = logging.getLogger(__name__)


class EdgeSpeech(SpeechOutput):
    """Speech output backed by edge-tts."""

    def __init__(
        self,
        audio: Optional[AudioService] = None,
        voice: str = DEFAULT_VOICE_NAME,
        rate: str = DEFAULT_VOICE_RATE,
        enabled: Optional[bool] = None,
        on_audio: Optional[Callable[[bytes], None]] = None,
    ):
        self.audio = audio or AudioService()
        self.voice = voice
        self.rate = rate
        self.on_audio = on_audio
        self.last_text: Optional[str] = None
        self._supported = get_settings().voice_output_enabled if enabled is None else enabled
        self._generation = 0
        self._pending_audio: Optional[bytes] = None
        self._worker: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def supported(self) -> bool:
        return self._supported

    def speak(self, text: str, rate: Optional[str] = None) -> None:
        if not self._supported or not text:
            return

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._pending_audio = None
            self.last_text = text

        worker = threading.Thread(
            target=self._synthesize,
            args=(text, rate or self.rate, generation),
            daemon=True,
        )
        self._worker = worker
        worker.start()

    def stop(self) -> None:
        with self._lock:
            self._generation += 1
            self._pending_audio = None

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the current utterance is synthesized (used by the view)."""
        worker = self._worker
        if worker is not None:
            worker.join(timeout)

    def take_pending_audio(self) -> Optional[bytes]:
        """Get pending audio for playback and clear it."""
        with self._lock:
            audio = self._pending_audio
            self._pending_audio = None
            return audio

    def _synthesize(self, text: str, rate: str, generation: int) -> None:
        audio = self.audio.text_to_speech(text, voice=self.voice, rate=rate)
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Dropped cancelled utterance: {text!r}")
                return
            self._pending_audio = audio
        if audio and self.on_audio:
            self.on_audio(audio)
