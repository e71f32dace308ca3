"""
Speech recognition input.

Recognition of one recording runs on a worker thread and hands the
transcript to a callback. Starting a new recognition, or stopping, drops
the result of the one in flight.
"""

import logging
import threading
from typing import Optional

from config.settings import get_settings
from services.audio_service import AudioService
from services.speech.base import SpeechInput, TranscriptCallback

logger = logging.getLogger(__name__)


class RecognizerListener(SpeechInput):
    """Speech input backed by AudioService.transcribe."""

    def __init__(self, audio: Optional[AudioService] = None, enabled: Optional[bool] = None):
        self.audio = audio or AudioService()
        self.last_transcript: Optional[str] = None
        self._supported = get_settings().voice_input_enabled if enabled is None else enabled
        self._generation = 0
        self._worker: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def supported(self) -> bool:
        return self._supported

    @property
    def listening(self) -> bool:
        worker = self._worker
        return worker is not None and worker.is_alive()

    def start_listening(self, audio_bytes: bytes, on_transcript: TranscriptCallback) -> None:
        if not self._supported or not audio_bytes:
            return

        with self._lock:
            self._generation += 1
            generation = self._generation

        worker = threading.Thread(
            target=self._recognize,
            args=(audio_bytes, on_transcript, generation),
            daemon=True,
        )
        self._worker = worker
        worker.start()

    def stop_listening(self) -> None:
        with self._lock:
            self._generation += 1

    def wait(self, timeout: Optional[float] = None) -> None:
        worker = self._worker
        if worker is not None:
            worker.join(timeout)

    def _recognize(self, audio_bytes: bytes, on_transcript: TranscriptCallback, generation: int) -> None:
        text = self.audio.transcribe(audio_bytes)
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropped cancelled recognition")
                return
            self.last_transcript = text
        if not text:
            return
        try:
            on_transcript(text)
        except Exception as e:
            logger.error(f"Transcript handler failed: {e}")
