"""
Base classes for speech capabilities.

The cooking controller only talks to these interfaces. Every method must be
safe to call when the capability is unsupported: it simply does nothing.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

TranscriptCallback = Callable[[str], None]


class SpeechOutput(ABC):
    """Fire-and-forget speech synthesis, at most one utterance in flight."""

    @property
    @abstractmethod
    def supported(self) -> bool:
        """Decided once at construction."""
        pass

    @abstractmethod
    def speak(self, text: str, rate: Optional[str] = None) -> None:
        """
        Speak text, cancelling any utterance still in flight.

        Args:
            text: Text to speak
            rate: Optional edge-tts style rate override (e.g., '+10%')
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Cancel the in-flight utterance, if any."""
        pass


class SpeechInput(ABC):
    """Single-shot speech recognition, at most one recognition in flight."""

    @property
    @abstractmethod
    def supported(self) -> bool:
        pass

    @abstractmethod
    def start_listening(self, audio_bytes: bytes, on_transcript: TranscriptCallback) -> None:
        """Recognize a recording and deliver the transcript through the callback."""
        pass

    @abstractmethod
    def stop_listening(self) -> None:
        pass


class NullSpeech(SpeechOutput):
    """Speech output for runtimes without a speech engine, and for tests."""

    @property
    def supported(self) -> bool:
        return False

    def speak(self, text: str, rate: Optional[str] = None) -> None:
        pass

    def stop(self) -> None:
        pass


class NullListener(SpeechInput):

    @property
    def supported(self) -> bool:
        return False

    def start_listening(self, audio_bytes: bytes, on_transcript: TranscriptCallback) -> None:
        pass

    def stop_listening(self) -> None:
        pass
