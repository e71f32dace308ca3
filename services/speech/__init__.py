"""
Speech capabilities - text-to-speech output and speech recognition input.
"""

from services.speech.base import SpeechOutput, SpeechInput, NullSpeech, NullListener
from services.speech.edge import EdgeSpeech
from services.speech.listener import RecognizerListener

__all__ = [
    "SpeechOutput",
    "SpeechInput",
    "NullSpeech",
    "NullListener",
    "EdgeSpeech",
    "RecognizerListener",
]
