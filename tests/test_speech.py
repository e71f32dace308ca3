"""
Speech adapter tests with a fake audio engine.
"""

import threading

import pytest

from services.speech import EdgeSpeech, NullListener, NullSpeech, RecognizerListener


class FakeAudio:
    """Stands in for AudioService; synthesis blocks until released."""

    def __init__(self, transcript="下一步"):
        self.transcript = transcript
        self.release = threading.Event()
        self.release.set()
        self.synthesized = []

    def text_to_speech(self, text, voice=None, rate=None):
        self.release.wait(2)
        self.synthesized.append((text, voice, rate))
        return text.encode("utf-8")

    def transcribe(self, audio_bytes):
        return self.transcript


@pytest.fixture
def audio():
    return FakeAudio()


class TestEdgeSpeech:

    def test_speak_produces_pending_audio(self, audio):
        speech = EdgeSpeech(audio=audio, voice="zh-CN-YunxiNeural", rate="+10%", enabled=True)
        speech.speak("烹饪已暂停")
        speech.wait(2)

        assert speech.take_pending_audio() == "烹饪已暂停".encode("utf-8")
        assert speech.take_pending_audio() is None
        assert audio.synthesized == [("烹饪已暂停", "zh-CN-YunxiNeural", "+10%")]

    def test_new_utterance_cancels_old_one(self, audio):
        speech = EdgeSpeech(audio=audio, enabled=True)
        audio.release.clear()
        speech.speak("第一句")
        first = speech._worker
        speech.speak("第二句")
        audio.release.set()
        first.join(2)
        speech.wait(2)

        assert speech.take_pending_audio() == "第二句".encode("utf-8")
        assert speech.last_text == "第二句"

    def test_stop_drops_in_flight_audio(self, audio):
        speech = EdgeSpeech(audio=audio, enabled=True)
        audio.release.clear()
        speech.speak("继续烹饪")
        speech.stop()
        audio.release.set()
        speech.wait(2)

        assert speech.take_pending_audio() is None

    def test_disabled_does_nothing(self, audio):
        speech = EdgeSpeech(audio=audio, enabled=False)
        speech.speak("继续烹饪")

        assert not speech.supported
        assert audio.synthesized == []


class TestRecognizerListener:

    def test_transcript_reaches_callback(self, audio):
        heard = []
        listener = RecognizerListener(audio=audio, enabled=True)
        listener.start_listening(b"wav", heard.append)
        listener.wait(2)

        assert heard == ["下一步"]
        assert listener.last_transcript == "下一步"

    def test_nothing_recognized(self):
        heard = []
        listener = RecognizerListener(audio=FakeAudio(transcript=None), enabled=True)
        listener.start_listening(b"wav", heard.append)
        listener.wait(2)

        assert heard == []

    def test_callback_errors_are_contained(self, audio):
        def explode(text):
            raise RuntimeError("handler failed")

        listener = RecognizerListener(audio=audio, enabled=True)
        listener.start_listening(b"wav", explode)
        listener.wait(2)

        assert listener.last_transcript == "下一步"


def test_null_capabilities_are_inert():
    assert not NullSpeech().supported
    NullSpeech().speak("任何")
    NullSpeech().stop()
    assert not NullListener().supported
    NullListener().start_listening(b"", lambda text: None)
    NullListener().stop_listening()
