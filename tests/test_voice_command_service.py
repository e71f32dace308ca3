"""
Voice command interpreter tests.
"""

import pytest

from models.voice_commands import CommandType, QueryTarget
from services.voice_command_service import VoiceCommandService


@pytest.fixture
def interpreter():
    return VoiceCommandService()


@pytest.mark.parametrize("transcript, expected_type, expected_target", [
    ("开始烹饪", CommandType.START, None),
    ("继续", CommandType.START, None),
    ("暂停一下", CommandType.PAUSE, None),
    ("停止", CommandType.PAUSE, None),
    ("下一步", CommandType.NEXT, None),
    ("下一个菜", CommandType.NEXT, None),
    ("重复一下", CommandType.REPEAT, None),
    ("再说一遍", CommandType.REPEAT, None),
    ("还有多久", CommandType.QUERY, QueryTarget.TIME),
    ("要多久", CommandType.QUERY, QueryTarget.TIME),
    ("温度是多少", CommandType.QUERY, QueryTarget.TEMPERATURE),
])
def test_vocabulary(interpreter, transcript, expected_type, expected_target):
    command = interpreter.parse(transcript)

    assert command is not None
    assert command.type == expected_type
    assert command.target == expected_target


def test_unrecognized_speech(interpreter):
    assert interpreter.parse("随便说点什么") is None


def test_empty_transcript(interpreter):
    assert interpreter.parse("") is None
    assert interpreter.parse(None) is None


def test_first_rule_wins(interpreter):
    """Start is checked before next, time before temperature."""
    assert interpreter.parse("开始下一步").type == CommandType.START
    assert interpreter.parse("还有温度吗").target == QueryTarget.TIME


def test_surrounding_whitespace(interpreter):
    assert interpreter.parse("  暂停  ").type == CommandType.PAUSE


def test_same_transcript_same_command(interpreter):
    assert interpreter.parse("还有多久") == interpreter.parse("还有多久")


def test_returned_commands_are_independent(interpreter):
    command = interpreter.parse("开始")
    command.target = QueryTarget.TIME
    assert interpreter.parse("开始").target is None
