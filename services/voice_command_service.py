"""
Voice Command Service - maps spoken transcripts to console commands.

A keyword matcher over a small fixed Mandarin vocabulary. Rules are checked
in order and the first one with a matching phrase wins, so "继续" (continue)
resolves to START before anything else is considered. Anything unmatched
is ignored by the caller.
"""

import logging
from typing import Optional

from models.voice_commands import CommandType, QueryTarget, VoiceCommand

logger = logging.getLogger(__name__)

# (phrases, command) in priority order
COMMAND_RULES: tuple[tuple[tuple[str, ...], VoiceCommand], ...] = (
    (("开始", "继续"), VoiceCommand(type=CommandType.START)),
    (("暂停", "停止"), VoiceCommand(type=CommandType.PAUSE)),
    (("下一步", "下一个"), VoiceCommand(type=CommandType.NEXT)),
    (("重复", "再说一遍"), VoiceCommand(type=CommandType.REPEAT)),
    (("多久", "还有"), VoiceCommand(type=CommandType.QUERY, target=QueryTarget.TIME)),
    (("温度",), VoiceCommand(type=CommandType.QUERY, target=QueryTarget.TEMPERATURE)),
)


class VoiceCommandService:
    """Interprets transcripts as VoiceCommand values."""

    def __init__(self, rules=COMMAND_RULES):
        self.rules = rules

    def parse(self, transcript: Optional[str]) -> Optional[VoiceCommand]:
        """
        Parse a transcript.

        Returns:
            The first matching command, or None when nothing matches
        """
        if not transcript:
            return None

        text = transcript.strip().lower()
        for phrases, command in self.rules:
            if any(phrase in text for phrase in phrases):
                logger.debug(f"Transcript {transcript!r} -> {command.type.value}")
                return command.model_copy()

        logger.debug(f"No command in transcript {transcript!r}")
        return None
