"""
Voice command models - the closed set of intents the console understands.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class CommandType(str, Enum):
    START = "start"
    PAUSE = "pause"
    NEXT = "next"
    REPEAT = "repeat"
    QUERY = "query"


class QueryTarget(str, Enum):
    TIME = "time"
    TEMPERATURE = "temperature"


class VoiceCommand(BaseModel):
    """A parsed command; `target` is only set for QUERY."""
    type: CommandType
    target: Optional[QueryTarget] = None
