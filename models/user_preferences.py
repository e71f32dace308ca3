"""
User Preferences - Pydantic models for typed JSON access.

These models define the structure of the Preferences JSON blob
stored in the UserPreferences table.
"""

import json

from pydantic import BaseModel, Field


# Mandarin edge-tts voices (the command vocabulary is Mandarin too)
VOICE_OPTIONS = {
    "zh-CN-XiaoxiaoNeural": "晓晓 (Female)",
    "zh-CN-XiaoyiNeural": "晓伊 (Female)",
    "zh-CN-YunxiNeural": "云希 (Male)",
    "zh-CN-YunjianNeural": "云健 (Male)",
    "zh-CN-YunyangNeural": "云扬 (Male, news)",
}

DEFAULT_VOICE_NAME = "zh-CN-XiaoxiaoNeural"
DEFAULT_VOICE_RATE = "+0%"

# Slider value -> edge-tts rate
SPEED_OPTIONS = {
    -2: "-20%",
    -1: "-10%",
    0: "+0%",
    1: "+10%",
    2: "+20%",
}


class VoicePreferences(BaseModel):
    """Spoken prompt settings for the cooking console."""
    enabled: bool = Field(default=True, description="Speak prompts while cooking")
    name: str = Field(default=DEFAULT_VOICE_NAME, description="Edge-TTS voice ID")
    rate: str = Field(default=DEFAULT_VOICE_RATE, description="Speech rate (e.g., '+20%')")


class UserPreferencesData(BaseModel):
    """Root preferences model."""
    voice: VoicePreferences = Field(default_factory=VoicePreferences)

    @classmethod
    def from_json(cls, json_str: str) -> "UserPreferencesData":
        """Parse preferences from JSON string, with defaults for missing fields."""
        try:
            data = json.loads(json_str) if json_str else {}
            return cls.model_validate(data)
        except (json.JSONDecodeError, ValueError):
            return cls()

    def to_json(self) -> str:
        return self.model_dump_json()


def rate_to_slider_value(rate: str) -> int:
    """Convert edge-tts rate string to slider value."""
    for slider_val, rate_str in SPEED_OPTIONS.items():
        if rate_str == rate:
            return slider_val
    return 0


def slider_value_to_rate(slider_val: int) -> str:
    """Convert slider value to edge-tts rate string."""
    return SPEED_OPTIONS.get(slider_val, DEFAULT_VOICE_RATE)
