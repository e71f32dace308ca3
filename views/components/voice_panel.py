"""
Voice Panel Component - hands-free controls for the cooking console.

Push-to-talk recording for voice commands, playback of the latest spoken
prompt, and the user's voice settings (on/off, voice, speed).
"""

import streamlit as st
from typing import Callable, Optional

from models.user_preferences import SPEED_OPTIONS

SPEED_LABELS = {
    -2: "Slower",
    -1: "Slow",
    0: "Normal",
    1: "Fast",
    2: "Faster",
}

COMMAND_HINT = "开始 · 暂停 · 继续 · 下一步 · 重复 · 还有多久 · 温度"

# Large, centered record button for use with wet or floury hands
MIC_BUTTON_CSS = """
<style>
    div[data-testid="stAudioInput"] { display: flex; justify-content: center; }
    div[data-testid="stAudioInput"] > button {
        height: 80px !important;
        min-height: 80px !important;
        border-radius: 40px !important;
    }
</style>
"""


def render_voice_panel(
    audio_key: int,
    pending_audio: Optional[bytes],
    voices: dict[str, str],
    current_voice: str,
    current_speed: int,
    voice_enabled: bool,
    on_voice_change: Callable[[str], None],
    on_speed_change: Callable[[int], None],
    on_enabled_change: Callable[[bool], None],
    last_transcript: Optional[str] = None,
) -> Optional[bytes]:
    """
    Render the voice panel.

    Args:
        audio_key: Key suffix for the recorder; bump it to clear the widget
        pending_audio: MP3 of the latest prompt, autoplayed once
        voices: {voice_id: display_name}
        current_voice: Selected voice ID
        current_speed: Slider value (see SPEED_OPTIONS)
        voice_enabled: Whether prompts are spoken
        on_voice_change / on_speed_change / on_enabled_change: Setting callbacks
        last_transcript: Last recognized command text

    Returns:
        The recorded WAV bytes, or None
    """
    recorded = _render_recorder(audio_key, last_transcript)

    if pending_audio:
        st.audio(pending_audio, format="audio/mp3", autoplay=True)

    st.markdown("---")

    enabled = st.toggle("Voice prompts", value=voice_enabled, key="voice_panel_enabled")
    if enabled != voice_enabled:
        on_enabled_change(enabled)

    _render_voice_selector(voices, current_voice, on_voice_change, disabled=not enabled)
    _render_speed_slider(current_speed, on_speed_change, disabled=not enabled)

    return recorded


def _render_recorder(audio_key: int, last_transcript: Optional[str]) -> Optional[bytes]:
    st.markdown(MIC_BUTTON_CSS, unsafe_allow_html=True)
    st.markdown("**Say a command**")
    st.caption(COMMAND_HINT)

    recording = st.audio_input(
        "Record a command",
        key=f"audio_input_{audio_key}",
        label_visibility="collapsed"
    )

    if last_transcript:
        st.caption(f"Heard: {last_transcript}")

    return recording.read() if recording else None


def _render_voice_selector(
    voices: dict[str, str],
    current_voice: str,
    on_change: Callable[[str], None],
    disabled: bool,
):
    voice_ids = list(voices)
    selected = st.selectbox(
        "Voice",
        options=voice_ids,
        index=voice_ids.index(current_voice) if current_voice in voices else 0,
        format_func=voices.get,
        key="voice_panel_voice",
        disabled=disabled,
    )
    if selected != current_voice:
        on_change(selected)


def _render_speed_slider(current_speed: int, on_change: Callable[[int], None], disabled: bool):
    speed = st.select_slider(
        "Speed",
        options=sorted(SPEED_OPTIONS),
        value=current_speed,
        format_func=lambda value: SPEED_LABELS.get(value, "Normal"),
        key="voice_panel_speed",
        disabled=disabled,
    )
    if speed != current_speed:
        on_change(speed)
