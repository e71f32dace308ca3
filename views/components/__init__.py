"""
Reusable UI components.
"""

from views.components.burner import (
    render_burner_card,
    render_dish_list,
    render_schedule_preview,
)
from views.components.voice_panel import render_voice_panel

# Sidebar components
from views.components.sidebar import render_cooking_sidebar

__all__ = [
    # Burners & schedule
    "render_burner_card",
    "render_dish_list",
    "render_schedule_preview",
    # Voice
    "render_voice_panel",
    # Sidebar
    "render_cooking_sidebar",
]
