"""
Cooking View - UI for dual-burner cooking sessions.

This view handles all rendering for the cooking console: recipe selection
with a schedule preview, then the live console. It delegates session
behavior to the CookingController and keeps only widget plumbing in
st.session_state.
"""

import logging
from typing import Optional

import streamlit as st

from config.auth import get_user_display_name, get_user_id
from config.settings import get_settings
from controllers.cooking_controller import CookingController
from models.cooking import CookingSessionData, Equipment, SessionStatus
from models.user_preferences import (
    VOICE_OPTIONS,
    VoicePreferences,
    rate_to_slider_value,
    slider_value_to_rate,
)
from services.local_session_store import LocalSessionStore
from services.preferences_service import PreferencesService
from services.recipe_service import RecipeService
from services.scheduler_service import calculate_total_duration, schedule_dual_burner
from services.session_service import CookingSessionService
from services.speech import EdgeSpeech, RecognizerListener
from views.components import (
    render_burner_card,
    render_cooking_sidebar,
    render_dish_list,
    render_schedule_preview,
    render_voice_panel,
)

logger = logging.getLogger(__name__)

# Seconds to wait for synthesis/recognition before rerendering
SPEECH_WAIT_SECONDS = 10.0


class CookingView:
    """View for the cooking console."""

    def __init__(self):
        self.settings = get_settings()
        self.user_id = get_user_id()
        self.preferences = PreferencesService()
        self._init_state()

    def _init_state(self):
        if "session_store" not in st.session_state:
            st.session_state.session_store = CookingSessionService(
                local_store=LocalSessionStore(st.session_state)
            )
        if "voice_prefs" not in st.session_state:
            st.session_state.voice_prefs = self.preferences.load_voice(self.user_id)
        if "speech" not in st.session_state:
            prefs = st.session_state.voice_prefs
            st.session_state.speech = EdgeSpeech(voice=prefs.name, rate=prefs.rate)
        if "listener" not in st.session_state:
            st.session_state.listener = RecognizerListener()
        if "audio_key" not in st.session_state:
            st.session_state.audio_key = 0
        if "cooking_controller" not in st.session_state:
            st.session_state.cooking_controller = None

    @property
    def store(self) -> CookingSessionService:
        return st.session_state.session_store

    @property
    def controller(self) -> Optional[CookingController]:
        return st.session_state.cooking_controller

    @property
    def speech(self) -> EdgeSpeech:
        return st.session_state.speech

    def render(self):
        """Main render method - displays appropriate UI based on state."""
        st.title("Dual-Burner Cooking")

        render_cooking_sidebar(
            user_name=get_user_display_name(),
            history=self._load_history(),
            current_session_id=self.controller.session.id if self.controller else None,
            on_open_session=self._open_session,
            on_leave_session=self._leave_session,
        )

        if "console_error" in st.session_state:
            st.error(st.session_state.pop("console_error"))

        if self.controller:
            self._render_console()
        else:
            self._render_recipe_selection()

    # ==========================================
    # Recipe selection
    # ==========================================

    def _render_recipe_selection(self):
        st.markdown("### Select Recipes")

        recipes = RecipeService().list_cookable_with_fallback()
        by_id = {r.id: r for r in recipes}

        selected_ids = st.multiselect(
            "Choose what to cook:",
            options=list(by_id.keys()),
            format_func=lambda rid: f"{by_id[rid].name} ({by_id[rid].total_duration} min)",
            placeholder="Select one or more recipes...",
        )

        if not selected_ids:
            st.caption("Dishes are spread over the left and right burners, longest first.")
            return

        selected = [by_id[rid] for rid in selected_ids]
        dishes = schedule_dual_burner(selected)
        render_schedule_preview(dishes, calculate_total_duration(dishes))

        if st.button("Create Cooking Session", type="primary", use_container_width=True):
            session = self.store.create_session(self.user_id, selected)
            if session.is_temporary:
                st.session_state.console_error = (
                    "The session could not be saved and is kept in this browser tab only."
                )
            self._attach(session)
            st.rerun()

    # ==========================================
    # Console
    # ==========================================

    def _render_console(self):
        controller = self.controller
        st.markdown(f"### {controller.session.name or 'Cooking session'}")

        main_col, voice_col = st.columns([3, 1])

        with main_col:
            self._render_live_state()
            self._render_controls()

        with voice_col:
            self._render_voice_panel()

    @st.fragment(run_every=get_settings().tick_seconds)
    def _render_live_state(self):
        """Progress, burners and dishes; refreshed on every tick."""
        controller = self.controller
        if controller is None:
            return

        status = controller.status.value
        if controller.is_paused:
            status = "paused"
        st.caption(
            f"Status: {status} · minute {controller.elapsed} of "
            f"{controller.session.total_duration} · {controller.remaining_minutes} min left"
        )
        st.progress(controller.progress_percent / 100)

        left_col, right_col = st.columns(2)
        with left_col:
            render_burner_card(Equipment.LEFT, controller.burner_state.left)
        with right_col:
            render_burner_card(Equipment.RIGHT, controller.burner_state.right)

        task = controller.current_task
        if task:
            st.info(f"Current step: {task.name} ({task.duration} min)")

        st.markdown("**Dishes**")
        render_dish_list(controller.session.scheduled_dishes)

    def _render_controls(self):
        controller = self.controller
        status = controller.status

        cols = st.columns(4)
        with cols[0]:
            if status == SessionStatus.PENDING:
                if st.button("Start", type="primary", use_container_width=True):
                    self._run(controller.start)
            elif controller.is_paused:
                if st.button("Resume", type="primary", use_container_width=True):
                    self._run(controller.resume)
            else:
                if st.button("Pause", use_container_width=True,
                             disabled=status == SessionStatus.COMPLETED):
                    self._run(controller.pause)
        with cols[1]:
            if st.button("Next Step", use_container_width=True,
                         disabled=status == SessionStatus.COMPLETED):
                self._run(controller.next_step)
        with cols[2]:
            if st.button("Repeat", use_container_width=True):
                controller.repeat()
                self._after_speech()
        with cols[3]:
            if st.button("Complete", use_container_width=True,
                         disabled=status == SessionStatus.PENDING or status == SessionStatus.COMPLETED):
                self._run(controller.complete)

        if status == SessionStatus.COMPLETED:
            st.success("All dishes are done.")

    def _render_voice_panel(self):
        st.markdown("### Voice Controls")
        prefs: VoicePreferences = st.session_state.voice_prefs
        listener: RecognizerListener = st.session_state.listener

        audio_bytes = render_voice_panel(
            audio_key=st.session_state.audio_key,
            pending_audio=self.speech.take_pending_audio(),
            voices=VOICE_OPTIONS,
            current_voice=prefs.name,
            current_speed=rate_to_slider_value(prefs.rate),
            voice_enabled=prefs.enabled,
            on_voice_change=lambda name: self._update_voice(voice_name=name),
            on_speed_change=lambda value: self._update_voice(voice_rate=slider_value_to_rate(value)),
            on_enabled_change=lambda enabled: self._update_voice(enabled=enabled),
            last_transcript=listener.last_transcript,
        )

        if audio_bytes:
            if not listener.supported:
                st.warning("Voice input is turned off.")
                return
            with st.spinner("Listening..."):
                listener.start_listening(audio_bytes, self.controller.handle_transcript)
                listener.wait(SPEECH_WAIT_SECONDS)
            st.session_state.audio_key += 1
            self._after_speech()

    # ==========================================
    # Actions
    # ==========================================

    def _run(self, action):
        success, error = action()
        if error:
            st.session_state.console_error = error
        elif success:
            self._after_speech()
            return
        st.rerun()

    def _after_speech(self):
        """Give the prompt time to synthesize so the rerun can play it."""
        self.speech.wait(SPEECH_WAIT_SECONDS)
        st.rerun()

    def _attach(self, session: CookingSessionData):
        prefs: VoicePreferences = st.session_state.voice_prefs
        st.session_state.cooking_controller = CookingController(
            session=session,
            store=self.store,
            speech=self.speech,
            voice_enabled=prefs.enabled,
        )

    def _open_session(self, session_id: str):
        session = self.store.load(session_id)
        if session is None:
            st.session_state.console_error = "That session could not be loaded right now."
            return
        self._leave_session()
        self._attach(session)

    def _leave_session(self):
        if self.controller:
            self.controller.close()
        st.session_state.cooking_controller = None

    # ==========================================
    # Data
    # ==========================================

    def _load_history(self) -> list[CookingSessionData]:
        return self.store.recent_sessions(self.user_id)

    def _update_voice(self, voice_name=None, voice_rate=None, enabled=None):
        """Apply a voice setting now and remember it for the user."""
        prefs = self.preferences.update_voice(
            self.user_id,
            st.session_state.voice_prefs,
            voice_name=voice_name,
            voice_rate=voice_rate,
            enabled=enabled,
        )
        st.session_state.voice_prefs = prefs
        self.speech.voice = prefs.name
        self.speech.rate = prefs.rate
        if self.controller:
            self.controller.set_voice_enabled(prefs.enabled)
