"""
Cooking session sidebar component.
"""

import streamlit as st
from typing import Callable, Optional

from models.cooking import CookingSessionData, SessionStatus

STATUS_LABELS = {
    SessionStatus.PENDING: "Not started",
    SessionStatus.COOKING: "Cooking",
    SessionStatus.PAUSED: "Paused",
    SessionStatus.COMPLETED: "Completed",
}


def render_cooking_sidebar(
    user_name: str,
    history: list[CookingSessionData],
    current_session_id: Optional[str],
    on_open_session: Callable[[str], None],
    on_leave_session: Callable[[], None],
):
    """
    Render the cooking sidebar.

    Args:
        user_name: Display name of the signed-in user
        history: The user's sessions, newest first
        current_session_id: Session open in the console, if any
        on_open_session: Callback to reopen a session by id
        on_leave_session: Callback to close the console
    """
    with st.sidebar:
        st.markdown(f"### {user_name}")

        if current_session_id:
            if st.button("Back to Recipes", type="secondary", use_container_width=True):
                on_leave_session()
                st.rerun()

        st.markdown("---")
        st.markdown("**Recent sessions**")

        if not history:
            st.caption("No sessions yet")
            return

        for session in history:
            label = session.name or session.id
            status = STATUS_LABELS.get(session.status, session.status.value)
            if session.is_temporary:
                status += " · not saved"
            st.caption(f"{status} · {session.total_duration} min")
            if st.button(
                label,
                key=f"history_{session.id}",
                use_container_width=True,
                disabled=session.id == current_session_id,
            ):
                on_open_session(session.id)
                st.rerun()
