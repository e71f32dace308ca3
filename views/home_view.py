"""
Home View - Landing page for the dual-burner cooking console.

Displays navigation options and feature descriptions.
"""

import streamlit as st


class HomeView:
    """View for the home/landing page."""

    def render(self) -> None:
        """Render the home page."""
        st.title("Dual-Burner Cooking")
        st.markdown("Cook several dishes at once on a two-burner stove")

        st.markdown("---")

        col1, col2 = st.columns(2)

        with col1:
            self._render_cook_card()

        with col2:
            self._render_voice_card()

        st.markdown("---")
        st.markdown("*Use the sidebar to navigate between pages.*")

    def _render_cook_card(self) -> None:
        """Render the Cook card."""
        st.markdown("### Cook Together")
        st.markdown("""
        Pick the dishes for tonight and get a burner plan.

        - Longest dishes are scheduled first
        - Left/right burner preferences are respected
        - Live burner status and remaining time
        - Pause, resume and step through the recipe
        """)
        if st.button("Start Cooking →", type="primary", use_container_width=True):
            st.switch_page("pages/1_🍳_Cook.py")

    def _render_voice_card(self) -> None:
        """Render the voice control description."""
        st.markdown("### Hands-Free")
        st.markdown("""
        Control the console with Mandarin voice commands.

        - 开始 / 继续: start or resume
        - 暂停: pause
        - 下一步 / 重复: next or repeat a step
        - 还有多久 / 温度: time left or temperature
        """)
