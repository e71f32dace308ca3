"""
Dual-Burner Cooking - Home Page

Schedules several recipes across a left and a right burner and guides
the cook through them with spoken prompts and voice commands.
"""

import streamlit as st

# Page configuration (must be first Streamlit command)
st.set_page_config(
    page_title="Dual-Burner Cooking",
    page_icon="🍳",
    layout="wide"
)

from config import configure_logging, init_db
from services.recipe_service import RecipeService
from views.home_view import HomeView

configure_logging()
init_db()
RecipeService().seed_if_empty()

view = HomeView()
view.render()
