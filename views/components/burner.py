"""
Burner and schedule UI components.
"""

import streamlit as st

from models.cooking import BurnerState, DishStatus, Equipment, ScheduledDish

BURNER_LABELS = {
    Equipment.LEFT: "Left burner",
    Equipment.RIGHT: "Right burner",
}

DISH_STATUS_ICONS = {
    DishStatus.PENDING: "⏳",
    DishStatus.COOKING: "🔥",
    DishStatus.COMPLETED: "✅",
}


def render_burner_card(equipment: Equipment, burner: BurnerState):
    """
    Render the live state of one burner.

    Args:
        equipment: Which burner (LEFT or RIGHT)
        burner: Its projected state at the current minute
    """
    with st.container(border=True):
        st.markdown(f"**{BURNER_LABELS[equipment]}**")

        if not burner.active:
            st.caption("Idle")
            return

        st.markdown(f"### {burner.recipe_name}")
        if burner.current_task:
            st.markdown(f"Step: {burner.current_task.name}")
        st.metric("Remaining", f"{burner.remaining_time} min")
        if burner.temperature is not None:
            st.caption(f"Temperature: {burner.temperature}°C")


def render_dish_list(dishes: list[ScheduledDish]):
    """Render the schedule as one row per dish."""
    if not dishes:
        st.info("No dishes scheduled.")
        return

    for dish in dishes:
        icon = DISH_STATUS_ICONS.get(dish.status, "")
        st.markdown(
            f"{icon} **{dish.recipe_name or dish.recipe_id}** · "
            f"{BURNER_LABELS[dish.equipment]} · "
            f"minute {dish.start_time}-{dish.end_time} ({dish.duration} min)"
        )


def render_schedule_preview(dishes: list[ScheduledDish], total_duration: int):
    """Render a planned schedule before the session is created."""
    left_col, right_col = st.columns(2)

    for column, equipment in ((left_col, Equipment.LEFT), (right_col, Equipment.RIGHT)):
        with column:
            st.markdown(f"**{BURNER_LABELS[equipment]}**")
            burner_dishes = [d for d in dishes if d.equipment == equipment]
            if not burner_dishes:
                st.caption("Unused")
            for dish in burner_dishes:
                st.markdown(f"- {dish.recipe_name or dish.recipe_id}: {dish.start_time}-{dish.end_time} min")

    st.caption(f"Estimated total time: {total_duration} min")
