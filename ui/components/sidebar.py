import streamlit as st
from typing import Any, Dict, List, Optional, Tuple

from domain.constants import EVALUATOR_MENU, GUIDANCE_MENU, PREF_SIDEBAR_COLLAPSED, ROLE_GUIDANCE
from services import preferences

NAV_KEY = "nav_page"

ROLE_TITLES = {
    ROLE_GUIDANCE: "Guidance Counselor",
}


def menu_for(role: str) -> List[Tuple[str, List[Tuple[str, str]]]]:
    return GUIDANCE_MENU if role == ROLE_GUIDANCE else EVALUATOR_MENU


def _on_toggle():
    preferences.toggle(PREF_SIDEBAR_COLLAPSED)


def render(user: Dict[str, Any], current: Optional[str] = None) -> Optional[str]:
    """
    Renders the grouped navigation menu for the user's role.

    The collapsed flag is persisted, so the sidebar keeps its state across
    reloads. When collapsed, group titles and the user caption are hidden.

    Returns:
        The page key that was clicked in this run, or None.
    """
    role = user.get('role', '')
    collapsed = bool(preferences.load(PREF_SIDEBAR_COLLAPSED, False))

    st.sidebar.toggle("Compact menu", value=collapsed, key="sidebar_collapsed_toggle",
                      on_change=_on_toggle)
    if not collapsed:
        st.sidebar.markdown(f"### {user.get('name') or 'Staff'}")
        st.sidebar.caption(ROLE_TITLES.get(role, "Evaluator"))

    clicked = None
    for group_title, items in menu_for(role):
        if not collapsed:
            st.sidebar.markdown(f"**{group_title}**")
        for page_key, label in items:
            is_current = page_key == current
            if st.sidebar.button(label, key=f"nav_{page_key}", use_container_width=True,
                                 type="primary" if is_current else "secondary"):
                clicked = page_key
    return clicked
