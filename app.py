import logging
from functools import partial

import streamlit as st

from config import settings
from domain.constants import ROLE_EVALUATOR, ROLE_GUIDANCE
from services import profile as profile_svc
from services import session
from services.errors import PortalError
from ui.components import flush_notifications, inject_base_css, sidebar

# Import the page rendering functions from the view modules
from views import dashboard, profile, question_bank, question_builder
from views.evaluator import department_exams, exam_results as evaluator_results, student_results
from views.guidance import (
    course_management,
    evaluator_management,
    exam_management,
    exam_results as guidance_results,
    personality_test_management,
    recommendation_rules,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --- Page Registry ---
# Maps a page key to its label, rendering function and the role allowed to open it.
PAGE_REGISTRY = {
    # Guidance counselor
    "guidance_dashboard": {
        "label": "📊 Dashboard",
        "render_func": partial(dashboard.render, ROLE_GUIDANCE),
        "role": ROLE_GUIDANCE,
    },
    "guidance_question_bank": {
        "label": "📚 Question Bank",
        "render_func": partial(question_bank.render, ROLE_GUIDANCE),
        "role": ROLE_GUIDANCE,
    },
    "guidance_question_builder": {
        "label": "🛠️ Question Builder",
        "render_func": partial(question_builder.render, ROLE_GUIDANCE),
        "role": ROLE_GUIDANCE,
    },
    "guidance_archived_questions": {
        "label": "🗄️ Archived Questions",
        "render_func": partial(question_bank.render, ROLE_GUIDANCE, archived=True),
        "role": ROLE_GUIDANCE,
    },
    "guidance_courses": {
        "label": "🎓 Courses",
        "render_func": course_management.view,
        "role": ROLE_GUIDANCE,
    },
    "guidance_personality": {
        "label": "🧠 Personality Tests",
        "render_func": personality_test_management.view,
        "role": ROLE_GUIDANCE,
    },
    "guidance_exams": {
        "label": "📝 Exam Management",
        "render_func": exam_management.view,
        "role": ROLE_GUIDANCE,
    },
    "guidance_exam_results": {
        "label": "📈 Exam Results",
        "render_func": guidance_results.view,
        "role": ROLE_GUIDANCE,
    },
    "guidance_archived_results": {
        "label": "🗃️ Archived Results",
        "render_func": guidance_results.archived_view,
        "role": ROLE_GUIDANCE,
    },
    "guidance_rules": {
        "label": "🤖 Recommendation Rules",
        "render_func": recommendation_rules.view,
        "role": ROLE_GUIDANCE,
    },
    "guidance_evaluators": {
        "label": "👥 Evaluator Management",
        "render_func": evaluator_management.view,
        "role": ROLE_GUIDANCE,
    },
    "guidance_profile": {
        "label": "🙍 Profile",
        "render_func": partial(profile.render, ROLE_GUIDANCE),
        "role": ROLE_GUIDANCE,
    },
    # Evaluator
    "evaluator_dashboard": {
        "label": "📊 Dashboard",
        "render_func": partial(dashboard.render, ROLE_EVALUATOR),
        "role": ROLE_EVALUATOR,
    },
    "evaluator_department_exams": {
        "label": "📝 Department Exams",
        "render_func": department_exams.view,
        "role": ROLE_EVALUATOR,
    },
    "evaluator_question_bank": {
        "label": "📚 Question Bank",
        "render_func": partial(question_bank.render, ROLE_EVALUATOR),
        "role": ROLE_EVALUATOR,
    },
    "evaluator_question_builder": {
        "label": "🛠️ Question Builder",
        "render_func": partial(question_builder.render, ROLE_EVALUATOR),
        "role": ROLE_EVALUATOR,
    },
    "evaluator_archived_questions": {
        "label": "🗄️ Archived Questions",
        "render_func": partial(question_bank.render, ROLE_EVALUATOR, archived=True),
        "role": ROLE_EVALUATOR,
    },
    "evaluator_exam_results": {
        "label": "📈 Department Exam Results",
        "render_func": evaluator_results.view,
        "role": ROLE_EVALUATOR,
    },
    "evaluator_student_results": {
        "label": "🎯 Academic Exam Results",
        "render_func": student_results.view,
        "role": ROLE_EVALUATOR,
    },
    "evaluator_profile": {
        "label": "🙍 Profile",
        "render_func": partial(profile.render, ROLE_EVALUATOR),
        "role": ROLE_EVALUATOR,
    },
}

DEFAULT_PAGE = {
    ROLE_GUIDANCE: "guidance_dashboard",
    ROLE_EVALUATOR: "evaluator_dashboard",
}


def pages_for(role: str) -> dict:
    return {k: v for k, v in PAGE_REGISTRY.items() if v["role"] == role}


def menu_keys(role: str) -> list:
    return [key for _, items in sidebar.menu_for(role) for key, _ in items]


def resolve_page(role: str, requested) -> str:
    """Pick the page to render; unknown keys or other roles' pages fall back to the dashboard."""
    if requested in PAGE_REGISTRY and PAGE_REGISTRY[requested]["role"] == role:
        return requested
    return DEFAULT_PAGE[role]


def _current_user(role: str) -> dict:
    # Name is only for the sidebar header; loaded once per session
    if st.session_state.get("user_role") != role:
        try:
            name = profile_svc.load_profile(role).get("name", "")
        except PortalError as e:
            logger.warning("Could not load profile for sidebar: %s", e)
            name = ""
        st.session_state.user_role = role
        st.session_state.user_name = name
    return {"role": role, "name": st.session_state.get("user_name", "")}


def main():
    """
    Main application router.

    Resolves the signed-in role from the server, renders the grouped sidebar
    for that role and the selected page. The selection is mirrored into the
    ``view`` query parameter so reloads land on the same page; ``page`` is
    left to the paginated views.
    """
    st.set_page_config(page_title="Admissions Portal", layout="wide")
    inject_base_css()
    flush_notifications()

    try:
        role = session.current_role()
    except PortalError as e:
        st.error(f"Could not reach the portal server: {e}")
        st.stop()
    if role is None:
        st.warning("You are not signed in. Sign in to the portal and set PORTAL_SESSION_COOKIE.")
        st.stop()

    user = _current_user(role)
    current = resolve_page(role, st.session_state.get(sidebar.NAV_KEY) or st.query_params.get("view"))

    clicked = sidebar.render(user, current)
    if clicked and clicked != current:
        st.session_state[sidebar.NAV_KEY] = clicked
        st.query_params.clear()
        st.query_params["view"] = clicked
        st.rerun()

    st.session_state[sidebar.NAV_KEY] = current
    st.query_params["view"] = current

    # --- Page Rendering ---
    PAGE_REGISTRY[current]["render_func"]()

    flush_notifications()

    # --- Footer ---
    st.sidebar.markdown("---")
    st.sidebar.caption(f"Server: {settings.api_base_url}")


if __name__ == "__main__":
    main()
