from unittest.mock import patch, MagicMock

import pytest

# Loaded before streamlit is mocked: patch.dict drops every module imported
# inside the block, and numpy cannot be imported twice in one process.
import pandas  # noqa: F401
import config  # noqa: F401
from services import client  # noqa: F401

st_mock = MagicMock()


@pytest.fixture(scope="module")
def app():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        import app as app_module
    return app_module


def test_page_registry_structure(app):
    """
    Every page has a label, a callable renderer and a known role.
    """
    assert isinstance(app.PAGE_REGISTRY, dict)
    for key, value in app.PAGE_REGISTRY.items():
        assert "label" in value
        assert callable(value["render_func"]), f"Render function for '{key}' is not callable."
        assert value["role"] in ("guidance", "evaluator")
        assert key.startswith(value["role"] + "_")


def test_menus_match_registry(app):
    for role in ("guidance", "evaluator"):
        assert sorted(app.menu_keys(role)) == sorted(app.pages_for(role))


def test_resolve_page_falls_back_to_dashboard(app):
    assert app.resolve_page("guidance", "guidance_courses") == "guidance_courses"
    # evaluator pages are not reachable for guidance counselors
    assert app.resolve_page("guidance", "evaluator_student_results") == "guidance_dashboard"
    assert app.resolve_page("evaluator", None) == "evaluator_dashboard"
    assert app.resolve_page("evaluator", "nonsense") == "evaluator_dashboard"


def test_shared_pages_are_bound_to_role(app):
    archived = app.PAGE_REGISTRY["evaluator_archived_questions"]["render_func"]
    assert archived.args == ("evaluator",)
    assert archived.keywords == {"archived": True}
