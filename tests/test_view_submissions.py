from types import SimpleNamespace
from unittest.mock import patch, MagicMock

import pytest

# Loaded before streamlit is mocked: patch.dict drops every module imported
# inside the block, and numpy cannot be imported twice in one process.
import pandas  # noqa: F401
import config  # noqa: F401
from domain.models import DraftQuestion
from services.client import SubmitResult, set_client
from services.drafts import DraftQuestionList

st_mock = MagicMock()


@pytest.fixture(scope="module")
def views():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from views import question_bank, question_builder
        from views.guidance import course_management
        from ui.components import pagination
    return SimpleNamespace(question_bank=question_bank, question_builder=question_builder,
                           course_management=course_management, pagination=pagination)


def _clicks(*keys):
    """Only the buttons with these widget keys report a click."""
    return lambda *args, **kwargs: kwargs.get("key") in keys


def _first_option(label, options, *args, **kwargs):
    return list(options)[kwargs.get("index") or 0]


@pytest.fixture
def st():
    st_mock.reset_mock(return_value=True, side_effect=True)
    st_mock.session_state = {}
    st_mock.query_params = {}
    st_mock.columns.side_effect = lambda spec, **kw: [st_mock] * (spec if isinstance(spec, int) else len(spec))
    st_mock.button.side_effect = _clicks()
    st_mock.selectbox.side_effect = _first_option
    st_mock.file_uploader.return_value = None
    st_mock.form_submit_button.return_value = False
    return st_mock


@pytest.fixture
def client():
    fake = MagicMock()
    fake.get_page.return_value = {"categories": ["Math"], "courses": []}
    set_client(fake)
    yield fake
    set_client(None)


def _levels(st):
    return [level for _, level in st.session_state.get("_pending_notifications", [])]


# ---- question builder ----

def _seed_drafts(st, n=2):
    drafts = DraftQuestionList()
    for i in range(n):
        drafts.add(DraftQuestion(question=f"Q{i}", category="Math", option1="a", option2="b"))
    st.session_state["guidance_drafts"] = drafts
    return drafts


def test_builder_clears_drafts_after_successful_save(views, st, client):
    drafts = _seed_drafts(st)
    client.submit.return_value = SubmitResult(success=True, message="2 questions created")
    st.button.side_effect = _clicks("guidance_drafts_save")

    views.question_builder.render("guidance")

    client.submit.assert_called_once()
    assert client.submit.call_args.args[1] == "/guidance/questions/bulk-create"
    assert len(drafts) == 0
    assert _levels(st) == ["success"]


def test_builder_keeps_drafts_when_save_fails(views, st, client):
    drafts = _seed_drafts(st)
    client.submit.return_value = SubmitResult(success=False, errors={"questions": "invalid"})
    st.button.side_effect = _clicks("guidance_drafts_save")

    views.question_builder.render("guidance")

    client.submit.assert_called_once()
    assert [q.question for q in drafts] == ["Q0", "Q1"]
    assert _levels(st) == ["error"]


def test_builder_sends_nothing_without_a_click(views, st, client):
    drafts = _seed_drafts(st)
    views.question_builder.render("guidance")
    client.submit.assert_not_called()
    assert len(drafts) == 2


# ---- course form ----

def _seed_course_form(st, views):
    form = {"course_code": "BSIT", "course_name": "Information Technology",
            "description": "", "passing_rate": 80}
    for k, v in form.items():
        st.session_state[f"course_form_{k}"] = v
    st.session_state["course_form_open"] = True
    return form


def test_course_form_resets_after_successful_create(views, st, client, tmp_path, monkeypatch):
    monkeypatch.setattr(views.course_management.preferences, "DATA_DIR", str(tmp_path))
    form = _seed_course_form(st, views)
    client.submit.return_value = SubmitResult(success=True)
    st.button.side_effect = _clicks("course_save")

    views.course_management.view()

    client.submit.assert_called_once_with("POST", "/guidance/courses", form)
    assert "course_form_open" not in st.session_state
    assert st.session_state["course_form_pending"] == (views.course_management.course_svc.empty_form(), None)


def test_course_form_kept_when_create_fails(views, st, client, tmp_path, monkeypatch):
    monkeypatch.setattr(views.course_management.preferences, "DATA_DIR", str(tmp_path))
    _seed_course_form(st, views)
    client.submit.return_value = SubmitResult(success=False, errors={"course_code": "taken"})
    st.button.side_effect = _clicks("course_save")

    views.course_management.view()

    client.submit.assert_called_once()
    assert st.session_state["course_form_open"] is True
    assert "course_form_pending" not in st.session_state
    assert st.session_state["course_form_course_code"] == "BSIT"
    assert _levels(st) == ["error"]


# ---- question bank filters ----

def test_filter_change_returns_to_first_page(views, st):
    st.query_params["page"] = "3"
    filters = views.question_bank._filters("guidance", False)
    assert filters["page"] == 3

    callbacks = {c.kwargs.get("key"): c.kwargs.get("on_change") for c in st.selectbox.call_args_list}
    for key in ("guidance_bank_category", "guidance_bank_sort"):
        st.query_params["page"] = "3"
        callbacks[key]()
        assert views.pagination.current_page() == 1
