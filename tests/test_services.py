from unittest.mock import MagicMock

import pytest

from domain.constants import ROLE_EVALUATOR, ROLE_GUIDANCE
from domain.models import Course, DraftQuestion, ExamResult
from services import courses, evaluators, profile, questions, results, rules, session
from services.client import SubmitResult, set_client
from services.drafts import DraftQuestionList
from services.errors import PortalError


@pytest.fixture
def client():
    fake = MagicMock()
    fake.submit.return_value = SubmitResult(success=True, message="ok")
    fake.fetch_json.return_value = {}
    set_client(fake)
    yield fake
    set_client(None)


def make_drafts(n):
    drafts = DraftQuestionList()
    for i in range(n):
        drafts.add(DraftQuestion(question=f"Q{i}", category="Math", option1="a", option2="b"))
    return drafts


# ---- question bank ----

def test_bulk_create_sends_one_request_and_keeps_drafts(client):
    drafts = make_drafts(3)
    client.submit.return_value = SubmitResult(success=False, errors={"questions": "invalid"})
    result = questions.bulk_create(ROLE_GUIDANCE, drafts)
    assert not result.success
    client.submit.assert_called_once()
    assert client.submit.call_args.args[:2] == ("POST", "/guidance/questions/bulk-create")
    assert len(drafts) == 3


def test_bulk_create_uses_role_route(client):
    questions.bulk_create(ROLE_EVALUATOR, make_drafts(1))
    assert client.submit.call_args.args[1] == "/evaluator/question-bank/bulk"


def test_bulk_create_rejects_empty_list(client):
    with pytest.raises(ValueError):
        questions.bulk_create(ROLE_GUIDANCE, DraftQuestionList())
    client.submit.assert_not_called()


def test_bulk_archive_requires_selection(client):
    with pytest.raises(ValueError):
        questions.bulk_archive(ROLE_GUIDANCE, [])
    questions.bulk_archive(ROLE_GUIDANCE, [1, 2])
    client.submit.assert_called_once_with("POST", "/guidance/questions/bulk-archive", {"questionIds": [1, 2]})


def test_unknown_role_route():
    with pytest.raises(ValueError):
        questions._route("admin", "index")


# ---- courses ----

def test_course_description_is_stored_after_success(client):
    form = {"course_code": "BSIT", "course_name": "IT", "description": "About IT", "passing_rate": 80}
    courses.create_course(form)
    client.fetch_json.assert_called_once()
    assert client.fetch_json.call_args.args[1] == "/guidance/course-descriptions/store"


def test_course_description_not_stored_on_failure(client):
    client.submit.return_value = SubmitResult(success=False, errors={"course_code": "taken"})
    courses.update_course(4, {"course_name": "IT", "description": "About IT"})
    client.fetch_json.assert_not_called()


def test_description_store_failure_keeps_success(client):
    client.fetch_json.side_effect = PortalError("down")
    result = courses.create_course({"course_name": "IT", "description": "About IT"})
    assert result.success


def test_generate_description(client):
    with pytest.raises(ValueError):
        courses.generate_description("  ")
    client.fetch_json.return_value = {"success": True, "description": "Generated"}
    assert courses.generate_description("Nursing") == "Generated"
    client.fetch_json.return_value = {"success": False, "message": "AI unavailable"}
    with pytest.raises(PortalError):
        courses.generate_description("Nursing")


def test_passing_rate_band():
    assert courses.passing_rate_band(90) == "high"
    assert courses.passing_rate_band(80) == "good"
    assert courses.passing_rate_band(70) == "fair"
    assert courses.passing_rate_band(50) == "low"


# ---- recommendation rules ----

def test_compatible_courses_filters_by_passing_rate():
    catalog = [
        Course(id=1, course_code="A", course_name="A", passing_rate=75),
        Course(id=2, course_code="B", course_name="B", passing_rate=90),
        Course(id=3, course_code="C", course_name="C", passing_rate=0),
    ]
    # a zero rate falls back to the default of 80
    assert [c.id for c in rules.compatible_courses(catalog, 80)] == [1, 3]
    assert [c.id for c in rules.compatible_courses(catalog, 95)] == [1, 2, 3]


def test_rule_validation(client):
    with pytest.raises(ValueError):
        rules.create_rule({**rules.empty_form(), "recommended_course_ids": [1]})
    with pytest.raises(ValueError):
        rules.create_rule({"personality_type": "INTJ", "min_score": 90, "max_score": 50,
                           "recommended_course_ids": [1]})
    client.submit.assert_not_called()
    rules.create_rule({"personality_type": "INTJ", "min_score": 50, "max_score": 90,
                       "recommended_course_ids": [1]})
    client.submit.assert_called_once()


# ---- profile ----

def test_password_validation():
    with pytest.raises(ValueError, match="do not match"):
        profile.validate_password_change({"new_password": "abcdefgh", "new_password_confirmation": "x"})
    with pytest.raises(ValueError, match="at least 8"):
        profile.validate_password_change({"new_password": "short", "new_password_confirmation": "short"})
    profile.validate_password_change({"new_password": "longenough", "new_password_confirmation": "longenough"})


def test_wrong_current_password_message(client):
    client.submit.return_value = SubmitResult(success=False, errors={"current_password": "invalid"})
    result = profile.change_password(ROLE_EVALUATOR, {
        "current_password": "x", "new_password": "newpassword", "new_password_confirmation": "newpassword"})
    assert result.message == "Current password is incorrect"
    assert client.submit.call_args.args[1] == "/evaluator/profile/password"


# ---- evaluators ----

def test_explain_field_error():
    assert "already registered" in evaluators.explain_field_error("email", "The email has already been taken.")
    assert "already taken" in evaluators.explain_field_error("username", "must be unique")
    assert "identical" in evaluators.explain_field_error("password", "The password confirmation does not match.")
    assert evaluators.explain_field_error("name", "Required") == "Required"


# ---- results ----

def test_group_by_year_newest_first():
    items = [
        ExamResult(result_id=1, student_name="A", exam_ref_no="R", score=50, created_at="2023-05-01"),
        ExamResult(result_id=2, student_name="B", exam_ref_no="R", score=60, created_at="2024-01-02"),
        ExamResult(result_id=3, student_name="C", exam_ref_no="R", score=70, created_at="unknown"),
    ]
    grouped = results.group_by_year(items)
    assert list(grouped) == [2024, 2023, None]


def test_archive_year_requires_year(client):
    with pytest.raises(ValueError):
        results.archive_year(None)
    results.archive_year("2024")
    client.fetch_json.assert_called_once_with("POST", "/guidance/exam-results/archive-year", {"year": 2024})


def test_recommended_course_labels():
    details = {"recommended_courses": [
        {"course_code": "BSIT", "course_name": "Information Technology", "passing_rate": 80},
        {"course_code": "BSN", "course_name": None},
    ]}
    assert results.recommended_courses(details) == [
        "BSIT · Information Technology (passing rate 80%)",
        "BSN",
    ]
    assert results.recommended_courses({"recommended_courses": None}) == []


# ---- session ----

def test_current_role(client):
    client.fetch_json.return_value = {"authenticated": True, "role": "guidance"}
    assert session.current_role() == ROLE_GUIDANCE
    client.fetch_json.return_value = {"authenticated": True, "role": "student"}
    assert session.current_role() is None
    client.fetch_json.side_effect = PortalError("expired", status=401)
    assert session.current_role() is None


def test_current_role_propagates_server_errors(client):
    client.fetch_json.side_effect = PortalError("boom", status=500)
    with pytest.raises(PortalError):
        session.current_role()
