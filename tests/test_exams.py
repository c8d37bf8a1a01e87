from unittest.mock import MagicMock

import pytest

from services import exams
from services.client import SubmitResult, set_client


@pytest.fixture
def client():
    fake = MagicMock()
    fake.submit.return_value = SubmitResult(success=True)
    set_client(fake)
    yield fake
    set_client(None)


def test_manual_payload_has_ids_only():
    payload = exams.build_exam_payload(exams.ExamDraft(question_ids=[1, 2], category_counts={"Math": 3}))
    assert payload["question_ids"] == [1, 2]
    assert "category_counts" not in payload
    assert "personality_exam_type" not in payload


def test_random_payload_has_counts_only():
    draft = exams.ExamDraft(exam_type="random", question_ids=[1], category_counts={"Math": 3})
    payload = exams.build_exam_payload(draft)
    assert payload["category_counts"] == {"Math": 3}
    assert "question_ids" not in payload


def test_personality_section_follows_its_own_type():
    draft = exams.ExamDraft(question_ids=[1], include_personality_test=True,
                            personality_exam_type="random",
                            personality_category_counts={"E/I": 2},
                            personality_question_ids=[9])
    payload = exams.build_exam_payload(draft)
    assert payload["include_personality_test"] is True
    assert payload["personality_category_counts"] == {"E/I": 2}
    assert "personality_question_ids" not in payload


def test_set_category_count_clamps_and_ignores_garbage():
    counts = exams.set_category_count({}, "Math", "4")
    assert counts == {"Math": 4}
    assert exams.set_category_count(counts, "Math", "abc") == {"Math": 0}
    assert exams.set_category_count(counts, "Math", -3) == {"Math": 0}
    # input is not mutated
    assert counts == {"Math": 4}


def test_total_selected():
    assert exams.total_selected(exams.ExamDraft(question_ids=[1, 2, 3])) == 3
    assert exams.total_selected(exams.ExamDraft(exam_type="random", category_counts={"A": 2, "B": 5})) == 7


def test_create_exam_validates_before_sending(client):
    with pytest.raises(ValueError):
        exams.create_exam(exams.ExamDraft())
    with pytest.raises(ValueError):
        exams.create_exam(exams.ExamDraft(exam_type="random", category_counts={"Math": 0}))
    client.submit.assert_not_called()


def test_create_exam_sends_one_request(client):
    result = exams.create_exam(exams.ExamDraft(question_ids=[4]))
    assert result.success
    client.submit.assert_called_once()
    method, path, payload = client.submit.call_args.args
    assert (method, path) == ("POST", "/guidance/exams")
    assert payload["question_ids"] == [4]


def test_department_exam_requires_title(client):
    with pytest.raises(ValueError):
        exams.create_department_exam({"exam_title": "  "})
    client.submit.assert_not_called()


def test_department_exam_status_is_sent_as_int(client):
    exams.set_department_exam_status(12, False)
    client.submit.assert_called_once_with("PUT", "/evaluator/department-exams/12", {"status": 0})
