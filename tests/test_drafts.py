import json

import pytest

from domain.models import DraftQuestion
from services.drafts import DraftQuestionList


def make_draft(text, category="Math"):
    return DraftQuestion(question=text, option1="1", option2="2", category=category)


def test_add_assigns_ids_and_keeps_order():
    drafts = DraftQuestionList()
    first = drafts.add(make_draft("What is 1+1?"))
    second = drafts.add(make_draft("What is 2+2?"))
    assert len(drafts) == 2
    assert first.id != second.id
    assert [q.question for q in drafts] == ["What is 1+1?", "What is 2+2?"]


def test_add_requires_text_and_category():
    drafts = DraftQuestionList()
    with pytest.raises(ValueError):
        drafts.add(make_draft("   "))
    with pytest.raises(ValueError):
        drafts.add(make_draft("Question", category=""))
    assert len(drafts) == 0


def test_remove_updates_count():
    drafts = DraftQuestionList()
    a = drafts.add(make_draft("A"))
    drafts.add(make_draft("B"))
    drafts.remove(a.id)
    assert [q.question for q in drafts] == ["B"]


def test_edit_pulls_the_draft_out():
    drafts = DraftQuestionList()
    drafts.add(make_draft("A"))
    b = drafts.add(make_draft("B"))
    pulled = drafts.edit(b.id)
    assert pulled.question == "B"
    assert len(drafts) == 1
    assert drafts.edit("missing") is None


def test_payload_is_a_json_list_of_questions():
    drafts = DraftQuestionList()
    drafts.add(make_draft("A", category="Science"))
    payload = json.loads(drafts.to_payload())
    assert len(payload) == 1
    assert payload[0]["question"] == "A"
    assert payload[0]["category"] == "Science"
    assert payload[0]["correct_answer"] == "A"
