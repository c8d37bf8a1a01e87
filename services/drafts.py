"""Local draft list for the question builders.

Questions accumulate here until the user submits the whole batch with a
single bulk-create request. Nothing is sent to the server before that.
"""
import json
import uuid
from dataclasses import asdict, replace
from typing import Iterator, List, Optional

from domain.models import DraftQuestion


def blank_question() -> DraftQuestion:
    return DraftQuestion()


class DraftQuestionList:
    def __init__(self, questions: Optional[List[DraftQuestion]] = None):
        self._items: List[DraftQuestion] = list(questions or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[DraftQuestion]:
        return iter(self._items)

    def add(self, question: DraftQuestion) -> DraftQuestion:
        if not question.question.strip() or not question.category.strip():
            raise ValueError("Please fill in the question text and category")
        # local key only; the server assigns real ids on bulk create
        draft = replace(question, id=f"draft_{uuid.uuid4().hex[:12]}")
        self._items.append(draft)
        return draft

    def remove(self, draft_id: str):
        self._items = [q for q in self._items if q.id != draft_id]

    def edit(self, draft_id: str) -> Optional[DraftQuestion]:
        """Pull a draft out of the list so the editor can be refilled with it."""
        draft = next((q for q in self._items if q.id == draft_id), None)
        if draft is not None:
            self.remove(draft_id)
        return draft

    def clear(self):
        self._items = []

    def to_payload(self) -> str:
        return json.dumps([asdict(q) for q in self._items], ensure_ascii=False)
