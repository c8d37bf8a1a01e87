"""Exam builder payloads and exam endpoints.

Guidance counselors build entrance exams (optionally with a personality
section); evaluators build department exams from their own question bank.
Both builders pick questions either by hand (``manual``) or by a number of
questions per category (``random``).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config import settings
from domain.models import (
    Paginated, department_exam_from_dict, exam_from_dict,
    question_from_dict, personality_question_from_dict,
)
from services.client import SubmitResult, get_client
from utils.pagination import paginated_from_props

logger = logging.getLogger(__name__)

EXAM_TYPES = ['manual', 'random']


@dataclass
class ExamDraft:
    time_limit: int = 60
    exam_type: str = 'manual'
    question_ids: List[int] = field(default_factory=list)
    category_counts: Dict[str, int] = field(default_factory=dict)
    include_personality_test: bool = False
    personality_exam_type: str = 'manual'
    personality_question_ids: List[int] = field(default_factory=list)
    personality_category_counts: Dict[str, int] = field(default_factory=dict)


def build_exam_payload(draft: ExamDraft) -> Dict[str, Any]:
    """Only the selection matching each exam type is sent, never both."""
    payload: Dict[str, Any] = {
        'time_limit': draft.time_limit,
        'exam_type': draft.exam_type,
        'include_personality_test': draft.include_personality_test,
    }
    if draft.exam_type == 'manual':
        payload['question_ids'] = list(draft.question_ids)
    else:
        payload['category_counts'] = dict(draft.category_counts)

    if draft.include_personality_test:
        payload['personality_exam_type'] = draft.personality_exam_type
        if draft.personality_exam_type == 'manual':
            payload['personality_question_ids'] = list(draft.personality_question_ids)
        else:
            payload['personality_category_counts'] = dict(draft.personality_category_counts)
    return payload


def set_category_count(counts: Dict[str, int], category: str, raw: Any) -> Dict[str, int]:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = 0
    updated = dict(counts)
    updated[category] = max(value, 0)
    return updated


def total_selected(draft: ExamDraft) -> int:
    if draft.exam_type == 'manual':
        return len(draft.question_ids)
    return sum(draft.category_counts.values())


# ---- guidance exams ----

def exam_management_page(per_page: Optional[int] = None, page: int = 1) -> Dict[str, Any]:
    props = get_client().get_page('/guidance/exam-management', {
        'per_page': per_page or settings.default_per_page, 'page': page})
    return {
        'exams': paginated_from_props(props.get('exams'), exam_from_dict,
                                      per_page or settings.default_per_page),
        'categories': list(props.get('categories') or []),
        'questions': [question_from_dict(q) for q in props.get('questions') or []],
        'personality_dichotomies': list(props.get('personalityDichotomies') or []),
        'personality_questions': [personality_question_from_dict(q)
                                  for q in props.get('personalityQuestions') or []],
    }


def list_exams(per_page: Optional[int] = None, page: int = 1) -> Paginated:
    return exam_management_page(per_page, page)['exams']


def create_exam(draft: ExamDraft) -> SubmitResult:
    if draft.exam_type == 'manual' and not draft.question_ids:
        raise ValueError("Select at least one question")
    if draft.exam_type == 'random' and not any(draft.category_counts.values()):
        raise ValueError("Set a question count for at least one category")
    return get_client().submit('POST', '/guidance/exams', build_exam_payload(draft))


def toggle_exam_status(exam_id: int) -> SubmitResult:
    return get_client().submit('PUT', f'/guidance/exams/{exam_id}/toggle-status', {})


# ---- department exams (evaluator) ----

def department_exams_page() -> Dict[str, Any]:
    props = get_client().get_page('/evaluator/department-exams')
    return {
        'exams': [department_exam_from_dict(e) for e in props.get('exams') or []],
        'categories': list(props.get('categories') or []),
        'questions': [question_from_dict(q) for q in props.get('questions') or []],
    }


def create_department_exam(payload: Dict[str, Any]) -> SubmitResult:
    if not (payload.get('exam_title') or '').strip():
        raise ValueError("Please enter an exam title")
    return get_client().submit('POST', '/evaluator/department-exams', payload)


def preview_department_exam(exam_id: int) -> Dict[str, Any]:
    return get_client().fetch_json('GET', f'/evaluator/department-exams/{exam_id}',
                                   params={'as': 'json'})


def set_department_exam_status(exam_id: int, active: bool) -> SubmitResult:
    logger.info("Setting department exam %s active=%s", exam_id, active)
    return get_client().submit('PUT', f'/evaluator/department-exams/{exam_id}',
                               {'status': 1 if active else 0})


def delete_department_exam(exam_id: int) -> SubmitResult:
    return get_client().submit('DELETE', f'/evaluator/department-exams/{exam_id}')
