"""Personality questionnaire management (guidance counselor)."""
from typing import Any, Dict, Optional

from config import settings
from domain.constants import DICHOTOMIES
from domain.models import personality_question_from_dict
from services.client import SubmitResult, get_client
from utils.pagination import paginated_from_props

DICHOTOMY_SIDES = DICHOTOMIES


def empty_form(dichotomy: str = 'E/I') -> Dict[str, Any]:
    positive, negative = DICHOTOMY_SIDES[dichotomy]
    return {'question': '', 'dichotomy': dichotomy, 'positive_side': positive, 'negative_side': negative}


def with_dichotomy(form: Dict[str, Any], dichotomy: str) -> Dict[str, Any]:
    """Switching the axis resets both sides to that axis' letters."""
    positive, negative = DICHOTOMY_SIDES[dichotomy]
    return {**form, 'dichotomy': dichotomy, 'positive_side': positive, 'negative_side': negative}


def list_questions(per_page: Optional[int] = None, page: int = 1) -> Dict[str, Any]:
    per_page = per_page or settings.default_per_page
    props = get_client().get_page('/guidance/personality-test-management',
                                  {'per_page': per_page, 'page': page})
    return {
        'questions': paginated_from_props(props.get('questions'),
                                          personality_question_from_dict, per_page),
        'personality_types': list(props.get('personalityTypes') or []),
    }


def _validate(form: Dict[str, Any]):
    if not (form.get('question') or '').strip():
        raise ValueError("Please enter the question text")
    if form.get('dichotomy') not in DICHOTOMY_SIDES:
        raise ValueError("Please choose a dichotomy")


def create_question(form: Dict[str, Any]) -> SubmitResult:
    _validate(form)
    return get_client().submit('POST', '/guidance/personality-questions', form)


def update_question(question_id: int, form: Dict[str, Any]) -> SubmitResult:
    _validate(form)
    return get_client().submit('PUT', f'/guidance/personality-questions/{question_id}', form)


def delete_question(question_id: int) -> SubmitResult:
    return get_client().submit('DELETE', f'/guidance/personality-questions/{question_id}')


def upload_csv(filename: str, content: bytes) -> SubmitResult:
    if not content:
        raise ValueError("Please choose a CSV file to upload")
    return get_client().submit('POST', '/guidance/personality-questions/upload',
                               files={'csv_file': (filename, content, 'text/csv')})
