"""Question bank endpoints for both roles.

Guidance counselors manage the entrance-exam bank under ``/guidance``;
evaluators manage their department bank under ``/evaluator``. The two
banks accept the same operations, so each role maps to a route table and
the functions take the role as their first argument.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from config import settings
from domain.constants import ROLE_EVALUATOR, ROLE_GUIDANCE
from domain.models import IMAGE_FIELDS, OPTION_FIELDS, Question, question_from_dict
from services.client import SubmitResult, get_client
from services.drafts import DraftQuestionList
from utils.pagination import paginated_from_props

logger = logging.getLogger(__name__)

ROUTES: Dict[str, Dict[str, str]] = {
    ROLE_GUIDANCE: {
        'index': '/guidance/question-bank',
        'archived': '/guidance/archived-questions',
        'update': '/guidance/questions/{id}',
        'archive': '/guidance/questions/{id}/archive',
        'bulk_archive': '/guidance/questions/bulk-archive',
        'restore': '/guidance/questions/{id}/restore',
        'bulk_restore': '/guidance/questions/bulk-restore',
        'bulk_create': '/guidance/questions/bulk-create',
        'upload': '/guidance/questions/upload',
    },
    ROLE_EVALUATOR: {
        'index': '/evaluator/question-bank',
        'archived': '/evaluator/archived-questions',
        'update': '/evaluator/question-bank/{id}',
        # the evaluator bank archives through DELETE
        'archive': '/evaluator/question-bank/{id}',
        'bulk_archive': '/evaluator/question-bank/bulk-archive',
        'restore': '/evaluator/question-bank/{id}/restore',
        'bulk_restore': '/evaluator/question-bank/bulk-restore',
        'bulk_create': '/evaluator/question-bank/bulk',
        'upload': '/evaluator/question-import',
    },
}

EDITABLE_FIELDS = ['question', 'correct_answer', 'category', 'direction'] + OPTION_FIELDS + IMAGE_FIELDS


def _route(role: str, name: str, question_id: Optional[int] = None) -> str:
    try:
        path = ROUTES[role][name]
    except KeyError:
        raise ValueError(f"Unknown question bank route {role}/{name}")
    return path.format(id=question_id) if question_id is not None else path


def _filter_params(filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    filters = dict(filters or {})
    params = {
        'category': filters.get('category') or None,
        'sort': filters.get('sort') or 'latest',
        'per_page': filters.get('per_page') or settings.default_per_page,
        'page': filters.get('page') or 1,
    }
    if filters.get('search'):
        params['search'] = filters['search']
    return params


def _bank_from_props(props: Dict[str, Any], params: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'questions': paginated_from_props(props.get('questions'), question_from_dict,
                                          params['per_page']),
        'categories': list(props.get('categories') or []),
        'category_counts': props.get('categoryCounts') or {},
        'filters': {**params, **(props.get('currentFilters') or props.get('filters') or {})},
    }


def question_bank(role: str, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    params = _filter_params(filters)
    return _bank_from_props(get_client().get_page(_route(role, 'index'), params), params)


def archived_questions(role: str, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    params = _filter_params(filters)
    return _bank_from_props(get_client().get_page(_route(role, 'archived'), params), params)


def builder_categories(role: str) -> List[str]:
    path = '/guidance/questions/builder' if role == ROLE_GUIDANCE else '/evaluator/question-builder'
    return list(get_client().get_page(path).get('categories') or [])


def edit_form(question: Question) -> Dict[str, Any]:
    return {k: getattr(question, k) for k in EDITABLE_FIELDS}


def update_question(role: str, question_id: int, form: Dict[str, Any]) -> SubmitResult:
    data = {k: form.get(k) for k in EDITABLE_FIELDS}
    return get_client().submit('PUT', _route(role, 'update', question_id), data)


def archive_question(role: str, question_id: int) -> SubmitResult:
    method = 'PUT' if role == ROLE_GUIDANCE else 'DELETE'
    return get_client().submit(method, _route(role, 'archive', question_id), {})


def bulk_archive(role: str, question_ids: Iterable[int]) -> SubmitResult:
    ids = list(question_ids)
    if not ids:
        raise ValueError("Select at least one question")
    return get_client().submit('POST', _route(role, 'bulk_archive'), {'questionIds': ids})


def restore_question(role: str, question_id: int) -> SubmitResult:
    return get_client().submit('PUT', _route(role, 'restore', question_id), {})


def bulk_restore(role: str, question_ids: Iterable[int]) -> SubmitResult:
    ids = list(question_ids)
    if not ids:
        raise ValueError("Select at least one question")
    return get_client().submit('POST', _route(role, 'bulk_restore'), {'questionIds': ids})


def bulk_create(role: str, drafts: DraftQuestionList) -> SubmitResult:
    """Send every draft in one request; the list is left untouched."""
    if not len(drafts):
        raise ValueError("Add at least one question")
    logger.info("Submitting %d draft question(s) to the %s bank", len(drafts), role)
    # the drafts travel as one JSON-encoded field
    return get_client().submit('POST', _route(role, 'bulk_create'),
                               {'questions': drafts.to_payload()})


def upload_questions(role: str, filename: str, content: bytes) -> SubmitResult:
    """Forward a CSV/Excel file to the server importer as-is."""
    if not content:
        raise ValueError("Please choose a file to upload")
    return get_client().submit('POST', _route(role, 'upload'),
                               files={'csv_file': (filename, content)})


def render_text(text: Optional[str], formatted: Optional[str] = None) -> str:
    """Prefer the HTML-formatted question text when the server supplies one."""
    if formatted and formatted.strip():
        return formatted
    return text or ''
