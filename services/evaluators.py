"""Evaluator account management (guidance counselor only)."""
from typing import Any, Dict, List

from domain.models import EvaluatorAccount, evaluator_from_dict
from services.client import SubmitResult, get_client

FORM_FIELDS = ['username', 'email', 'password', 'password_confirmation', 'name', 'department']


def empty_form() -> Dict[str, Any]:
    return {k: '' for k in FORM_FIELDS}


def list_evaluators() -> List[EvaluatorAccount]:
    props = get_client().get_page('/guidance/evaluator-management')
    return [evaluator_from_dict(e) for e in props.get('evaluators') or []]


def create_evaluator(form: Dict[str, Any]) -> SubmitResult:
    return get_client().submit('POST', '/guidance/evaluators', {k: form.get(k, '') for k in FORM_FIELDS})


def delete_evaluator(evaluator_id: int) -> SubmitResult:
    return get_client().submit('DELETE', f'/guidance/evaluators/{evaluator_id}')


def explain_field_error(field: str, message: str) -> str:
    """Rewrite terse server validation messages into actionable text."""
    lowered = (message or '').lower()
    if field == 'email' and ('unique' in lowered or 'taken' in lowered):
        return 'This email address is already registered. Please use a different email address.'
    if field == 'username' and ('unique' in lowered or 'taken' in lowered):
        return 'This username is already taken. Please choose a different username.'
    if field == 'password' and ('confirmed' in lowered or 'confirmation' in lowered):
        return 'Password confirmation does not match. Please make sure both passwords are identical.'
    if field == 'password' and ('min' in lowered or 'at least' in lowered):
        return 'Password must be at least 8 characters long.'
    return message
