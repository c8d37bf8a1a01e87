"""Profile and password updates for the signed-in staff member."""
from typing import Any, Dict

from domain.constants import ROLE_EVALUATOR, ROLE_GUIDANCE
from services.client import SubmitResult, get_client

MIN_PASSWORD_LENGTH = 8


def _check_role(role: str):
    if role not in (ROLE_GUIDANCE, ROLE_EVALUATOR):
        raise ValueError(f"Unknown role: {role}")


def load_profile(role: str) -> Dict[str, Any]:
    _check_role(role)
    props = get_client().get_page(f'/{role}/profile')
    user = props.get('user') or {}
    owner = props.get('guidanceCounselor') or props.get('evaluator') or {}
    return {
        'name': owner.get('name') or user.get('name') or '',
        'address': owner.get('address') or '',
        'department': owner.get('Department') or owner.get('department') or '',
        'email': user.get('email') or '',
        'username': user.get('username') or '',
    }


def update_profile(role: str, form: Dict[str, Any]) -> SubmitResult:
    _check_role(role)
    return get_client().submit('PUT', f'/{role}/profile', form)


def validate_password_change(form: Dict[str, Any]):
    new = form.get('new_password') or ''
    if new != (form.get('new_password_confirmation') or ''):
        raise ValueError("New passwords do not match")
    if len(new) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")


def change_password(role: str, form: Dict[str, Any]) -> SubmitResult:
    _check_role(role)
    validate_password_change(form)
    result = get_client().submit('PUT', f'/{role}/profile/password', {
        'current_password': form.get('current_password') or '',
        'new_password': form.get('new_password') or '',
        'new_password_confirmation': form.get('new_password_confirmation') or '',
    })
    if not result.success and 'current_password' in result.errors:
        result.message = "Current password is incorrect"
    return result
