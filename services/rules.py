"""Recommendation rules: personality type + score range -> course."""
from typing import Any, Dict, Iterable, List

from domain.constants import DEFAULT_PASSING_RATE
from domain.models import Course, RecommendationRule, course_from_dict, rule_from_dict
from services.client import SubmitResult, get_client


def rules_page() -> Dict[str, Any]:
    props = get_client().get_page('/guidance/recommendation-rules-management')
    raw_rules = props.get('rules') or []
    if isinstance(raw_rules, dict):
        raw_rules = raw_rules.get('data') or []
    return {
        'rules': [rule_from_dict(r) for r in raw_rules],
        'personality_types': [
            {'type': str(t.get('type') or ''), 'title': str(t.get('title') or '')}
            for t in props.get('personalityTypes') or []
        ],
        'courses': [course_from_dict(c) for c in props.get('courses') or []],
    }


def empty_form() -> Dict[str, Any]:
    return {'personality_type': '', 'min_score': 10, 'max_score': 100, 'recommended_course_ids': []}


def compatible_courses(courses: Iterable[Course], min_score: float) -> List[Course]:
    """Courses a student scoring at least ``min_score`` would pass."""
    return [c for c in courses if min_score >= (c.passing_rate or DEFAULT_PASSING_RATE)]


def _validate(form: Dict[str, Any]):
    if not form.get('personality_type'):
        raise ValueError("Please choose a personality type")
    if float(form.get('min_score') or 0) > float(form.get('max_score') or 0):
        raise ValueError("Minimum score cannot be greater than maximum score")
    if not form.get('recommended_course_ids'):
        raise ValueError("Select at least one course")


def create_rule(form: Dict[str, Any]) -> SubmitResult:
    _validate(form)
    return get_client().submit('POST', '/guidance/recommendation-rules', form)


def update_rule(rule_id: int, form: Dict[str, Any]) -> SubmitResult:
    _validate(form)
    return get_client().submit('PUT', f'/guidance/recommendation-rules/{rule_id}', form)


def delete_rule(rule_id: int) -> SubmitResult:
    return get_client().submit('DELETE', f'/guidance/recommendation-rules/{rule_id}')


def generate_all() -> SubmitResult:
    return get_client().submit('POST', '/guidance/generate-all-rules', {})


def group_by_personality(rules: Iterable[RecommendationRule]) -> Dict[str, List[RecommendationRule]]:
    grouped: Dict[str, List[RecommendationRule]] = {}
    for rule in rules:
        grouped.setdefault(rule.personality_type, []).append(rule)
    return dict(sorted(grouped.items()))
