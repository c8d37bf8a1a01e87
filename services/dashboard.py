"""Dashboard page props and the small score summaries shown on them."""
from typing import Any, Dict, Iterable, Mapping

from domain.constants import PASS_SCORE, ROLE_GUIDANCE
from domain.models import department_exam_from_dict, exam_from_dict, result_from_dict
from services.client import get_client


def _score(r: Any) -> float:
    if isinstance(r, Mapping):
        return float(r.get('score') or 0)
    return float(getattr(r, 'score', 0) or 0)


def summarize_scores(results: Iterable[Any]) -> Dict[str, int]:
    scores = [_score(r) for r in results]
    if not scores:
        return {'count': 0, 'average': 0, 'pass_rate': 0, 'passed': 0, 'failed': 0}
    passed = sum(1 for s in scores if s >= PASS_SCORE)
    return {
        'count': len(scores),
        'average': round(sum(scores) / len(scores)),
        'pass_rate': round(passed / len(scores) * 100),
        'passed': passed,
        'failed': len(scores) - passed,
    }


def score_band(score: float) -> str:
    if score >= 85:
        return 'excellent'
    if score >= 70:
        return 'good'
    if score >= 60:
        return 'fair'
    return 'low'


def load_dashboard(role: str) -> Dict[str, Any]:
    props = get_client().get_page(f'/{role}/dashboard')
    if role == ROLE_GUIDANCE:
        exams = [exam_from_dict(e) for e in props.get('recent_exams') or []]
        results = [result_from_dict(r) for r in props.get('recent_results') or []]
    else:
        exams = [department_exam_from_dict(e) for e in props.get('departmentExams') or []]
        results = [result_from_dict(r) for r in props.get('recentResults') or []]
    return {
        'stats': props.get('stats') or {},
        'exams': exams,
        'results': results,
        'activities': list(props.get('activities') or []),
        'summary': summarize_scores(results),
    }
