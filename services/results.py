"""Exam results for both roles.

Guidance counselors see entrance-exam results, archive them by year and
trigger the server-side recommendation run. Evaluators see their department
exam results and the students recommended into their department.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from config import settings
from domain.models import ExamResult, recommendation_from_dict, result_from_dict
from services.client import SubmitResult, get_client
from services.errors import PortalError
from utils.pagination import paginated_from_props

logger = logging.getLogger(__name__)

STUDENT_FILTERS = ['student_name', 'course', 'personality_type']


def _clean(filters: Optional[Dict[str, Any]], keys: Iterable[str]) -> Dict[str, Any]:
    filters = filters or {}
    return {k: filters[k] for k in keys if filters.get(k) not in (None, '')}


# ---- evaluator: students recommended into the department ----

def student_results(filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    params = _clean(filters, STUDENT_FILTERS + ['page'])
    props = get_client().get_page('/evaluator/student-results', params)
    return {
        'recommendations': paginated_from_props(props.get('recommendations'),
                                                recommendation_from_dict,
                                                settings.default_per_page),
        'stats': props.get('stats') or {},
        'personality_distribution': list(props.get('personalityDistribution') or []),
        'filters': {**params, **(props.get('filters') or {})},
    }


def export_url(filters: Optional[Dict[str, Any]] = None) -> str:
    return get_client().url_for('/evaluator/student-results/export',
                                _clean(filters, STUDENT_FILTERS))


def verify_student(recommendation_id: int) -> Dict[str, Any]:
    data = get_client().fetch_json('GET', f'/evaluator/student-results/{recommendation_id}/verify')
    return {
        'student_name': data.get('student_name', ''),
        'recommended_course': data.get('recommended_course', ''),
        'academic_passed': bool(data.get('academic_passed')),
        'personality_suitable': bool(data.get('personality_suitable')),
        'overall_eligible': bool(data.get('overall_eligible')),
    }


# ---- evaluator: department exam results ----

def department_exam_results(filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    params = _clean(filters, ['student_name', 'exam_id', 'page'])
    props = get_client().get_page('/evaluator/exam-results', params)
    return {
        'results': paginated_from_props(props.get('examResults'), result_from_dict,
                                        settings.default_per_page),
        'available_exams': list(props.get('availableExams') or []),
        'department': props.get('department') or '',
        'stats': props.get('stats') or {},
        'filters': {**params, **(props.get('filters') or {})},
    }


def department_result_details(result_id: int) -> Dict[str, Any]:
    return get_client().fetch_json('GET', f'/evaluator/exam-results/{result_id}',
                                   params={'as': 'json'})


def department_result_export_url(result_id: int) -> str:
    return get_client().url_for(f'/evaluator/exam-results/{result_id}/export')


# ---- guidance: entrance exam results ----

def exam_results(filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    filters = filters or {}
    params = {
        'year': filters.get('year') or None,
        'include_archived': 'true' if filters.get('include_archived') else 'false',
    }
    props = get_client().get_page('/guidance/exam-results', params)
    return {
        'results': paginated_from_props(props.get('results'), result_from_dict,
                                        settings.default_per_page),
        'years': list(props.get('years') or []),
        'filters': {**params, **(props.get('filters') or {})},
    }


def result_details(result_id: int) -> Dict[str, Any]:
    data = get_client().fetch_json('GET', f'/guidance/exam-results/{result_id}/details')
    if not data.get('success'):
        raise PortalError(data.get('message') or "Failed to load details")
    return data.get('data') or {}


def recommended_courses(details: Dict[str, Any]) -> List[str]:
    """Labels for the courses stored against one result, as shown in its details."""
    labels = []
    for c in details.get('recommended_courses') or []:
        text = ' · '.join(p for p in (c.get('course_code'), c.get('course_name')) if p)
        if c.get('passing_rate') is not None:
            text = f"{text} (passing rate {c['passing_rate']}%)"
        labels.append(text)
    return labels


def archived_results(year: Optional[int] = None) -> Dict[str, Any]:
    props = get_client().get_page('/guidance/exam-results/archived', {'year': year})
    return {
        'results': paginated_from_props(props.get('results'), result_from_dict,
                                        settings.default_per_page),
        'years': list(props.get('years') or []),
    }


def _year_action(path: str, year: Any) -> Dict[str, Any]:
    if not year:
        raise ValueError("Please choose a year")
    return get_client().fetch_json('POST', path, {'year': int(year)})


def archive_year(year: Any) -> Dict[str, Any]:
    return _year_action('/guidance/exam-results/archive-year', year)


def unarchive_year(year: Any) -> Dict[str, Any]:
    return _year_action('/guidance/exam-results/unarchive-year', year)


def archive_all() -> Dict[str, Any]:
    logger.info("Archiving all exam results")
    return get_client().fetch_json('POST', '/guidance/exam-results/archive-all')


def unarchive_result(result_id: int) -> Dict[str, Any]:
    return get_client().fetch_json('POST', f'/guidance/exam-results/{result_id}/unarchive')


def process_results() -> SubmitResult:
    return get_client().submit('POST', '/guidance/process-results', {})


def group_by_year(results: Iterable[ExamResult]) -> Dict[Optional[int], List[ExamResult]]:
    """Newest year first; results without a parseable date go last under ``None``."""
    grouped: Dict[Optional[int], List[ExamResult]] = {}
    for r in results:
        grouped.setdefault(r.year, []).append(r)
    years = sorted((y for y in grouped if y is not None), reverse=True)
    ordered = {y: grouped[y] for y in years}
    if None in grouped:
        ordered[None] = grouped[None]
    return ordered
