"""Course management for guidance counselors."""
import logging
from typing import Any, Dict, List

from domain.models import Course, course_from_dict
from services.client import SubmitResult, get_client
from services.errors import PortalError

logger = logging.getLogger(__name__)


def empty_form() -> Dict[str, Any]:
    return {'course_code': '', 'course_name': '', 'description': '', 'passing_rate': 80}


def form_from_course(course: Course) -> Dict[str, Any]:
    return {
        'course_code': course.course_code,
        'course_name': course.course_name,
        'description': course.description or '',
        'passing_rate': course.passing_rate or 80,
    }


def list_courses() -> List[Course]:
    props = get_client().get_page('/guidance/course-management')
    return [course_from_dict(c) for c in props.get('courses') or []]


def _store_description(form: Dict[str, Any]):
    """Keep a manually written description in the description library."""
    description = (form.get('description') or '').strip()
    if not description:
        return
    try:
        get_client().fetch_json('POST', '/guidance/course-descriptions/store', {
            'course_name': form.get('course_name', ''),
            'description': description,
            'is_manual': True,
        })
    except PortalError as e:
        # the course itself is saved; the library copy is best effort
        logger.warning("Storing description for %s failed: %s", form.get('course_name'), e)


def create_course(form: Dict[str, Any]) -> SubmitResult:
    result = get_client().submit('POST', '/guidance/courses', form)
    if result.success:
        _store_description(form)
    return result


def update_course(course_id: int, form: Dict[str, Any]) -> SubmitResult:
    result = get_client().submit('PUT', f'/guidance/courses/{course_id}', form)
    if result.success:
        _store_description(form)
    return result


def delete_course(course_id: int) -> SubmitResult:
    return get_client().submit('DELETE', f'/guidance/courses/{course_id}')


def generate_description(course_name: str) -> str:
    if not (course_name or '').strip():
        raise ValueError("Please enter a course name first")
    data = get_client().fetch_json('POST', '/guidance/course-descriptions/generate',
                                   {'course_name': course_name.strip()})
    if not data.get('success'):
        raise PortalError(data.get('message') or "Failed to generate description")
    return data.get('description', '')


def passing_rate_band(rate: float) -> str:
    if rate >= 85:
        return 'high'
    if rate >= 75:
        return 'good'
    if rate >= 65:
        return 'fair'
    return 'low'
