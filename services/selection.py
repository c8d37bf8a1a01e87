"""Selection sets and client-side filters used by the list pages."""
from typing import Dict, Iterable, List, Optional

from domain.models import DepartmentExam, Question


def toggle(selected: List[int], item_id: int) -> List[int]:
    if item_id in selected:
        return [i for i in selected if i != item_id]
    return selected + [item_id]


def _category_ids(questions: Iterable[Question], category: str) -> List[int]:
    return [q.question_id for q in questions if q.category == category]


def select_ids(selected: List[int], ids: Iterable[int]) -> List[int]:
    result = list(selected)
    for item_id in ids:
        if item_id not in result:
            result.append(item_id)
    return result


def clear_ids(selected: List[int], ids: Iterable[int]) -> List[int]:
    ids = set(ids)
    return [i for i in selected if i not in ids]


def select_all_in_category(selected: List[int], questions: Iterable[Question], category: str) -> List[int]:
    return select_ids(selected, _category_ids(questions, category))


def clear_category(selected: List[int], questions: Iterable[Question], category: str) -> List[int]:
    return clear_ids(selected, _category_ids(questions, category))


def select_page(page_ids: List[int], select_all: bool) -> List[int]:
    """Header checkbox: select every id on the page, or clear the selection."""
    if not select_all:
        return []
    return list(page_ids)


def group_by_category(questions: Iterable[Question], category: Optional[str] = None,
                      search: str = '') -> Dict[str, List[Question]]:
    term = (search or '').strip().lower()
    grouped: Dict[str, List[Question]] = {}
    for q in questions:
        if category and q.category != category:
            continue
        if term and term not in str(q.question).lower():
            continue
        grouped.setdefault(q.category, []).append(q)
    return grouped


def filter_department_exams(exams: Iterable[DepartmentExam], status: str = 'all',
                            search: str = '') -> List[DepartmentExam]:
    result = list(exams)
    if status != 'all':
        target = 1 if status == 'active' else 0
        result = [e for e in result if e.status == target]
    term = (search or '').strip().lower()
    if term:
        result = [e for e in result if term in f"{e.title} {e.exam_ref_no}".lower()]
    return result
