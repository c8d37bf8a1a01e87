from domain.models import DepartmentExam, Question
from services import selection


def q(qid, category, text="question"):
    return Question(question_id=qid, question=text, category=category)


QUESTIONS = [q(1, "Math"), q(2, "Math"), q(3, "English"), q(4, "Science", "Photosynthesis")]


def test_toggle_adds_and_removes():
    assert selection.toggle([], 5) == [5]
    assert selection.toggle([5, 6], 5) == [6]


def test_select_all_in_category_only_touches_that_category():
    selected = selection.select_all_in_category([3], QUESTIONS, "Math")
    assert sorted(selected) == [1, 2, 3]
    # selecting again does not duplicate
    assert sorted(selection.select_all_in_category(selected, QUESTIONS, "Math")) == [1, 2, 3]


def test_clear_category_keeps_other_categories():
    assert selection.clear_category([1, 2, 3, 4], QUESTIONS, "Math") == [3, 4]


def test_select_page():
    assert selection.select_page([7, 8], True) == [7, 8]
    assert selection.select_page([7, 8], False) == []


def test_group_by_category_with_filters():
    grouped = selection.group_by_category(QUESTIONS)
    assert list(grouped) == ["Math", "English", "Science"]
    assert [x.question_id for x in grouped["Math"]] == [1, 2]

    assert list(selection.group_by_category(QUESTIONS, category="English")) == ["English"]
    assert list(selection.group_by_category(QUESTIONS, search="photo")) == ["Science"]


def test_filter_department_exams():
    exams = [
        DepartmentExam(id=1, title="Nursing Exam", exam_ref_no="REF-1", time_limit=60, status=1),
        DepartmentExam(id=2, title="IT Exam", exam_ref_no="REF-2", time_limit=30, status=0),
    ]
    assert [e.id for e in selection.filter_department_exams(exams, "active")] == [1]
    assert [e.id for e in selection.filter_department_exams(exams, "inactive")] == [2]
    assert [e.id for e in selection.filter_department_exams(exams, "all", "ref-2")] == [2]
    assert len(selection.filter_department_exams(exams)) == 2
