from unittest.mock import MagicMock

from domain.constants import ROLE_EVALUATOR
from services import dashboard
from services.client import set_client


def test_summary_of_empty_results():
    assert dashboard.summarize_scores([]) == {
        "count": 0, "average": 0, "pass_rate": 0, "passed": 0, "failed": 0}


def test_summary_counts_passes_from_threshold():
    summary = dashboard.summarize_scores([{"score": 5}, {"score": 10}, {"score": 90}])
    assert summary["count"] == 3
    assert summary["passed"] == 2
    assert summary["failed"] == 1
    assert summary["average"] == 35
    assert summary["pass_rate"] == 67


def test_score_band():
    assert dashboard.score_band(92) == "excellent"
    assert dashboard.score_band(70) == "good"
    assert dashboard.score_band(65) == "fair"
    assert dashboard.score_band(10) == "low"


def test_evaluator_dashboard_reads_department_props():
    fake = MagicMock()
    fake.get_page.return_value = {
        "stats": {"total_exams": 2},
        "departmentExams": [{"id": 1, "title": "Nursing", "status": 1}],
        "recentResults": [{"id": 5, "score": 80, "created_at": "2024-03-01"}],
    }
    set_client(fake)
    try:
        data = dashboard.load_dashboard(ROLE_EVALUATOR)
    finally:
        set_client(None)
    fake.get_page.assert_called_once_with("/evaluator/dashboard")
    assert data["exams"][0].title == "Nursing"
    assert data["summary"]["count"] == 1
    assert data["stats"] == {"total_exams": 2}
