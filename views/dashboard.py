import streamlit as st
import pandas as pd

from domain.constants import ROLE_GUIDANCE
from services import dashboard as dashboard_svc
from ui.components import html_table, load_or_stop, page_header, status_badge


def _score_chart(results):
    recent = list(results)[:10][::-1]
    if not recent:
        st.caption("No results yet.")
        return
    df = pd.DataFrame({
        "Result": [f"#{r.result_id}" for r in recent],
        "Score": [r.score for r in recent],
    })
    st.bar_chart(df, x="Result", y="Score")


def render(role: str):
    """Overview cards, recent exams and recent results for either role."""
    data = load_or_stop(dashboard_svc.load_dashboard, role)
    stats, summary = data["stats"], data["summary"]

    if role == ROLE_GUIDANCE:
        page_header("Guidance Dashboard", "Entrance exams, results and recommendations at a glance")
    else:
        page_header("Evaluator Dashboard", "Your department exams and results")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Exams", stats.get("total_exams", len(data["exams"])))
    c2.metric("Total Results", stats.get("total_results", summary["count"]))
    c3.metric("Average Score", f"{summary['average']}%")
    c4.metric("Pass Rate", f"{summary['pass_rate']}%")

    left, right = st.columns(2)
    with left:
        st.subheader("Recent Scores")
        _score_chart(data["results"])
        st.caption(f"Passed {summary['passed']} · Failed {summary['failed']}")
    with right:
        st.subheader("Recent Exams")
        exams = data["exams"]
        if role == ROLE_GUIDANCE:
            rows = [{"Reference": e.exam_ref_no, "Type": e.exam_type, "Time (min)": e.time_limit,
                     "Questions": e.question_count, "Status": status_badge(e.status)} for e in exams]
        else:
            rows = [{"Title": e.title, "Reference": e.exam_ref_no, "Questions": e.question_count,
                     "Status": status_badge(e.status)} for e in exams]
        html_table(pd.DataFrame(rows), "No exams yet.")

    st.write("---")
    st.subheader("Recent Results")
    rows = [{
        "Student": r.student_name,
        "Exam": r.exam_title or r.exam_ref_no,
        "Score": f"{r.score:g}%",
        "Band": dashboard_svc.score_band(r.score),
        "Date": str(r.created_at)[:10],
    } for r in data["results"]]
    if rows:
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    else:
        st.caption("No results yet.")

    if data["activities"]:
        with st.expander("Recent activity"):
            for a in data["activities"]:
                st.markdown(f"- {a.get('description') or a.get('title') or a}")
