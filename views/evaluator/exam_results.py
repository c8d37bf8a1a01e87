import streamlit as st
import pandas as pd

from services import results as results_svc
from services.errors import PortalError
from ui.components import load_or_stop, page_header
from ui.components import pagination


@st.dialog("Result details", width="large")
def _details_dialog(result_id: int):
    try:
        data = results_svc.department_result_details(result_id)
    except PortalError as e:
        st.error(str(e))
        return
    result = data.get("result") or {}
    st.markdown(f"**Score:** {result.get('score', '')}  ·  "
                f"**Correct:** {result.get('correct_answers', '')}/{result.get('total_questions', '')}")
    answers = data.get("answers") or []
    if answers:
        st.dataframe(pd.DataFrame(answers), use_container_width=True, hide_index=True)
    if result.get("id"):
        st.link_button("Export PDF", results_svc.department_result_export_url(result["id"]))


def view():
    c1, c2, c3 = st.columns([3, 3, 1])
    student_name = c1.text_input("Student name", key="dept_results_student", on_change=pagination.reset_page)
    exam_filter = c2.text_input("Exam id", key="dept_results_exam", on_change=pagination.reset_page)
    if c3.button("Reset", key="dept_results_reset"):
        for k in ("dept_results_student", "dept_results_exam"):
            st.session_state.pop(k, None)
        st.rerun()

    data = load_or_stop(results_svc.department_exam_results, {
        "student_name": student_name, "exam_id": exam_filter, "page": pagination.current_page()})
    page_header(f"{data['department'] or 'Department'} – Exam Results",
                "Department exam results for your students")

    stats = data["stats"]
    m1, m2, m3 = st.columns(3)
    m1.metric("Total results", stats.get("total_results", data["results"].total))
    m2.metric("Students passed", stats.get("passed_count", 0))
    m3.metric("Average score", f"{stats.get('average_score', 0)}%")

    page = data["results"]
    for r in page.items:
        r1, r2, r3 = st.columns([5, 2, 1])
        r1.write(f"**{r.student_name}** · {r.exam_title or r.exam_ref_no}")
        r2.write(f"{r.score:g}%")
        if r3.button("Details", key=f"dept_result_{r.result_id}"):
            _details_dialog(r.result_id)
    if not page.items:
        st.info("No results found.")
    st.caption(pagination.summary(page))
    pagination.render(page.links, "dept_results_pages")
