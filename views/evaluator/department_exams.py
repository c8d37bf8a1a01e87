import streamlit as st
import pandas as pd

from services import exams as exam_svc, selection
from services.errors import PortalError
from ui.components import html_table, load_or_stop, page_header, run_submission, status_badge
from ui.components import question_picker

PICKER_KEY = "dept_exam_q"
STATUS_FILTERS = {"all": "All", "active": "Active", "inactive": "Inactive"}


@st.dialog("Exam preview", width="large")
def _preview_dialog(exam_id: int):
    try:
        data = exam_svc.preview_department_exam(exam_id)
    except PortalError as e:
        st.error(str(e))
        return
    exam = data.get("exam") or data
    st.markdown(f"**{exam.get('title') or exam.get('exam_title', '')}** · `{exam.get('exam_ref_no', '')}`")
    st.caption(f"{exam.get('time_limit', '')} minutes")
    for i, q in enumerate(exam.get("questions") or [], start=1):
        st.markdown(f"**{i}.** {q.get('question', '')}")
        for letter, opt in zip("ABCDE", ["option1", "option2", "option3", "option4", "option5"]):
            if q.get(opt):
                st.markdown(f"&nbsp;&nbsp;{letter}. {q[opt]}")


def _create_form(page: dict):
    c1, c2, c3 = st.columns([3, 1, 1])
    title = c1.text_input("Exam title", key="dept_exam_title")
    time_limit = c2.number_input("Time limit (min)", min_value=1, value=60, key="dept_exam_time")
    exam_type = c3.radio("Selection", exam_svc.EXAM_TYPES, horizontal=True, key="dept_exam_type")

    payload = {"exam_title": title, "time_limit": int(time_limit), "exam_type": exam_type,
               "question_ids": [], "category_counts": {}}
    if exam_type == "manual":
        f1, f2 = st.columns(2)
        category = f1.selectbox("Category", ["All"] + page["categories"], key="dept_exam_filter_cat")
        search = f2.text_input("Search questions", key="dept_exam_search")
        payload["question_ids"] = list(question_picker.render(
            page["questions"], PICKER_KEY, None if category == "All" else category, search))
        st.caption(f"{len(payload['question_ids'])} question(s) selected")
    else:
        counts = {}
        cols = st.columns(3)
        for i, cat in enumerate(page["categories"]):
            raw = cols[i % 3].number_input(cat, min_value=0, step=1, key=f"dept_exam_count_{cat}")
            counts = exam_svc.set_category_count(counts, cat, raw)
        payload["category_counts"] = counts

    if st.button("Create department exam", type="primary", key="dept_exam_create"):
        if run_submission(lambda: exam_svc.create_department_exam(payload),
                          "Department exam created successfully", "Failed to create exam"):
            question_picker.reset(PICKER_KEY)
            for k in ("dept_exam_title", "dept_exam_time", "dept_exam_type"):
                st.session_state.pop(k, None)
            st.rerun()


def view():
    page_header("Department Exams", "Build exams from your department question bank")
    page = load_or_stop(exam_svc.department_exams_page)
    exams = page["exams"]

    m1, m2 = st.columns(2)
    m1.metric("Total exams", len(exams))
    m2.metric("Active exams", sum(1 for e in exams if e.is_active))

    with st.expander("➕ Create department exam"):
        _create_form(page)

    f1, f2 = st.columns(2)
    status = f1.selectbox("Status", list(STATUS_FILTERS), format_func=STATUS_FILTERS.get,
                          key="dept_exam_status_filter")
    search = f2.text_input("Search title or reference", key="dept_exam_list_search")
    shown = selection.filter_department_exams(exams, status, search)

    html_table(pd.DataFrame([{
        "Title": e.title, "Reference": e.exam_ref_no, "Type": e.exam_type,
        "Time (min)": e.time_limit, "Questions": e.question_count,
        "Status": status_badge(e.status),
    } for e in shown]), "No exams match.")

    for e in shown:
        c1, c2, c3, c4 = st.columns([4, 1, 1, 1])
        c1.write(f"**{e.title}** · `{e.exam_ref_no}`")
        if c2.button("Preview", key=f"dept_exam_preview_{e.id}"):
            _preview_dialog(e.id)
        if c3.button("Deactivate" if e.is_active else "Activate", key=f"dept_exam_toggle_{e.id}"):
            if run_submission(lambda: exam_svc.set_department_exam_status(e.id, not e.is_active),
                              "Exam status updated", "Failed to update exam status"):
                st.rerun()
        if c4.button("Delete", key=f"dept_exam_delete_{e.id}"):
            if run_submission(lambda: exam_svc.delete_department_exam(e.id),
                              "Exam deleted successfully", "Failed to delete exam"):
                st.rerun()
