import streamlit as st
import pandas as pd

from config import settings
from services import exams as exam_svc
from services.exams import ExamDraft
from ui.components import html_table, load_or_stop, page_header, run_submission, status_badge
from ui.components import pagination, question_picker

DRAFT_KEY = "guidance_exam_draft"
# builder widgets; cleared after a successful create so they pick up the fresh draft
WIDGET_PREFIXES = ("exam_time_limit", "exam_type", "exam_include_personality",
                   "exam_personality_type", "exam_count_", "exam_pcount_")


def _draft() -> ExamDraft:
    if DRAFT_KEY not in st.session_state:
        st.session_state[DRAFT_KEY] = ExamDraft()
    return st.session_state[DRAFT_KEY]


def _count_inputs(categories, counts, key: str):
    cols = st.columns(3)
    for i, category in enumerate(categories):
        raw = cols[i % 3].number_input(category, min_value=0, step=1, value=int(counts.get(category, 0)),
                                       key=f"{key}_{category}")
        counts = exam_svc.set_category_count(counts, category, raw)
    return counts


def _create_section(page):
    draft = _draft()
    c1, c2 = st.columns(2)
    draft.time_limit = int(c1.number_input("Time limit (minutes)", min_value=1, value=draft.time_limit,
                                           key="exam_time_limit"))
    draft.exam_type = c2.radio("Question selection", exam_svc.EXAM_TYPES, horizontal=True,
                               index=exam_svc.EXAM_TYPES.index(draft.exam_type), key="exam_type")

    if draft.exam_type == "manual":
        draft.question_ids = list(question_picker.render(page["questions"], "exam_q"))
    else:
        draft.category_counts = _count_inputs(page["categories"], draft.category_counts, "exam_count")
    st.caption(f"{exam_svc.total_selected(draft)} academic question(s) selected")

    draft.include_personality_test = st.checkbox("Include personality test",
                                                 value=draft.include_personality_test,
                                                 key="exam_include_personality")
    if draft.include_personality_test:
        draft.personality_exam_type = st.radio(
            "Personality question selection", exam_svc.EXAM_TYPES, horizontal=True,
            index=exam_svc.EXAM_TYPES.index(draft.personality_exam_type), key="exam_personality_type")
        if draft.personality_exam_type == "manual":
            draft.personality_question_ids = list(
                question_picker.render_personality(page["personality_questions"], "exam_pq"))
        else:
            draft.personality_category_counts = _count_inputs(
                page["personality_dichotomies"], draft.personality_category_counts, "exam_pcount")

    if st.button("Create exam", type="primary", key="exam_create"):
        if run_submission(lambda: exam_svc.create_exam(draft), "Exam created successfully",
                          "Failed to create exam"):
            st.session_state[DRAFT_KEY] = ExamDraft()
            question_picker.reset("exam_q")
            question_picker.reset("exam_pq")
            for k in [k for k in st.session_state if str(k).startswith(WIDGET_PREFIXES)]:
                del st.session_state[k]
            st.rerun()


def view():
    page_header("Exam Management", "Build entrance exams and control which ones are active")
    per_page = pagination.current_per_page(settings.default_per_page)
    page = load_or_stop(exam_svc.exam_management_page, per_page, pagination.current_page())

    with st.expander("➕ Create exam", expanded=False):
        _create_section(page)

    exams = page["exams"]
    st.subheader("Exams")
    pagination.per_page_selector(per_page, "exam_per_page")
    html_table(pd.DataFrame([{
        "Reference": e.exam_ref_no,
        "Type": e.exam_type,
        "Time (min)": e.time_limit,
        "Questions": e.question_count,
        "Personality": e.personality_count if e.include_personality_test else "-",
        "Results": e.result_count,
        "Status": status_badge(e.status),
    } for e in exams.items]), "No exams yet.")

    for e in exams.items:
        c1, c2 = st.columns([4, 1])
        c1.write(f"**{e.exam_ref_no}** · {e.status}")
        label = "Deactivate" if e.status == "active" else "Activate"
        if c2.button(label, key=f"exam_toggle_{e.exam_id}"):
            if run_submission(lambda: exam_svc.toggle_exam_status(e.exam_id),
                              "Exam status updated", "Failed to update exam status"):
                st.rerun()

    st.caption(pagination.summary(exams))
    pagination.render(exams.links, "exam_pages")
