import streamlit as st
import pandas as pd

from services import results as results_svc
from services.dashboard import summarize_scores
from services.errors import PortalError
from ui.components import load_or_stop, notify, page_header, run_submission

ANSWER_FILTERS = {"all": "All answers", "correct": "Correct only", "incorrect": "Incorrect only"}


def _json_action(action, success_message: str) -> bool:
    """Archive endpoints answer with JSON instead of a page."""
    try:
        data = action()
    except (ValueError, PortalError) as e:
        notify(str(e), "error")
        return False
    notify(data.get("message") or success_message, "success")
    return True


@st.dialog("Exam result details", width="large")
def _details_dialog(result_id: int):
    try:
        data = results_svc.result_details(result_id)
    except PortalError as e:
        st.error(str(e))
        return
    examinee = data.get("examinee") or {}
    st.markdown(f"**Student:** {examinee.get('name') or data.get('student_name', '')}")
    st.markdown(f"**Exam:** {data.get('exam_ref_no', '')}  ·  **Score:** {data.get('score', '')}")

    courses = results_svc.recommended_courses(data)
    if courses:
        st.markdown("**Recommended courses**")
        st.markdown("\n".join(f"- {label}" for label in courses))

    c1, c2 = st.columns(2)
    answer_filter = c1.selectbox("Show", list(ANSWER_FILTERS), format_func=ANSWER_FILTERS.get,
                                 key=f"detail_filter_{result_id}")
    search = c2.text_input("Search question", key=f"detail_search_{result_id}").strip().lower()

    answers = data.get("answers") or []
    if answer_filter != "all":
        want = answer_filter == "correct"
        answers = [a for a in answers if bool(a.get("is_correct")) == want]
    if search:
        answers = [a for a in answers if search in str(a.get("question", "")).lower()]
    if not answers:
        st.caption("No answers match.")
        return
    st.dataframe(pd.DataFrame([{
        "No.": a.get("no"),
        "Question": a.get("question"),
        "Answer": a.get("student_answer"),
        "Correct": a.get("correct_answer"),
        "Result": "✔" if a.get("is_correct") else "✖",
    } for a in answers]), use_container_width=True, hide_index=True)


def _results_table(results, key: str, unarchive: bool = False):
    if not results:
        st.caption("No results.")
        return
    for r in results:
        c1, c2, c3, c4 = st.columns([4, 2, 2, 2])
        c1.write(f"**{r.student_name or 'Unknown'}** · {r.exam_ref_no}")
        c2.write(f"{r.score:g}%")
        if c3.button("Details", key=f"{key}_details_{r.result_id}"):
            _details_dialog(r.result_id)
        if unarchive and c4.button("Unarchive", key=f"{key}_unarchive_{r.result_id}"):
            if _json_action(lambda: results_svc.unarchive_result(r.result_id), "Result unarchived"):
                st.rerun()


def view():
    page_header("Exam Results", "Entrance exam results, archiving and recommendation processing")

    c1, c2, c3 = st.columns([2, 2, 3])
    year = c1.text_input("Year", key="results_year")
    include_archived = c2.checkbox("Include archived", key="results_include_archived")
    data = load_or_stop(results_svc.exam_results, {"year": year, "include_archived": include_archived})
    results = data["results"].items

    summary = summarize_scores(results)
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Results", summary["count"])
    m2.metric("Average", f"{summary['average']}%")
    m3.metric("Passed", summary["passed"])
    m4.metric("Pass rate", f"{summary['pass_rate']}%")

    with c3:
        if st.button("⚙️ Process results", key="results_process"):
            if run_submission(results_svc.process_results,
                              "Results processed and recommendations generated successfully",
                              "Failed to process results"):
                st.rerun()

    with st.expander("Archive"):
        years = data["years"]
        a1, a2 = st.columns(2)
        archive_year = a1.selectbox("Year to archive", years, index=None, key="results_archive_year")
        if a1.button("Archive year", key="results_archive_year_btn", disabled=archive_year is None):
            if _json_action(lambda: results_svc.archive_year(archive_year), f"Results from {archive_year} archived"):
                st.rerun()
        confirm = a2.checkbox("Confirm archive all", key="results_archive_all_confirm")
        if a2.button("Archive all results", key="results_archive_all", disabled=not confirm):
            if _json_action(results_svc.archive_all, "All results archived"):
                st.rerun()

    for result_year, items in results_svc.group_by_year(results).items():
        st.subheader(str(result_year or "Undated"))
        _results_table(items, f"results_{result_year}")


def archived_view():
    page_header("Archived Exam Results", "Results moved out of the active list, grouped by year")
    year = st.text_input("Year", key="archived_results_year").strip()
    data = load_or_stop(results_svc.archived_results, int(year) if year.isdigit() else None)

    for result_year, items in results_svc.group_by_year(data["results"].items).items():
        h1, h2 = st.columns([4, 1])
        h1.subheader(f"{result_year or 'Undated'} ({len(items)})")
        if result_year and h2.button("Unarchive year", key=f"unarchive_year_{result_year}"):
            if _json_action(lambda: results_svc.unarchive_year(result_year),
                            f"Results from {result_year} restored"):
                st.rerun()
        _results_table(items, f"archived_{result_year}", unarchive=True)
    if not data["results"].items:
        st.info("No archived results.")
