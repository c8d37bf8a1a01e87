import streamlit as st
from dataclasses import asdict

from config import settings
from domain.constants import PREF_QUESTION_BANK_TABLE_MINIMIZED, SORT_OPTIONS
from domain.models import DraftQuestion, Question
from services import preferences, questions as question_svc, selection
from ui.components import load_or_stop, page_header, run_submission
from ui.components import pagination, question_form


def _selection_key(role: str, archived: bool) -> str:
    return f"{role}_{'archived' if archived else 'bank'}_selected"


def _filters(role: str, archived: bool) -> dict:
    key = f"{role}_{'archived' if archived else 'bank'}"
    c1, c2, c3 = st.columns(3)
    categories = st.session_state.get(f"{key}_categories", [])
    category = c1.selectbox("Category", ["All"] + categories, key=f"{key}_category",
                            on_change=pagination.reset_page)
    sort = c2.selectbox("Sort", list(SORT_OPTIONS), format_func=SORT_OPTIONS.get, key=f"{key}_sort",
                        on_change=pagination.reset_page)
    with c3:
        per_page = pagination.per_page_selector(
            pagination.current_per_page(settings.default_per_page), f"{key}_per_page")
    return {
        "category": None if category == "All" else category,
        "sort": sort,
        "per_page": per_page,
        "page": pagination.current_page(),
    }


def _edit_form(role: str, q: Question):
    draft = DraftQuestion(**question_svc.edit_form(q))
    edited = question_form.render(draft, f"{role}_edit_{q.question_id}",
                                  st.session_state.get(f"{role}_bank_categories", []),
                                  submit_label="Save changes")
    if edited is not None:
        if run_submission(lambda: question_svc.update_question(role, q.question_id, asdict(edited)),
                          "Question updated successfully", "Failed to update question"):
            st.session_state.pop(f"{role}_editing", None)
            st.rerun()


def _on_toggle_row(sel_key: str, question_id: int):
    st.session_state[sel_key] = selection.toggle(st.session_state.get(sel_key, []), question_id)


def _on_select_page(sel_key: str, page_ids: list):
    select_all = st.session_state[f"{sel_key}_all"]
    others = [i for i in st.session_state.get(sel_key, []) if i not in page_ids]
    st.session_state[sel_key] = others + selection.select_page(page_ids, select_all)
    for qid in page_ids:
        st.session_state[f"{sel_key}_{qid}"] = select_all


def _clear_selection(sel_key: str):
    for k in [k for k in st.session_state if str(k).startswith(f"{sel_key}_")]:
        del st.session_state[k]
    st.session_state[sel_key] = []


def _question_row(role: str, q: Question, archived: bool):
    sel_key = _selection_key(role, archived)
    row_key = f"{sel_key}_{q.question_id}"
    st.session_state.setdefault(row_key, q.question_id in st.session_state.get(sel_key, []))
    c0, c1, c2 = st.columns([1, 12, 3])
    c0.checkbox("Select", key=row_key, on_change=_on_toggle_row, args=(sel_key, q.question_id),
                label_visibility="collapsed")

    with c1:
        if q.direction:
            st.caption(q.direction)
        st.markdown(f"<div class='question-text'>{question_svc.render_text(q.question, q.formatted_question)}</div>",
                    unsafe_allow_html=True)
        if q.image:
            st.image(q.image, width=200)
        for letter, text in zip("ABCDE", q.options()):
            if text:
                mark = " ✓" if letter == q.correct_answer else ""
                st.markdown(f"**{letter}.** {text}{mark}")

    with c2:
        if archived:
            if st.button("Restore", key=f"restore_{role}_{q.question_id}"):
                if run_submission(lambda: question_svc.restore_question(role, q.question_id),
                                  "Question restored successfully", "Failed to restore question"):
                    st.rerun()
        else:
            if st.button("Edit", key=f"edit_{role}_{q.question_id}"):
                st.session_state[f"{role}_editing"] = q.question_id
            if st.button("Archive", key=f"archive_{role}_{q.question_id}"):
                if run_submission(lambda: question_svc.archive_question(role, q.question_id),
                                  "Question archived successfully", "Failed to archive question"):
                    st.rerun()

    if not archived and st.session_state.get(f"{role}_editing") == q.question_id:
        with st.expander("Edit question", expanded=True):
            _edit_form(role, q)


def _upload(role: str):
    with st.expander("📤 Upload questions (CSV / Excel)"):
        st.caption("The file is sent to the server importer as-is.")
        uploaded = st.file_uploader("Question file", type=["csv", "xlsx", "xls"], key=f"{role}_bank_upload")
        if uploaded is not None and st.button("Upload", key=f"{role}_bank_upload_btn"):
            if run_submission(lambda: question_svc.upload_questions(role, uploaded.name, uploaded.getvalue()),
                              "Questions uploaded successfully", "Failed to upload questions"):
                st.rerun()


def render(role: str, archived: bool = False):
    """Question bank listing with filters, selection and bulk actions."""
    if archived:
        page_header("Archived Questions", "Restore questions back into the active bank")
    else:
        page_header("Question Bank", "Browse, edit and archive exam questions")

    filters = _filters(role, archived)
    loader = question_svc.archived_questions if archived else question_svc.question_bank
    bank = load_or_stop(loader, role, filters)
    st.session_state[f"{role}_{'archived' if archived else 'bank'}_categories"] = bank["categories"]
    page = bank["questions"]

    if bank["category_counts"]:
        counts = bank["category_counts"]
        if isinstance(counts, list):
            counts = {c.get("category"): c.get("count") for c in counts if isinstance(c, dict)}
        st.caption(" · ".join(f"{k}: {v}" for k, v in counts.items()))

    if not archived:
        _upload(role)

    sel_key = _selection_key(role, archived)
    selected = st.session_state.setdefault(sel_key, [])
    page_ids = [q.question_id for q in page.items]

    b1, b2, b3 = st.columns([2, 2, 3])
    b1.checkbox("Select all on page", key=f"{sel_key}_all", on_change=_on_select_page,
                args=(sel_key, page_ids))
    bulk_label = f"Restore selected ({len(selected)})" if archived else f"Archive selected ({len(selected)})"
    if b2.button(bulk_label, disabled=not selected, key=f"{sel_key}_bulk"):
        bulk = question_svc.bulk_restore if archived else question_svc.bulk_archive
        done = "restored" if archived else "archived"
        if run_submission(lambda: bulk(role, selected), f"{len(selected)} question(s) {done}",
                          "Bulk action failed"):
            _clear_selection(sel_key)
            st.rerun()

    minimized = False
    if not archived:
        minimized = bool(preferences.load(PREF_QUESTION_BANK_TABLE_MINIMIZED, False))
        if b3.button("Expand table" if minimized else "Minimize table", key=f"{role}_bank_minimize"):
            preferences.toggle(PREF_QUESTION_BANK_TABLE_MINIMIZED)
            st.rerun()

    st.caption(pagination.summary(page))
    if not minimized:
        grouped = selection.group_by_category(page.items)
        if not grouped:
            st.info("No questions found.")
        for category, items in grouped.items():
            st.subheader(f"{category} ({len(items)})")
            for q in items:
                with st.container(border=True):
                    _question_row(role, q, archived)

    pagination.render(page.links, f"{sel_key}_pages")
