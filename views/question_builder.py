import streamlit as st

from domain.constants import ROLE_GUIDANCE
from services import questions as question_svc
from services.drafts import DraftQuestionList, blank_question
from ui.components import load_or_stop, notify, page_header, run_submission
from ui.components import question_form


def _drafts(role: str) -> DraftQuestionList:
    key = f"{role}_drafts"
    if key not in st.session_state:
        st.session_state[key] = DraftQuestionList()
    return st.session_state[key]


def _form_version(role: str) -> int:
    return st.session_state.setdefault(f"{role}_builder_form_version", 0)


def _reset_form(role: str, draft=None):
    """Refill the editor (blank, or with a draft pulled back for editing)."""
    st.session_state[f"{role}_builder_current"] = draft or blank_question()
    # widget keys change with the version so Streamlit drops the old input values
    st.session_state[f"{role}_builder_form_version"] = _form_version(role) + 1


def render(role: str):
    """Compose questions locally, then submit the whole list in one request."""
    page_header("Question Builder",
                "Add questions to the list below, review them, then save them all at once")
    categories = load_or_stop(question_svc.builder_categories, role)
    drafts = _drafts(role)
    current = st.session_state.get(f"{role}_builder_current") or blank_question()

    edited = question_form.render(current, f"{role}_builder_{_form_version(role)}", categories)
    if edited is not None:
        try:
            drafts.add(edited)
        except ValueError as e:
            notify(str(e), "error")
        else:
            notify("Question added to the list", "success")
            _reset_form(role)
            st.rerun()

    st.write("---")
    st.subheader(f"Questions to save ({len(drafts)})")
    if not len(drafts):
        st.caption("No questions added yet.")

    for index, draft in enumerate(drafts, start=1):
        with st.container(border=True):
            c1, c2, c3 = st.columns([10, 1, 1])
            c1.markdown(f"**{index}. [{draft.category}]** {draft.question}")
            if c2.button("Edit", key=f"{role}_draft_edit_{draft.id}"):
                _reset_form(role, drafts.edit(draft.id))
                st.rerun()
            if c3.button("Remove", key=f"{role}_draft_remove_{draft.id}"):
                drafts.remove(draft.id)
                st.rerun()

    b1, b2 = st.columns(2)
    if b1.button("Clear all", disabled=not len(drafts), key=f"{role}_drafts_clear"):
        drafts.clear()
        st.rerun()
    save_label = f"Save {len(drafts)} question(s)"
    if b2.button(save_label, type="primary", disabled=not len(drafts), key=f"{role}_drafts_save"):
        count = len(drafts)
        if run_submission(lambda: question_svc.bulk_create(role, drafts),
                          f"{count} question(s) created successfully", "Failed to create questions"):
            drafts.clear()
            st.rerun()

    if role == ROLE_GUIDANCE:
        st.caption("Saved questions appear in the Question Bank.")
