import streamlit as st

from config import settings
from services import personality as personality_svc
from ui.components import load_or_stop, page_header, run_submission
from ui.components import pagination


def _question_form(values: dict, key: str, submit_label: str):
    """Returns the submitted form values or None."""
    dichotomies = list(personality_svc.DICHOTOMY_SIDES)
    dichotomy = st.selectbox("Dichotomy", dichotomies, index=dichotomies.index(values["dichotomy"]),
                             key=f"{key}_dichotomy")
    sides = personality_svc.DICHOTOMY_SIDES[dichotomy]
    with st.form(f"{key}_form"):
        question = st.text_area("Question", value=values["question"], key=f"{key}_question")
        c1, c2 = st.columns(2)
        positive = c1.selectbox("Positive side", sides,
                                index=sides.index(values["positive_side"]) if values["positive_side"] in sides else 0,
                                key=f"{key}_positive_{dichotomy}")
        negative = c2.selectbox("Negative side", sides,
                                index=sides.index(values["negative_side"]) if values["negative_side"] in sides else 1,
                                key=f"{key}_negative_{dichotomy}")
        submitted = st.form_submit_button(submit_label, type="primary")
    if not submitted:
        return None
    return {"question": question, "dichotomy": dichotomy, "positive_side": positive, "negative_side": negative}


def view():
    page_header("Personality Test Management", "Questions for the four personality dichotomies")
    per_page = pagination.current_per_page(settings.default_per_page)
    data = load_or_stop(personality_svc.list_questions, per_page, pagination.current_page())
    page = data["questions"]

    with st.expander("➕ Add personality question"):
        form = _question_form(personality_svc.empty_form(), "personality_new", "Create question")
        if form is not None:
            if run_submission(lambda: personality_svc.create_question(form),
                              "Personality question created successfully",
                              "Failed to create personality question"):
                st.rerun()

    with st.expander("📤 Upload CSV"):
        st.caption("Columns: question, dichotomy, positive_side, negative_side. The file is forwarded to the server.")
        uploaded = st.file_uploader("CSV file", type=["csv"], key="personality_upload")
        if uploaded is not None and st.button("Upload", key="personality_upload_btn"):
            if run_submission(lambda: personality_svc.upload_csv(uploaded.name, uploaded.getvalue()),
                              "Personality questions uploaded successfully",
                              "Failed to upload personality questions"):
                st.rerun()

    pagination.per_page_selector(per_page, "personality_per_page")
    st.caption(pagination.summary(page))
    editing = st.session_state.get("personality_editing")
    for q in page.items:
        with st.container(border=True):
            c1, c2, c3 = st.columns([8, 1, 1])
            c1.markdown(f"**[{q.dichotomy}]** {q.question}  \n"
                        f"Agree → {q.positive_side} · Disagree → {q.negative_side}")
            if c2.button("Edit", key=f"personality_edit_{q.id}"):
                st.session_state["personality_editing"] = q.id
                st.rerun()
            if c3.button("Delete", key=f"personality_delete_{q.id}"):
                if run_submission(lambda: personality_svc.delete_question(q.id),
                                  "Personality question deleted successfully",
                                  "Failed to delete personality question"):
                    st.rerun()
            if editing == q.id:
                values = {"question": q.question, "dichotomy": q.dichotomy,
                          "positive_side": q.positive_side, "negative_side": q.negative_side}
                if values["dichotomy"] not in personality_svc.DICHOTOMY_SIDES:
                    values = personality_svc.with_dichotomy(values, "E/I")
                form = _question_form(values, f"personality_edit_form_{q.id}", "Save changes")
                if form is not None:
                    if run_submission(lambda: personality_svc.update_question(q.id, form),
                                      "Personality question updated successfully",
                                      "Failed to update personality question"):
                        st.session_state.pop("personality_editing", None)
                        st.rerun()
    pagination.render(page.links, "personality_pages")
