import streamlit as st
import pandas as pd

from services import evaluators as evaluator_svc
from services.errors import PortalError
from ui.components import load_or_stop, notify, page_header, run_submission


def _create_form(departments):
    with st.form("evaluator_create_form"):
        st.subheader("Add evaluator")
        c1, c2 = st.columns(2)
        name = c1.text_input("Full name")
        department = c2.selectbox("Department", departments, index=None,
                                  placeholder="Choose or type a department", accept_new_options=True)
        username = c1.text_input("Username")
        email = c2.text_input("Email")
        password = c1.text_input("Password", type="password")
        confirmation = c2.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Create evaluator", type="primary")

    if not submitted:
        return
    form = {
        "name": name, "department": department or "", "username": username, "email": email,
        "password": password, "password_confirmation": confirmation,
    }
    try:
        result = evaluator_svc.create_evaluator(form)
    except PortalError as e:
        notify(str(e), "error")
        return
    if result.success:
        notify(result.message or "Evaluator created successfully", "success")
        st.rerun()
    for field, message in result.errors.items():
        st.error(evaluator_svc.explain_field_error(field, message))
    notify("Failed to create evaluator", "error")


def view():
    page_header("Evaluator Management", "Create and remove department evaluator accounts")
    evaluators = load_or_stop(evaluator_svc.list_evaluators)

    departments = sorted({e.department for e in evaluators if e.department})
    _create_form(departments)

    st.subheader(f"Evaluators ({len(evaluators)})")
    if not evaluators:
        st.info("No evaluators yet.")
        return

    df = pd.DataFrame([{
        "Name": e.name, "Username": e.username, "Email": e.email,
        "Department": e.department, "Created": str(e.created_at or "")[:10],
    } for e in evaluators])
    st.dataframe(df, use_container_width=True, hide_index=True)

    with st.expander("Remove an evaluator"):
        labels = {f"{e.name} ({e.username}) · {e.department}": e.id for e in evaluators}
        choice = st.selectbox("Evaluator", list(labels), key="evaluator_delete_choice")
        confirm = st.checkbox("I understand this removes the evaluator's login", key="evaluator_delete_confirm")
        if st.button("Delete evaluator", disabled=not confirm, key="evaluator_delete"):
            if run_submission(lambda: evaluator_svc.delete_evaluator(labels[choice]),
                              "Evaluator deleted successfully", "Failed to delete evaluator"):
                st.rerun()
