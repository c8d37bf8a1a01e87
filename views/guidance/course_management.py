import streamlit as st
import pandas as pd

from domain.constants import PREF_COURSE_TABLE_MINIMIZED
from services import courses as course_svc, preferences
from services.errors import PortalError
from ui.components import (
    html_table, load_or_stop, notify, page_header, passing_rate_badge, run_submission,
)

FORM_KEY = "course_form"


def _init_form(values: dict, editing_id=None):
    """Queue new form values; widget state can only be written before the widgets exist."""
    st.session_state["course_form_pending"] = (values, editing_id)


def _apply_pending_form():
    pending = st.session_state.pop("course_form_pending", None)
    if pending is None:
        return
    values, editing_id = pending
    for k, v in values.items():
        st.session_state[f"{FORM_KEY}_{k}"] = v
    st.session_state["course_editing_id"] = editing_id


def _form_values() -> dict:
    return {k: st.session_state.get(f"{FORM_KEY}_{k}") for k in course_svc.empty_form()}


def _generate_description():
    name = st.session_state.get(f"{FORM_KEY}_course_name", "")
    try:
        text = course_svc.generate_description(name)
    except (ValueError, PortalError) as e:
        notify(str(e), "error")
        return
    st.session_state[f"{FORM_KEY}_description"] = text
    notify("Description generated", "success")


def _course_form():
    editing_id = st.session_state.get("course_editing_id")
    st.subheader("Edit course" if editing_id else "Add course")
    c1, c2 = st.columns(2)
    c1.text_input("Course code", key=f"{FORM_KEY}_course_code")
    c2.text_input("Course name", key=f"{FORM_KEY}_course_name")
    st.text_area("Description", key=f"{FORM_KEY}_description", height=120)
    st.button("✨ Generate description", on_click=_generate_description, key="course_generate")
    st.slider("Passing rate (%)", min_value=10, max_value=100, step=1, key=f"{FORM_KEY}_passing_rate")

    b1, b2 = st.columns(2)
    if b1.button("Update course" if editing_id else "Create course", type="primary", key="course_save"):
        form = _form_values()
        if editing_id:
            action = lambda: course_svc.update_course(editing_id, form)
            messages = ("Course updated successfully", "Failed to update course")
        else:
            action = lambda: course_svc.create_course(form)
            messages = ("Course created successfully", "Failed to create course")
        if run_submission(action, *messages):
            st.session_state.pop("course_form_open", None)
            _init_form(course_svc.empty_form())
            st.rerun()
    if b2.button("Cancel", key="course_cancel"):
        st.session_state.pop("course_form_open", None)
        _init_form(course_svc.empty_form())
        st.rerun()


def view():
    page_header("Course Management", "Courses, descriptions and passing rates")
    courses = load_or_stop(course_svc.list_courses)

    if f"{FORM_KEY}_course_code" not in st.session_state:
        _init_form(course_svc.empty_form())
    _apply_pending_form()

    c1, c2, c3 = st.columns(3)
    c1.metric("Total Courses", len(courses))
    rates = [c.passing_rate for c in courses]
    c2.metric("Average Passing Rate", f"{round(sum(rates) / len(rates)) if rates else 0}%")
    c3.metric("High Requirement (≥85%)", sum(1 for r in rates if course_svc.passing_rate_band(r) == "high"))

    if st.button("➕ Add course", key="course_add"):
        _init_form(course_svc.empty_form())
        st.session_state["course_form_open"] = True
        st.rerun()
    if st.session_state.get("course_form_open"):
        with st.container(border=True):
            _course_form()

    minimized = bool(preferences.load(PREF_COURSE_TABLE_MINIMIZED, False))
    head1, head2 = st.columns([4, 1])
    head1.subheader(f"Courses ({len(courses)})")
    if head2.button("Expand" if minimized else "Minimize", key="course_table_toggle"):
        preferences.toggle(PREF_COURSE_TABLE_MINIMIZED)
        st.rerun()
    if minimized:
        return

    html_table(pd.DataFrame([{
        "Code": c.course_code,
        "Name": c.course_name,
        "Description": (c.description[:120] + "…") if len(c.description) > 120 else c.description,
        "Passing rate": passing_rate_badge(c.passing_rate),
    } for c in courses]), "No courses yet.")

    for c in courses:
        with st.expander(f"{c.course_code} · {c.course_name}"):
            st.write(c.description or "No description.")
            b1, b2 = st.columns(2)
            if b1.button("Edit", key=f"course_edit_{c.id}"):
                _init_form(course_svc.form_from_course(c), editing_id=c.id)
                st.session_state["course_form_open"] = True
                st.rerun()
            confirm = b2.checkbox("Confirm delete", key=f"course_confirm_{c.id}")
            if b2.button("Delete", key=f"course_delete_{c.id}", disabled=not confirm):
                if run_submission(lambda: course_svc.delete_course(c.id),
                                  "Course deleted successfully", "Failed to delete course"):
                    st.rerun()
