import streamlit as st

from services import profile as profile_svc
from ui.components import load_or_stop, page_header, run_submission


def _password_section(role: str):
    with st.form(f"{role}_password_form"):
        st.subheader("Change password")
        current = st.text_input("Current password", type="password", key=f"{role}_pw_current")
        new = st.text_input("New password", type="password", key=f"{role}_pw_new")
        confirm = st.text_input("Confirm new password", type="password", key=f"{role}_pw_confirm")
        submitted = st.form_submit_button("Change password")

    if not submitted:
        return
    form = {"current_password": current, "new_password": new, "new_password_confirmation": confirm}
    if run_submission(lambda: profile_svc.change_password(role, form),
                      "Password changed successfully", "Failed to change password"):
        for k in ("current", "new", "confirm"):
            st.session_state.pop(f"{role}_pw_{k}", None)
        st.rerun()


def render(role: str):
    page_header("Profile", "Manage your account information")
    data = load_or_stop(profile_svc.load_profile, role)

    with st.form(f"{role}_profile_form"):
        st.subheader("Account information")
        name = st.text_input("Name", value=data["name"])
        username = st.text_input("Username", value=data["username"])
        email = st.text_input("Email", value=data["email"])
        if data["department"]:
            st.text_input("Department", value=data["department"], disabled=True)
        address = st.text_input("Address", value=data["address"])
        submitted = st.form_submit_button("Save changes", type="primary")

    if submitted:
        form = {"name": name, "username": username, "email": email, "address": address}
        if run_submission(lambda: profile_svc.update_profile(role, form),
                          "Profile updated successfully", "Failed to update profile"):
            st.rerun()

    _password_section(role)
