import streamlit as st
import pandas as pd

from services import results as results_svc
from services.errors import PortalError
from ui.components import load_or_stop, notify, page_header
from ui.components import pagination


def _yes_no(flag: bool) -> str:
    return "✅ Yes" if flag else "❌ No"


@st.dialog("Eligibility verification")
def _verify_dialog(recommendation_id: int):
    try:
        result = results_svc.verify_student(recommendation_id)
    except PortalError as e:
        notify("Error verifying student eligibility", "error")
        st.error(str(e))
        return
    st.markdown(f"**Student:** {result['student_name']}")
    st.markdown(f"**Course:** {result['recommended_course']}")
    st.markdown(f"**Academic passed:** {_yes_no(result['academic_passed'])}")
    st.markdown(f"**Personality suitable:** {_yes_no(result['personality_suitable'])}")
    st.markdown(f"**Overall eligible:** {_yes_no(result['overall_eligible'])}")


def view():
    page_header("Academic Exam Results",
                "Students who passed the academic exam and were recommended for your department")

    c1, c2, c3 = st.columns(3)
    reset = pagination.reset_page
    filters = {
        "student_name": c1.text_input("Student name", key="student_results_name", on_change=reset),
        "course": c2.text_input("Course", key="student_results_course", on_change=reset),
        "personality_type": c3.text_input("Personality type", key="student_results_type", on_change=reset),
    }
    data = load_or_stop(results_svc.student_results, {**filters, "page": pagination.current_page()})
    stats = data["stats"]

    m1, m2, m3 = st.columns(3)
    m1.metric("Total passed students", stats.get("total_recommendations", data["recommendations"].total))
    m2.metric("Courses", stats.get("unique_courses", 0))
    m3.metric("Personality types", stats.get("unique_personality_types", len(data["personality_distribution"])))
    st.link_button("⬇️ Export", results_svc.export_url(filters))

    if data["personality_distribution"]:
        dist = pd.DataFrame(data["personality_distribution"])
        if {"personality_type", "count"} <= set(dist.columns):
            st.bar_chart(dist, x="personality_type", y="count")

    page = data["recommendations"]
    for rec in page.items:
        r1, r2, r3, r4 = st.columns([4, 4, 2, 1])
        r1.write(f"**{rec.student_name}**")
        r2.write(rec.recommended_course)
        r3.write(f"{rec.personality_type} · {rec.score:g}%")
        if r4.button("Verify", key=f"student_verify_{rec.id}"):
            _verify_dialog(rec.id)
    if not page.items:
        st.info("No students found.")
    st.caption(pagination.summary(page))
    pagination.render(page.links, "student_results_pages")
