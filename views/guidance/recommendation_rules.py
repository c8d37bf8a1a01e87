import streamlit as st

from services import rules as rules_svc
from ui.components import load_or_stop, page_header, passing_rate_badge, run_submission


def _rule_form(page: dict, values: dict, key: str, submit_label: str):
    types = [t["type"] for t in page["personality_types"]]
    titles = {t["type"]: t["title"] for t in page["personality_types"]}
    personality_type = st.selectbox(
        "Personality type", types, format_func=lambda t: f"{t} · {titles.get(t, '')}",
        index=types.index(values["personality_type"]) if values["personality_type"] in types else None,
        key=f"{key}_type")
    c1, c2 = st.columns(2)
    min_score = c1.number_input("Minimum score (%)", 0, 100, int(values["min_score"]), key=f"{key}_min")
    max_score = c2.number_input("Maximum score (%)", 0, 100, int(values["max_score"]), key=f"{key}_max")

    compatible = rules_svc.compatible_courses(page["courses"], min_score)
    if not compatible:
        st.warning(f"No course has a passing rate at or below {min_score}%.")
    labels = {f"{c.course_code} · {c.course_name} ({c.passing_rate}%)": str(c.id) for c in compatible}
    chosen_ids = [str(i) for i in values["recommended_course_ids"]]
    chosen = st.multiselect("Recommended courses", list(labels),
                            default=[label for label, cid in labels.items() if cid in chosen_ids],
                            key=f"{key}_courses_{min_score}")
    if not st.button(submit_label, type="primary", key=f"{key}_submit"):
        return None
    return {
        "personality_type": personality_type or "",
        "min_score": min_score,
        "max_score": max_score,
        "recommended_course_ids": [labels[c] for c in chosen],
    }


def view():
    page_header("Recommendation Rules", "Map personality types and score ranges to courses")
    page = load_or_stop(rules_svc.rules_page)

    c1, c2 = st.columns([3, 1])
    c1.caption(f"{len(page['rules'])} rule(s) across {len(rules_svc.group_by_personality(page['rules']))} personality type(s)")
    if c2.button("⚡ Generate all rules", key="rules_generate_all"):
        if run_submission(rules_svc.generate_all, "Recommendation rules generated",
                          "Failed to generate rules"):
            st.rerun()

    with st.expander("➕ Add rule"):
        form = _rule_form(page, rules_svc.empty_form(), "rule_new", "Create rule")
        if form is not None:
            if run_submission(lambda: rules_svc.create_rule(form),
                              "Recommendation rule created successfully",
                              "Failed to create recommendation rule"):
                st.rerun()

    editing = st.session_state.get("rule_editing")
    for ptype, rules in rules_svc.group_by_personality(page["rules"]).items():
        with st.expander(f"{ptype} ({len(rules)})", expanded=editing in [r.id for r in rules]):
            for rule in rules:
                course = next((c for c in page["courses"] if c.course_code == rule.course_code), None)
                rate = course.passing_rate if course else None
                r1, r2, r3 = st.columns([6, 1, 1])
                r1.markdown(
                    f"{rule.min_score:g}% – {rule.max_score:g}% → **{rule.course_code}** {rule.course_name} "
                    f"{passing_rate_badge(rate)}",
                    unsafe_allow_html=True)
                if r2.button("Edit", key=f"rule_edit_{rule.id}"):
                    st.session_state["rule_editing"] = rule.id
                    st.rerun()
                if r3.button("Delete", key=f"rule_delete_{rule.id}"):
                    if run_submission(lambda: rules_svc.delete_rule(rule.id),
                                      "Recommendation rule deleted successfully",
                                      "Failed to delete recommendation rule"):
                        st.rerun()
                if editing == rule.id:
                    values = {
                        "personality_type": rule.personality_type,
                        "min_score": rule.min_score,
                        "max_score": rule.max_score,
                        "recommended_course_ids": [course.id] if course else [],
                    }
                    form = _rule_form(page, values, f"rule_edit_form_{rule.id}", "Save changes")
                    if form is not None:
                        if run_submission(lambda: rules_svc.update_rule(rule.id, form),
                                          "Recommendation rule updated successfully",
                                          "Failed to update recommendation rule"):
                            st.session_state.pop("rule_editing", None)
                            st.rerun()
