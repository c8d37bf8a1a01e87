"""Per-category checklists used by the exam builders.

The selected ids live in ``st.session_state[key]``; each checkbox has its
own widget key derived from it so select/clear-all can update the boxes.
"""
import streamlit as st
from typing import Dict, List, Optional, Sequence, Tuple

from domain.models import PersonalityQuestion, Question
from services import selection


def _toggle(key: str, item_id: int):
    st.session_state[key] = selection.toggle(st.session_state.get(key, []), item_id)


def _sync_boxes(key: str, ids: Sequence[int]):
    selected = st.session_state.get(key, [])
    for item_id in ids:
        st.session_state[f"{key}_{item_id}"] = item_id in selected


def _select_category(key: str, questions: List[Question], category: str, on: bool):
    current = st.session_state.get(key, [])
    if on:
        st.session_state[key] = selection.select_all_in_category(current, questions, category)
    else:
        st.session_state[key] = selection.clear_category(current, questions, category)
    _sync_boxes(key, [q.question_id for q in questions if q.category == category])


def _select_ids(key: str, ids: List[int], on: bool):
    current = st.session_state.get(key, [])
    st.session_state[key] = selection.select_ids(current, ids) if on else selection.clear_ids(current, ids)
    _sync_boxes(key, ids)


def _checklist(key: str, items: List[Tuple[int, str]]):
    selected = st.session_state.get(key, [])
    for item_id, label in items:
        box_key = f"{key}_{item_id}"
        st.session_state.setdefault(box_key, item_id in selected)
        st.checkbox(label[:200], key=box_key, on_change=_toggle, args=(key, item_id))


def render(questions: List[Question], key: str, category: Optional[str] = None,
           search: str = "") -> List[int]:
    """Academic questions grouped by category."""
    st.session_state.setdefault(key, [])
    for cat, items in selection.group_by_category(questions, category, search).items():
        chosen = sum(1 for q in items if q.question_id in st.session_state[key])
        with st.expander(f"{cat} ({len(items)} questions)"):
            st.caption(f"{chosen} selected")
            c1, c2 = st.columns(2)
            c1.button("Select all", key=f"{key}_all_{cat}", on_click=_select_category,
                      args=(key, questions, cat, True))
            c2.button("Clear", key=f"{key}_clear_{cat}", on_click=_select_category,
                      args=(key, questions, cat, False))
            _checklist(key, [(q.question_id, q.question) for q in items])
    return st.session_state[key]


def render_personality(questions: List[PersonalityQuestion], key: str) -> List[int]:
    """Personality questions grouped by dichotomy."""
    st.session_state.setdefault(key, [])
    grouped: Dict[str, List[PersonalityQuestion]] = {}
    for q in questions:
        grouped.setdefault(q.dichotomy, []).append(q)
    for dichotomy, items in grouped.items():
        ids = [q.id for q in items]
        with st.expander(f"{dichotomy} ({len(ids)} questions)"):
            st.caption(f"{sum(1 for i in ids if i in st.session_state[key])} selected")
            c1, c2 = st.columns(2)
            c1.button("Select all", key=f"{key}_all_{dichotomy}", on_click=_select_ids, args=(key, ids, True))
            c2.button("Clear", key=f"{key}_clear_{dichotomy}", on_click=_select_ids, args=(key, ids, False))
            _checklist(key, [(q.id, q.question) for q in items])
    return st.session_state[key]


def reset(key: str):
    for k in [k for k in st.session_state if k == key or str(k).startswith(f"{key}_")]:
        del st.session_state[k]
