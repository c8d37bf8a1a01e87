import streamlit as st
from dataclasses import replace
from typing import List, Optional

from domain.constants import ANSWER_LETTERS
from domain.models import DraftQuestion, OPTION_FIELDS
from utils.images import image_to_data_url, is_data_url

IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]


def _image_input(label: str, current: Optional[str], key: str) -> Optional[str]:
    """File uploader that keeps the existing image unless a new one is chosen."""
    uploaded = st.file_uploader(label, type=IMAGE_TYPES, key=key)
    if uploaded is not None:
        return image_to_data_url(uploaded.name, uploaded.getvalue(), uploaded.type)
    if current and is_data_url(current):
        st.image(current, width=120)
    return current


def render(draft: DraftQuestion, key_prefix: str, categories: List[str],
           submit_label: str = "Add to list") -> Optional[DraftQuestion]:
    """
    Renders the editor for one question, including per-field image uploads.

    Args:
        draft (DraftQuestion): Values to prefill (a blank question or a draft pulled back for editing).
        key_prefix (str): A unique prefix for Streamlit widget keys.
        categories (List[str]): Known categories offered as suggestions.
        submit_label (str): Label of the submit button.

    Returns:
        DraftQuestion: The edited question when submitted, otherwise None.
        Required fields are checked by the caller.
    """
    with st.form(f"form_{key_prefix}", clear_on_submit=False):
        question = st.text_area("Question", value=draft.question, key=f"{key_prefix}_question")
        direction = st.text_input("Direction (optional)", value=draft.direction,
                                  key=f"{key_prefix}_direction")

        c1, c2 = st.columns(2)
        known = [""] + sorted(set(categories))
        picked = c1.selectbox("Category", known,
                              index=known.index(draft.category) if draft.category in known else 0,
                              key=f"{key_prefix}_category_pick")
        typed = c2.text_input("...or new category",
                              value="" if draft.category in known else draft.category,
                              key=f"{key_prefix}_category_new")
        image = _image_input("Question image", draft.image, f"{key_prefix}_image")

        options = {}
        option_images = {}
        for letter, field_name in zip(ANSWER_LETTERS, OPTION_FIELDS):
            oc1, oc2 = st.columns([3, 2])
            options[field_name] = oc1.text_input(f"Option {letter}", value=getattr(draft, field_name),
                                                 key=f"{key_prefix}_{field_name}")
            with oc2:
                option_images[f"{field_name}_image"] = _image_input(
                    f"Image {letter}", getattr(draft, f"{field_name}_image"),
                    f"{key_prefix}_{field_name}_image")

        answer_idx = ANSWER_LETTERS.index(draft.correct_answer) if draft.correct_answer in ANSWER_LETTERS else 0
        correct = st.radio("Correct answer", ANSWER_LETTERS, index=answer_idx, horizontal=True,
                           key=f"{key_prefix}_correct")

        submitted = st.form_submit_button(submit_label, type="primary")

    if not submitted:
        return None
    return replace(
        draft,
        question=question,
        direction=direction,
        category=(typed or picked).strip(),
        correct_answer=correct,
        image=image,
        **options,
        **option_images,
    )
