import streamlit as st
from typing import List

from domain.constants import PER_PAGE_OPTIONS
from domain.models import PageLink, Paginated


def render(links: List[PageLink], key: str):
    """
    Draws the server's pagination links as a row of buttons.

    Clicking a link stores its page number in the ``page`` query parameter
    and reruns the script so the page loads with it. Links without a url
    (the disabled prev/next arrows, the ``...`` separator) are drawn disabled.
    """
    if len(links) <= 3:
        # only prev/1/next: nothing to navigate
        return
    cols = st.columns(len(links))
    for i, (col, link) in enumerate(zip(cols, links)):
        disabled = link.page is None or link.active
        if col.button(link.label, key=f"{key}_page_{i}", disabled=disabled,
                      type="primary" if link.active else "secondary"):
            st.query_params["page"] = str(link.page)
            st.rerun()


def summary(page: Paginated) -> str:
    if not page.items:
        return "No results"
    start = (page.current_page - 1) * page.per_page + 1
    end = start + len(page.items) - 1
    return f"Showing {start} to {end} of {page.total} results"


def reset_page():
    """Filter changes start again from the first page."""
    st.query_params["page"] = "1"


def per_page_selector(current: int, key: str) -> int:
    """Per-page select; changing it resets to page 1."""
    options = PER_PAGE_OPTIONS if current in PER_PAGE_OPTIONS else sorted(PER_PAGE_OPTIONS + [current])
    value = st.selectbox("Per page", options, index=options.index(current), key=key)
    if value != current:
        st.query_params["per_page"] = str(value)
        reset_page()
    return value


def current_page() -> int:
    try:
        return max(int(st.query_params.get("page", 1)), 1)
    except (TypeError, ValueError):
        return 1


def current_per_page(default: int) -> int:
    try:
        return int(st.query_params.get("per_page", default))
    except (TypeError, ValueError):
        return default
