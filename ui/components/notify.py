"""Shared global notification.

Every page reports outcomes through ``notify``. Messages are shown with
``st.toast`` and also queued in session state, because most actions end in
``st.rerun()`` which would otherwise drop the toast before it is seen.
"""
import logging
from typing import Callable, TypeVar

import streamlit as st

from services.client import SubmitResult
from services.errors import PortalError

QUEUE_KEY = "_pending_notifications"

T = TypeVar("T")

ICONS = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
}

logger = logging.getLogger(__name__)


def notify(message: str, level: str = "info"):
    if level not in ICONS:
        level = "info"
    if level == "error":
        logger.info("User-facing error: %s", message)
    st.session_state.setdefault(QUEUE_KEY, []).append((message, level))


def flush():
    """Show queued notifications once; called by the router on every run."""
    pending = st.session_state.get(QUEUE_KEY) or []
    st.session_state[QUEUE_KEY] = []
    for message, level in pending:
        st.toast(message, icon=ICONS.get(level))
    return pending


def report(result: SubmitResult, success_message: str, failure_message: str) -> bool:
    """Notify the outcome of one form submission and return whether it succeeded."""
    if result.success:
        notify(result.message or success_message, "success")
        return True
    notify(result.message or f"{failure_message}: {result.first_error()}", "error")
    return False


def run_submission(action: Callable[[], SubmitResult], success_message: str,
                   failure_message: str) -> bool:
    """
    Call a service submission and report it.

    Local required-field checks (ValueError) and transport failures
    (PortalError) become error notifications. Nothing is cleared on failure
    so the form keeps its values.
    """
    try:
        result = action()
    except (ValueError, PortalError) as e:
        notify(str(e), "error")
        return False
    return report(result, success_message, failure_message)


def load_or_stop(loader: Callable[..., T], *args, **kwargs) -> T:
    """Fetch page data; on failure show the error in place of the page."""
    try:
        return loader(*args, **kwargs)
    except PortalError as e:
        logger.warning("Loading page data failed: %s", e)
        st.error(str(e))
        st.stop()
