"""
This package provides a collection of reusable UI components for the Streamlit application.

It is organized into several modules, each containing a specific category of components:
- `base`: Basic, general-purpose components like CSS injectors and badges.
- `notify`: The shared global notification used by every page.
- `sidebar`: The grouped, collapsible navigation menu.
- `pagination`: Page-link buttons and per-page selection for server paginated lists.
- `question_form`: The single-question editor used by the question builders and banks.
- `question_picker`: Category-grouped checklists for picking exam questions.

The most common helpers are re-exported here (`from ui import components`).
"""

from .base import (
    inject_base_css,
    page_header,
    status_badge,
    passing_rate_badge,
    html_table,
)

from .notify import notify, report, run_submission, load_or_stop, flush as flush_notifications
