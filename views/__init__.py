"""View modules for manual routing.

This project uses a custom router in `app.py` instead of Streamlit's automatic
multi-page system. Role-specific pages live under `views/guidance/` and
`views/evaluator/` and expose a `view()` function. Pages shared by both roles
(dashboard, question bank, question builder, profile) live directly under
`views/` and expose `render(role)`.

Add any new page as a module and register it in `PAGE_REGISTRY` inside `app.py`.
"""
