"""Pages for department evaluators."""
