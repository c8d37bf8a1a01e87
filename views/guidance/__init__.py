"""Pages for guidance counselors."""
