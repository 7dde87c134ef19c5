"""Data models and the error taxonomy."""
