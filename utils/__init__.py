"""Pure validation and parsing helpers."""
