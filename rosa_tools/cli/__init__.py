"""Command-line interface for rosa-tools."""
