"""Helpers shared by the rosa-tools subcommands."""
