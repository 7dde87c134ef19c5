"""rosa-tools subcommands."""
