"""Rich formatters for CLI output."""
