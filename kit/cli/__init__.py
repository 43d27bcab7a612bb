"""Command-line interface for Kit."""
