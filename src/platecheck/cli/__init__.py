"""Command-line interface for platecheck."""
