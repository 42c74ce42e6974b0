"""Command-line interface for CDC Schema Hub."""
