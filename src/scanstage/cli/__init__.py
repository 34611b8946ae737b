"""Command-line interface for scanstage."""
