"""Command-line interface for csq-pipeline."""
