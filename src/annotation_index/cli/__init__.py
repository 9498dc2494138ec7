"""Command line interface for annotation-index."""
