"""Compact, mergeable summary index for Ensembl VEP variant annotations."""

__version__ = "0.1.0"
