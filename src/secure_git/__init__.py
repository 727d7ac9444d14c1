"""Secure Git - detect AI co-authors in local Git repositories."""

__version__ = "2.0.0"
