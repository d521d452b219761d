"""Shared helpers: input validation and metrics."""
