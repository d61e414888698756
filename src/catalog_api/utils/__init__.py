"""Utility modules for the catalog API."""

from .io import run_blocking

__all__ = [
    "run_blocking",
]
