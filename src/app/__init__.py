# src/app/__init__.py
"""Extraction pipeline and command-line entrypoint."""

from .pipeline import ExtractionResult, run_extraction

__all__ = [
    "ExtractionResult",
    "run_extraction",
]
