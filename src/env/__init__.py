# src/env/__init__.py
"""Run configuration (config/extractor.yaml)."""

from __future__ import annotations

from .schema import ExtractorConfig
from .loader import DEFAULT_CONFIG, config_from_mapping, load_config

__all__ = [
    "ExtractorConfig",
    "DEFAULT_CONFIG",
    "config_from_mapping",
    "load_config",
]
