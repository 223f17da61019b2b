# src/app/logging_config.py
"""
Logging setup for the extract-recipes entrypoint.

What gets logged:
  - INFO:    discovered mods, resolved load order, each package loaded,
             settings collected, recipe and locale totals
  - WARNING: every skipped manifest, script, recipe or locale file
             (mirrors the RunReport), missing data loader / patch script
  - DEBUG:   per-file detail (dofile paths, dropped optional dependencies,
             dropped Lua values)

Log lines go to stdout next to the table report. When stdout carries a
machine-readable payload (--format json) pass stream=sys.stderr so the
payload stays parseable.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """
    Attach one stream handler to the root logger if none is attached yet.

    Args:
        level: root logging level (logging.INFO, or logging.DEBUG for -v)
        stream: handler stream, sys.stdout by default
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Don't duplicate handlers if someone already configured logging.
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
