# src/scripting/testing/__init__.py
"""Test doubles for the scripting layer."""

from .fakes import DEFAULT_PACKAGE_PATH, FakeContextFactory, FakeScriptContext

__all__ = [
    "DEFAULT_PACKAGE_PATH",
    "FakeContextFactory",
    "FakeScriptContext",
]
