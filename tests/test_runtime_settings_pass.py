# tests/test_runtime_settings_pass.py

from pathlib import Path

import pytest

from mods.discovery import discover_mods
from runtime.bootstrap import EngineSetup, search_path_entry
from runtime.report import RunReport, SkipReason
from runtime.settings_pass import flatten_settings, run_settings_pass, settings_global
from scripting.testing import FakeContextFactory
from semantics.value import Value


def test_flatten_settings() -> None:
    raw = Value(
        {
            "bool-setting": {
                "enable-x": {"type": "bool-setting", "name": "enable-x", "default_value": False},
            },
            "int-setting": {
                "by-key": {"type": "int-setting", "default_value": 3},
                "no-default": {"type": "int-setting", "name": "no-default"},
            },
            "double-setting": {
                "ratio": {"type": "double-setting", "name": "ratio", "default_value": 0.5},
            },
            "string-setting": {
                "mode": {"type": "string-setting", "name": "mode", "default_value": "easy"},
            },
            "recipe": {"ignored": {"name": "ignored", "default_value": 1}},
        }
    )

    assert flatten_settings(raw) == {
        "enable-x": False,
        "by-key": 3,
        "ratio": 0.5,
        "mode": "easy",
    }


def test_flatten_settings_category_collision_last_wins(caplog) -> None:
    raw = Value(
        {
            "string-setting": {"dup": {"name": "dup", "default_value": "text"}},
            "double-setting": {"dup": {"name": "dup", "default_value": 1.5}},
        }
    )
    assert flatten_settings(raw) == {"dup": 1.5}
    assert "dup" in caplog.text


def test_settings_global_shape() -> None:
    assert settings_global({"a": 1}) == {"startup": {"a": {"value": 1}}}


def test_run_settings_pass(mods_dir: Path, write_mod) -> None:
    write_mod(mods_dir, "alpha", settings="-- settings")
    write_mod(mods_dir, "beta")  # no settings.lua
    write_mod(mods_dir, "gamma", settings="-- settings")
    mods = discover_mods(mods_dir)

    seen_paths = {}

    def alpha_settings(ctx) -> None:
        ctx.extend({"type": "int-setting", "name": "alpha-count", "default_value": 4})

    def gamma_settings(ctx) -> None:
        seen_paths["gamma"] = ctx.package_path
        seen_paths["mods"] = dict(ctx.globals["mods"])
        ctx.extend({"type": "bool-setting", "name": "gamma-on", "default_value": True})

    factory = FakeContextFactory(
        files={
            mods_dir / "alpha" / "settings.lua": alpha_settings,
            mods_dir / "gamma" / "settings.lua": gamma_settings,
        }
    )

    snapshot = run_settings_pass(mods, factory, EngineSetup(), ["core", "base", "alpha", "beta", "gamma"])

    assert dict(snapshot) == {"alpha-count": 4, "gamma-on": True}
    with pytest.raises(TypeError):
        snapshot["alpha-count"] = 5  # type: ignore[index]

    # search path grows cumulatively across the pass
    assert search_path_entry(mods_dir / "alpha") in seen_paths["gamma"]
    assert search_path_entry(mods_dir / "gamma") in seen_paths["gamma"]
    assert seen_paths["mods"] == {"core": True, "base": True, "alpha": True, "beta": True, "gamma": True}

    assert len(factory.created) == 1
    assert factory.created[0].executed_files == [
        (mods_dir / "alpha" / "settings.lua").as_posix(),
        (mods_dir / "gamma" / "settings.lua").as_posix(),
    ]


def test_failing_settings_script_is_reported(mods_dir: Path, write_mod) -> None:
    write_mod(mods_dir, "broken", settings="error()")
    write_mod(mods_dir, "fine", settings="-- ok")
    mods = discover_mods(mods_dir)

    def broken(ctx) -> None:
        raise RuntimeError("attempt to index a nil value")

    def fine(ctx) -> None:
        ctx.extend({"type": "string-setting", "name": "fine-mode", "default_value": "a"})

    factory = FakeContextFactory(
        files={
            mods_dir / "broken" / "settings.lua": broken,
            mods_dir / "fine" / "settings.lua": fine,
        }
    )
    report = RunReport()

    snapshot = run_settings_pass(mods, factory, EngineSetup(), [], report=report)

    assert dict(snapshot) == {"fine-mode": "a"}
    failures = report.by_reason(SkipReason.SETTINGS_EXECUTION_FAILED)
    assert [f.subject for f in failures] == ["broken"]
    assert "nil value" in failures[0].detail
