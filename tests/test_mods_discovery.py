# tests/test_mods_discovery.py

from pathlib import Path

from mods.discovery import discover_mods
from runtime.report import RunReport, SkipReason


def test_discover_mods_sorted_by_directory(mods_dir: Path, write_mod) -> None:
    write_mod(mods_dir, "zeta")
    write_mod(mods_dir, "alpha", dirname="alpha_1.0.0")
    write_mod(mods_dir, "mid", dependencies=["alpha"])

    mods = discover_mods(mods_dir)

    assert [m.name for m in mods] == ["alpha", "mid", "zeta"]
    assert mods[0].path == mods_dir / "alpha_1.0.0"
    assert mods[1].dependencies == {"alpha": True}


def test_discover_mods_ignores_dirs_without_data_script(mods_dir: Path, write_mod) -> None:
    write_mod(mods_dir, "graphics-only", data=None)
    write_mod(mods_dir, "real")
    (mods_dir / "readme.txt").write_text("not a mod", encoding="utf-8")

    assert [m.name for m in discover_mods(mods_dir)] == ["real"]


def test_discover_mods_reports_unreadable_manifest(mods_dir: Path, write_mod) -> None:
    write_mod(mods_dir, "good")
    broken = mods_dir / "broken"
    broken.mkdir()
    (broken / "data.lua").write_text("", encoding="utf-8")
    (broken / "info.json").write_text("{oops", encoding="utf-8")

    report = RunReport()
    mods = discover_mods(mods_dir, report)

    assert [m.name for m in mods] == ["good"]
    skipped = report.by_reason(SkipReason.MANIFEST_UNREADABLE)
    assert len(skipped) == 1
    assert skipped[0].subject == "broken"


def test_discover_mods_missing_directory(tmp_path: Path) -> None:
    assert discover_mods(tmp_path / "nope") == []
