"""Tests for the command-line normalisation script."""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "normalize_image.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("normalize_image", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_normalize_files_writes_jpegs_and_counts_failures(
    script,
    tmp_path: Path,
    make_image,
    capsys: pytest.CaptureFixture[str],
) -> None:
    good = tmp_path / "shirt.png"
    good.write_bytes(make_image(1600, 800))
    bad = tmp_path / "notes.txt"
    bad.write_text("not an image", encoding="utf-8")
    output_dir = tmp_path / "out"

    failures = script.normalize_files([good, bad], output_dir)

    assert failures == 1
    assert (output_dir / "shirt.jpg").read_bytes()[:2] == b"\xff\xd8"
    out = capsys.readouterr().out
    assert "1200x600" in out
    assert "invalid_file_type" in out


def test_missing_file_is_counted_and_batch_continues(
    script,
    tmp_path: Path,
    make_image,
    capsys: pytest.CaptureFixture[str],
) -> None:
    good = tmp_path / "dress.png"
    good.write_bytes(make_image(40, 40))
    output_dir = tmp_path / "out"

    failures = script.normalize_files([tmp_path / "missing.png", tmp_path, good], output_dir)

    assert failures == 2
    assert (output_dir / "dress.jpg").exists()
    assert "missing.png" in capsys.readouterr().out
