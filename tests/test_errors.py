from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from imgc import errors


def test_exit_codes_unique_and_stable() -> None:
    codes = [e.code for e in errors.EXIT_CODES]
    assert len(codes) == len(set(codes))
    assert errors.exit_code_info(0).name == "OK"  # type: ignore[union-attr]
    assert errors.exit_code_info(12).name == "DECOMPRESSION"  # type: ignore[union-attr]
    assert errors.exit_code_info(99) is None


def test_exception_exit_codes() -> None:
    assert errors.ConfigError().exit_code == errors.EXIT_USAGE
    assert errors.InvalidLevel().exit_code == errors.EXIT_USAGE
    assert errors.UnknownAlgorithm().exit_code == errors.EXIT_USAGE
    assert errors.CompressionError().exit_code == errors.EXIT_COMPRESSION
    assert errors.DecompressionError().exit_code == errors.EXIT_DECOMPRESSION
    assert errors.InputError().exit_code == errors.EXIT_INPUT
    assert errors.OutputError().exit_code == errors.EXIT_OUTPUT
    assert errors.MissingDependency().exit_code == errors.EXIT_MISSING_DEPENDENCY
    assert issubclass(errors.DecompressionError, errors.CodecError)


def test_exit_codes_doc_is_up_to_date() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    doc = repo_root / "docs" / "exit_codes.md"
    assert doc.read_text(encoding="utf-8") == errors.render_exit_codes_markdown()


def test_gen_exit_codes_script_check_mode() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    script = repo_root / "scripts" / "gen_exit_codes_md.py"
    r = subprocess.run(
        [sys.executable, str(script), "--check"], text=True, capture_output=True
    )
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "OK" in r.stdout
