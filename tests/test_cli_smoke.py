from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from PIL import Image

pytestmark = pytest.mark.p0

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def _run_cli(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Run imgc CLI through a python -c wrapper.

    This avoids assuming the console-script entrypoint is installed.
    """
    cmd = [
        sys.executable,
        "-c",
        "from imgc.cli import main; raise SystemExit(main())",
        *args,
    ]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p)
    return subprocess.run(
        cmd,
        cwd=str(cwd) if cwd else None,
        env=env,
        text=True,
        capture_output=True,
    )


def _make_image(path: Path) -> bytes:
    im = Image.new("RGB", (16, 8))
    for x in range(16):
        for y in range(8):
            im.putpixel((x, y), ((x // 4) * 50, 0, 200))
    im.save(path, format="PNG")
    return im.tobytes()


def test_cli_image_roundtrip_lzw_default(tmp_path: Path) -> None:
    inp = tmp_path / "sample.png"
    out = tmp_path / "sample.lzw"
    back = tmp_path / "sample.rgb"
    rgb = _make_image(inp)

    r = _run_cli("compress", str(inp), str(out), "-v")
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "[imgc] lzw compress" in r.stderr
    assert len(out.read_bytes()) % 2 == 0
    assert len(out.read_bytes()) < len(rgb)

    r = _run_cli("decompress", str(out), str(back))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert back.read_bytes() == rgb


@pytest.mark.parametrize("algorithm", ["deflate", "lzw"])
def test_cli_raw_roundtrip(tmp_path: Path, algorithm: str) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.bin"
    back = tmp_path / "back.txt"
    data = "HELLO 123\nRIGA ARTICOLO: vite M3 qty=10 prezzo=1.20\n" * 20
    inp.write_text(data, encoding="utf-8")

    r = _run_cli("compress", "--raw", str(inp), str(out), "--algorithm", algorithm)
    assert r.returncode == 0, (r.stdout, r.stderr)

    r = _run_cli("decompress", str(out), str(back), "--algorithm", algorithm)
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert back.read_text(encoding="utf-8") == data


def test_cli_config_and_flag_precedence(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    out_cfg = tmp_path / "cfg.bin"
    out_flag = tmp_path / "flag.bin"
    inp.write_bytes(b"abcabcabcabd" * 200)

    cfg = tmp_path / "c.json"
    cfg.write_text(
        json.dumps({"compression_algorithm": "lzw", "max_table_size": 256}), encoding="utf-8"
    )

    r = _run_cli("compress", "--raw", str(inp), str(out_cfg), "--config", "@" + str(cfg))
    assert r.returncode == 0, (r.stdout, r.stderr)
    # frozen literal table: one code per input byte
    assert len(out_cfg.read_bytes()) == 2 * len(inp.read_bytes())

    r = _run_cli(
        "compress", "--raw", str(inp), str(out_flag),
        "--config", "@" + str(cfg), "--max-table-size", "4096",
    )
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert len(out_flag.read_bytes()) < len(out_cfg.read_bytes())


def test_cli_config_validate() -> None:
    r = _run_cli("config-validate", '{"compression_algorithm":"deflate","compression_level":9}')
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "OK" in r.stdout

    r = _run_cli("config-validate", "{}")
    assert r.returncode == 2
    assert "[imgc]" in r.stderr


def test_cli_unknown_algorithm_exit_2(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    inp.write_bytes(b"x")
    r = _run_cli("compress", "--raw", str(inp), str(tmp_path / "o"), "--algorithm", "rar")
    assert r.returncode == 2
    assert "[imgc]" in r.stderr


def test_cli_corrupt_lzw_exit_12(tmp_path: Path) -> None:
    comp = tmp_path / "odd.lzw"
    comp.write_bytes(b"\x00\x41\x00")
    back = tmp_path / "back.bin"
    r = _run_cli("decompress", str(comp), str(back))
    assert r.returncode == 12
    assert "[imgc]" in r.stderr
    assert not back.exists()


def test_cli_missing_input_exit_13(tmp_path: Path) -> None:
    r = _run_cli("compress", str(tmp_path / "missing.png"), str(tmp_path / "o"))
    assert r.returncode == 13
    assert "[imgc]" in r.stderr


def test_cli_entropy_and_algorithms(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    inp.write_bytes(b"AB" * 50)
    r = _run_cli("entropy", "--raw", str(inp))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert r.stdout.strip() == "1.0000"

    r = _run_cli("algorithms")
    assert r.returncode == 0
    assert r.stdout.split() == ["deflate", "lzw", "zstd", "zstd_tight"]


def test_cli_version() -> None:
    r = _run_cli("--version")
    assert r.returncode == 0
    assert r.stdout.startswith("imgc ")
