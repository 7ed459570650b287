"""imgc CLI.

This is the stable CLI entrypoint (console-script: ``imgc``).

UX policy:
  - Results (OK, entropy, algorithm list) go to stdout.
  - Diagnostics go to stderr, prefixed with ``[imgc]``.
  - Codec choice precedence: CLI flags > --config > defaults (lzw, table 4096).
  - Compressed output has no header: decompress needs the same codec settings.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from imgc.config import load_config_arg
from imgc.core.codec_base import Compressor
from imgc.core.entropy import calculate_entropy
from imgc.core.registry import DEFAULT_ALGORITHM, available_algorithms, create_compressor
from imgc.errors import EXIT_GENERIC, ImgcError
from imgc.io.reader import read_bytes, read_image_bytes
from imgc.io.writer import write_bytes

PREFIX = "[imgc]"


def _pkg_version() -> str:
    try:
        from importlib.metadata import PackageNotFoundError, version

        try:
            return version("imgc")
        except PackageNotFoundError:
            # editable install but script invoked from source, or metadata missing
            return "0+unknown"
    except Exception:
        return "0+unknown"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_codec_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        default=None,
        help="Codec config JSON. Use '@file.json' to load from file, or pass JSON inline.",
    )
    p.add_argument(
        "--algorithm",
        default=None,
        help=f"Codec ({', '.join(available_algorithms())}). Default: config or {DEFAULT_ALGORITHM}",
    )
    p.add_argument("--level", type=int, default=None, help="Compression level (deflate/zstd)")
    p.add_argument(
        "--max-table-size",
        type=int,
        default=None,
        help="LZW dictionary size, 256..65536 (default 4096). Must match at decompress.",
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Report sizes and ratio on stderr"
    )


def _resolve_compressor(ns: argparse.Namespace) -> Compressor:
    cfg = load_config_arg(str(ns.config)) if ns.config is not None else None
    # precedence: CLI flag > config > default
    algorithm = (
        ns.algorithm
        if ns.algorithm is not None
        else (cfg.compression_algorithm if cfg else DEFAULT_ALGORITHM)
    )
    level = ns.level if ns.level is not None else (cfg.compression_level if cfg else None)
    max_table_size = (
        ns.max_table_size
        if ns.max_table_size is not None
        else (cfg.max_table_size if cfg else None)
    )
    return create_compressor(algorithm, level=level, max_table_size=max_table_size)


def _report(verbose: bool, codec: Compressor, action: str, n_in: int, n_out: int) -> None:
    if not verbose:
        return
    ratio = (n_out / n_in) if n_in else 0.0
    print(
        f"{PREFIX} {codec.codec_id} {action}: {n_in} -> {n_out} bytes (ratio {ratio:.3f})",
        file=sys.stderr,
    )


def _cmd_compress(ns: argparse.Namespace) -> int:
    codec = _resolve_compressor(ns)
    data = read_bytes(ns.input) if ns.raw else read_image_bytes(ns.input)
    comp = codec.compress(data)
    write_bytes(ns.output, comp)
    _report(bool(ns.verbose), codec, "compress", len(data), len(comp))
    return 0


def _cmd_decompress(ns: argparse.Namespace) -> int:
    codec = _resolve_compressor(ns)
    comp = read_bytes(ns.input)
    data = codec.decompress(comp)
    write_bytes(ns.output, data)
    _report(bool(ns.verbose), codec, "decompress", len(comp), len(data))
    return 0


def _cmd_config_validate(config_arg: str) -> int:
    # load is the validation
    load_config_arg(config_arg)
    print("OK")
    return 0


def _cmd_entropy(input_path: Path, *, raw: bool) -> int:
    data = read_bytes(input_path) if raw else read_image_bytes(input_path)
    print(f"{calculate_entropy(data):.4f}")
    return 0


def _cmd_algorithms() -> int:
    for name in available_algorithms():
        print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="imgc", description="Lossless image/byte compression (LZW, deflate, zstd)")
    p.add_argument("--version", action="version", version=f"%(prog)s {_pkg_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress an image (RGB samples) or a raw file")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    p_c.add_argument(
        "--raw", action="store_true", help="Read INPUT as raw bytes instead of decoding an image"
    )
    _add_codec_args(p_c)
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress to raw bytes (same codec settings as compress)")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_codec_args(p_d)
    _add_common_args(p_d)

    p_v = sub.add_parser("config-validate", help="Validate a codec config")
    p_v.add_argument("config", help="Config JSON (@file.json or inline JSON)")
    _add_common_args(p_v)

    p_e = sub.add_parser("entropy", help="Shannon entropy (bits/byte) of an image or raw file")
    p_e.add_argument("input", type=Path)
    p_e.add_argument("--raw", action="store_true", help="Read INPUT as raw bytes")
    _add_common_args(p_e)

    p_a = sub.add_parser("algorithms", help="List available algorithms")
    _add_common_args(p_a)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "compress":
            return _cmd_compress(ns)
        if ns.cmd == "decompress":
            return _cmd_decompress(ns)
        if ns.cmd == "config-validate":
            return _cmd_config_validate(str(ns.config))
        if ns.cmd == "entropy":
            return _cmd_entropy(ns.input, raw=bool(ns.raw))
        if ns.cmd == "algorithms":
            return _cmd_algorithms()
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except ImgcError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"{PREFIX} {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"{PREFIX} error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
