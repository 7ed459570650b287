"""Typed errors for imgc.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- Codecs raise CompressionError / DecompressionError, never bare ValueError.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_COMPRESSION = 11
EXIT_DECOMPRESSION = 12
EXIT_INPUT = 13
EXIT_OUTPUT = 14
EXIT_MISSING_DEPENDENCY = 15


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid config, unknown algorithm, bad level)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(EXIT_COMPRESSION, "COMPRESSION", "Compression failed (internal codec invariant broken)"),
    ExitCodeInfo(EXIT_DECOMPRESSION, "DECOMPRESSION", "Decompression failed (truncated/corrupt stream, invalid code)"),
    ExitCodeInfo(EXIT_INPUT, "INPUT", "Input file missing, unreadable or not a decodable image"),
    ExitCodeInfo(EXIT_OUTPUT, "OUTPUT", "Output file could not be written"),
    ExitCodeInfo(EXIT_MISSING_DEPENDENCY, "MISSING_DEPENDENCY", "Optional codec dependency not installed (e.g. zstandard)"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE — do not edit manually.\n")
    lines.append("> Source of truth: `src/imgc/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every internal error extends `ImgcError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- LZW streams carry no header: a table-size mismatch between compress and decompress "
        "is not always detected (wrong output or exit 12).\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class ImgcError(Exception):
    """Base error for imgc."""

    exit_code: int = EXIT_GENERIC


class UsageError(ImgcError):
    exit_code = EXIT_USAGE


class ConfigError(UsageError):
    pass


class UnknownAlgorithm(UsageError):
    pass


class InvalidParameter(UsageError):
    pass


class InvalidLevel(InvalidParameter):
    pass


class CodecError(ImgcError):
    """Base for codec failures (the Compressor contract)."""


class CompressionError(CodecError):
    exit_code = EXIT_COMPRESSION


class DecompressionError(CodecError):
    exit_code = EXIT_DECOMPRESSION


class InputError(ImgcError):
    exit_code = EXIT_INPUT


class OutputError(ImgcError):
    exit_code = EXIT_OUTPUT


class MissingDependency(ImgcError):
    exit_code = EXIT_MISSING_DEPENDENCY
