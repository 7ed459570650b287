from __future__ import annotations

import pytest

from imgc.core.entropy import calculate_entropy


def test_entropy_empty() -> None:
    assert calculate_entropy(b"") == 0.0


def test_entropy_single_symbol() -> None:
    assert calculate_entropy(b"A" * 1000) == 0.0


def test_entropy_two_symbols() -> None:
    assert calculate_entropy(b"AB" * 10) == pytest.approx(1.0)


def test_entropy_uniform_bytes() -> None:
    assert calculate_entropy(bytes(range(256)) * 4) == pytest.approx(8.0)
