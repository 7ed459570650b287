from __future__ import annotations

import math
from collections import Counter


def calculate_entropy(data: bytes) -> float:
    """Shannon entropy of `data` in bits per byte (0.0 .. 8.0)."""
    n = len(data)
    if n == 0:
        return 0.0
    h = 0.0
    for count in Counter(data).values():
        p = count / n
        h -= p * math.log2(p)
    return h
