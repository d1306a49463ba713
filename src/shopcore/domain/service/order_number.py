"""Order number generation.

``ORD-<epoch millis>-<9 base36 chars>``: the time prefix keeps numbers
roughly sortable, the random suffix makes collisions negligible. The
unique constraint on ``orders.order_number`` is what actually guarantees
uniqueness.
"""

from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_uppercase
SUFFIX_LENGTH = 9


def generate_order_number(now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"ORD-{now_ms}-{suffix}"
