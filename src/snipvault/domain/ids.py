"""ID generation and clock helpers.

IDs follow ``{prefix}_{8 random base36 chars}{epoch-ms in base36}``.
Seeded categories created on the very first run use the fixed form
``cat_seed_{n}`` (1-based catalog position).

INVARIANT: IDs are permanent. Once generated, an ID never changes.
"""

from __future__ import annotations

import re
import secrets
import time

CATEGORY_PREFIX = "cat"
ITEM_PREFIX = "p"

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

ID_PATTERN = re.compile(r"^[a-z]+_[0-9a-z_]+$")


def to_base36(value: int) -> str:
    """Render a non-negative integer in base 36.

    Examples:
        >>> to_base36(0)
        '0'
        >>> to_base36(35)
        'z'
        >>> to_base36(36)
        '10'
    """
    if value < 0:
        msg = f"base36 requires a non-negative integer, got {value}"
        raise ValueError(msg)
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def now_ms() -> int:
    """Current time as integer milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def generate_id(prefix: str = "id") -> str:
    """Generate a new unique identifier with *prefix*."""
    random_part = "".join(secrets.choice(_ALPHABET) for _ in range(8))
    return f"{prefix}_{random_part}{to_base36(now_ms())}"


def seed_category_id(position: int) -> str:
    """Fixed id of the first-run seeded category at 1-based *position*."""
    return f"{CATEGORY_PREFIX}_seed_{position}"
