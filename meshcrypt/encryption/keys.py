"""
Decryption Keys

Key list sizing and the key -> control parameter encoding.
"""

import math
from typing import List, Sequence

MIN_TARGETS = 1
MAX_TARGETS = 32
DEFAULT_KEY = 25.0


def normalize_key(key: float) -> float:
    """
    Encode a decryption key as the control parameter value exposed with its target.

    Keys of 1 or more are treated as whole percentages and rescaled into
    0-1 (57.9 -> 0.57). Smaller keys are passed through unchanged.

    Args:
        key: Raw decryption key

    Returns:
        Normalized parameter value
    """
    key = float(key)
    if key >= 1.0:
        return math.floor(key) / 100.0
    return key


def clamp_target_count(count: int) -> int:
    """Clamp a requested number of reconstruction targets to [1, 32]"""
    return max(MIN_TARGETS, min(MAX_TARGETS, int(count)))


def resize_keys(keys: Sequence[float], count: int) -> List[float]:
    """
    Resize a key list to `count` entries.

    Shrinking drops keys from the end. Growing appends one slot at a time,
    each a copy of the then-last key, so every new slot repeats the last key
    the caller supplied.

    Args:
        keys: Current decryption keys
        count: Desired number of keys

    Returns:
        New list of keys
    """
    resized = [float(k) for k in keys]
    if count < 0:
        raise ValueError(f"Key count must be non-negative, got {count}")

    while len(resized) < count:
        resized.append(resized[-1] if resized else DEFAULT_KEY)
    while len(resized) > count:
        resized.pop()
    return resized
