"""
Encryption Settings

Explicit parameter set passed to each encryption pass.
"""

from dataclasses import dataclass, field
from typing import List

from .keys import DEFAULT_KEY, clamp_target_count, resize_keys


@dataclass
class EncryptionConfig:
    """
    Parameters of one encryption pass.

    target_count is clamped to [1, 32] and keys is resized to match it
    (shrink from the tail, grow by repeating the last key).
    """
    code: str = "default"
    magnitude: float = 0.5
    target_count: int = 1
    keys: List[float] = field(default_factory=lambda: [DEFAULT_KEY])

    def __post_init__(self):
        self.code = str(self.code)
        self.magnitude = float(self.magnitude)
        if self.magnitude < 0:
            raise ValueError(f"Offset magnitude must be non-negative, got {self.magnitude}")
        self.target_count = clamp_target_count(self.target_count)
        self.keys = resize_keys(self.keys, self.target_count)

    def with_target_count(self, count: int) -> "EncryptionConfig":
        """Copy of this config resized to `count` targets"""
        return EncryptionConfig(
            code=self.code,
            magnitude=self.magnitude,
            target_count=count,
            keys=list(self.keys)
        )
