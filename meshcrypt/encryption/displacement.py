"""
Deterministic Displacement

Turns a textual encryption code plus an offset magnitude into a reproducible
per-vertex 3D offset field. The same (code, magnitude, count) always yields
the same offsets, on any platform.
"""

import hashlib
import numpy as np


def seed_from_code(code: str) -> int:
    """
    Derive a portable integer seed from an encryption code.

    The seed is the first 8 bytes of the SHA-256 digest of the UTF-8 encoded
    code, read as an unsigned big-endian integer.

    Args:
        code: Encryption code text

    Returns:
        Unsigned 64-bit seed
    """
    digest = hashlib.sha256(code.encode('utf-8')).digest()
    return int.from_bytes(digest[:8], byteorder='big', signed=False)


class DisplacementGenerator:
    """Seeded offset stream, consumed strictly in vertex order"""

    def __init__(self, code: str, magnitude: float):
        """
        Initialize the offset stream.

        Args:
            code: Encryption code used to seed the stream
            magnitude: Width of the offset interval on each axis
        """
        magnitude = float(magnitude)
        if magnitude < 0:
            raise ValueError(f"Offset magnitude must be non-negative, got {magnitude}")

        self.code = code
        self.magnitude = magnitude
        self.seed = seed_from_code(code)
        self._rng = np.random.Generator(np.random.PCG64(self.seed))

    def _map(self, samples):
        return samples * self.magnitude - self.magnitude * 0.5

    def next_offset(self) -> np.ndarray:
        """Draw the offset for the next vertex (x, y, z in that order)"""
        return self._map(self._rng.random(3))

    def take(self, count: int) -> np.ndarray:
        """
        Draw offsets for the next `count` vertices.

        Equivalent to calling next_offset() `count` times.

        Args:
            count: Number of vertices

        Returns:
            (count, 3) float64 array
        """
        if count < 0:
            raise ValueError(f"Vertex count must be non-negative, got {count}")
        if count == 0:
            return np.zeros((0, 3), dtype=np.float64)
        return self._map(self._rng.random((count, 3)))


def generate_offsets(code: str, magnitude: float, count: int) -> np.ndarray:
    """
    Generate the displacement field for a mesh.

    Each component lies in [-magnitude/2, +magnitude/2).

    Args:
        code: Encryption code
        magnitude: Offset magnitude (>= 0)
        count: Number of vertices

    Returns:
        (count, 3) array of offsets, row i belonging to vertex i
    """
    return DisplacementGenerator(code, magnitude).take(int(count))


def displace_positions(positions, code: str, magnitude: float) -> np.ndarray:
    """Return positions moved by the displacement field for `code`"""
    positions = np.asarray(positions, dtype=np.float64)
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise ValueError(f"Expected (n, 3) positions, got shape {positions.shape}")
    return positions + generate_offsets(code, magnitude, len(positions))
