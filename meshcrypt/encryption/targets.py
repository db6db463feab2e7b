"""
Reconstruction Targets

Per-vertex delta sets that undo the displacement when played back at the
weight equal to their decryption key.

For a key k the deltas are scaled by 100 / k, so blending the target in at
weight k (on the 0-100 weight scale) adds exactly original - displaced to
every vertex position.
"""

import math
from dataclasses import dataclass
import numpy as np

from ..geometry import Geometry
from .errors import InvalidKeyError, MissingGeometryError

FULL_WEIGHT = 100.0
TARGET_PREFIX = "Decrypt"


def target_name(index: int) -> str:
    """Name of the target created with the given (never reused) index"""
    return f"{TARGET_PREFIX}{index}"


def compute_scale(key: float) -> float:
    """
    Delta scale that ties a target to its key.

    Raises:
        InvalidKeyError: if the key is zero or not finite
    """
    key = float(key)
    if key == 0.0 or not math.isfinite(key):
        raise InvalidKeyError(f"Decryption key must be a finite non-zero number, got {key}")
    return FULL_WEIGHT / key


@dataclass(frozen=True, eq=False)
class ReconstructionTarget:
    """A named blend target; immutable once built"""
    name: str
    key: float
    position_deltas: np.ndarray
    normal_deltas: np.ndarray
    frame_weight: float = FULL_WEIGHT

    def __post_init__(self):
        position_deltas = np.array(self.position_deltas, dtype=np.float64)
        normal_deltas = np.array(self.normal_deltas, dtype=np.float64)
        if position_deltas.shape != normal_deltas.shape:
            raise ValueError(
                f"Delta shape mismatch: {position_deltas.shape} positions, {normal_deltas.shape} normals"
            )
        position_deltas.flags.writeable = False
        normal_deltas.flags.writeable = False
        object.__setattr__(self, 'position_deltas', position_deltas)
        object.__setattr__(self, 'normal_deltas', normal_deltas)
        object.__setattr__(self, 'key', float(self.key))

    @property
    def vertex_count(self) -> int:
        return len(self.position_deltas)

    def apply(self, positions, normals, weight: float):
        """
        Blend this target into vertex buffers.

        Args:
            positions: (n, 3) current positions
            normals: (n, 3) current normals
            weight: Blend weight on the 0-100 scale

        Returns:
            Tuple of (positions, normals) as new arrays
        """
        positions = np.asarray(positions, dtype=np.float64)
        normals = np.asarray(normals, dtype=np.float64)
        if len(positions) != self.vertex_count or len(normals) != self.vertex_count:
            raise ValueError(
                f"Target {self.name} has {self.vertex_count} vertices, buffers have {len(positions)}"
            )
        factor = float(weight) / self.frame_weight
        return positions + self.position_deltas * factor, normals + self.normal_deltas * factor


def build_target(original: Geometry, displaced: Geometry, key: float, name: str) -> ReconstructionTarget:
    """
    Build the target that restores `original` from `displaced` at weight `key`.

    `displaced.normals` must be the normals recalculated from the displaced
    positions. The normal deltas are therefore only an approximation of the
    true normal difference; reconstructed normals come close to, but do not
    exactly match, the original ones.

    Args:
        original: Geometry before displacement
        displaced: Geometry after displacement and normal recalculation
        key: Decryption key (non-zero)
        name: Target name

    Returns:
        New ReconstructionTarget

    Raises:
        MissingGeometryError: if the original geometry has no vertices
        InvalidKeyError: if the key is zero
    """
    if original is None or original.is_empty():
        raise MissingGeometryError("No base geometry available to build a reconstruction target")
    if displaced is None or displaced.vertex_count != original.vertex_count:
        found = 0 if displaced is None else displaced.vertex_count
        raise ValueError(
            f"Displaced geometry has {found} vertices, expected {original.vertex_count}"
        )

    scale = compute_scale(key)

    position_deltas = (original.positions - displaced.positions) * scale
    normal_deltas = (original.normals - displaced.normals) * scale

    return ReconstructionTarget(
        name=name,
        key=key,
        position_deltas=position_deltas,
        normal_deltas=normal_deltas
    )
