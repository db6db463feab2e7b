"""
Vertex Buffers

Index-aligned position and normal buffers for a single mesh.
"""

from dataclasses import dataclass
import numpy as np


def as_vector_buffer(values, name="buffer") -> np.ndarray:
    """Copy `values` into a float64 (n, 3) array, validating the shape"""
    array = np.array(values, dtype=np.float64)
    if array.size == 0:
        return np.zeros((0, 3), dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"{name} must have shape (n, 3), got {array.shape}")
    return array


@dataclass(frozen=True, eq=False)
class Geometry:
    """
    Snapshot of a mesh's vertex data.

    positions[i] and normals[i] always describe the same vertex i. Both
    arrays are private float64 copies, so a snapshot never aliases the
    buffers of the mesh it was taken from.
    """
    positions: np.ndarray
    normals: np.ndarray

    def __post_init__(self):
        positions = as_vector_buffer(self.positions, "positions")
        normals = as_vector_buffer(self.normals, "normals")
        if len(positions) != len(normals):
            raise ValueError(
                f"Position/normal count mismatch: {len(positions)} positions, {len(normals)} normals"
            )
        positions.flags.writeable = False
        normals.flags.writeable = False
        object.__setattr__(self, 'positions', positions)
        object.__setattr__(self, 'normals', normals)

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    def is_empty(self) -> bool:
        return self.vertex_count == 0
