"""
Skinning Conversion

Turns a static mesh into a skinned one so its blend targets can be driven by
an animation controller. Every vertex is bound to a single root bone with
full weight, so the skinned mesh at rest matches the static mesh.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..encryption.errors import MissingGeometryError


@dataclass
class SkinBinding:
    """Single-bone skin for a mesh"""
    bone_indices: np.ndarray
    bone_weights: np.ndarray
    bind_poses: np.ndarray
    bones: tuple = ('root',)

    @property
    def vertex_count(self) -> int:
        return len(self.bone_indices)

    def to_dict(self):
        return {
            'bone_indices': self.bone_indices,
            'bone_weights': self.bone_weights,
            'bind_poses': self.bind_poses,
            'bones': np.array(self.bones)
        }


def convert_to_skinned(store, transform: Optional[np.ndarray] = None, root_bone: str = 'root') -> SkinBinding:
    """
    Bind every vertex of a mesh to one root bone.

    Args:
        store: MeshStore holding the mesh
        transform: 4x4 local-to-world matrix of the object (identity if None)
        root_bone: Name of the root bone

    Returns:
        SkinBinding whose bind pose is the object's world-to-local matrix

    Raises:
        MissingGeometryError: if there is no mesh or it has no vertices
    """
    if store is None or not store.has_geometry():
        raise MissingGeometryError("Cannot convert to a skinned mesh: no valid mesh")

    if transform is None:
        transform = np.eye(4, dtype=np.float64)
    transform = np.asarray(transform, dtype=np.float64)
    if transform.shape != (4, 4):
        raise ValueError(f"Object transform must be 4x4, got {transform.shape}")

    n_vertices = store.vertex_count
    return SkinBinding(
        bone_indices=np.zeros(n_vertices, dtype=np.int64),
        bone_weights=np.ones(n_vertices, dtype=np.float64),
        bind_poses=np.linalg.inv(transform)[None, :, :],
        bones=(root_bone,)
    )


def skin_positions(binding: SkinBinding, positions, bone_matrices) -> np.ndarray:
    """
    Linear blend skinning of positions with the binding's single-influence weights.

    Args:
        binding: SkinBinding for the mesh
        positions: (n, 3) rest positions
        bone_matrices: (b, 4, 4) current local-to-world bone matrices

    Returns:
        (n, 3) skinned world positions
    """
    positions = np.asarray(positions, dtype=np.float64)
    bone_matrices = np.asarray(bone_matrices, dtype=np.float64).reshape(-1, 4, 4)

    skin_matrices = bone_matrices @ binding.bind_poses
    homogeneous = np.hstack([positions, np.ones((len(positions), 1))])
    per_vertex = skin_matrices[binding.bone_indices]
    skinned = np.einsum('nij,nj->ni', per_vertex, homogeneous)[:, :3]
    return skinned * binding.bone_weights[:, None]
