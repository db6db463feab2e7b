"""
Mesh Store

Owns the mutable vertex buffers of a mesh and its list of reconstruction
targets. The encryption core only ever reads snapshots from the store and
hands back whole new buffers or finished targets.
"""

from typing import Dict, Optional, Tuple

import numpy as np
import trimesh

from ..geometry import Geometry, compute_vertex_normals, compute_vertex_tangents
from ..geometry.buffers import as_vector_buffer
from ..encryption.errors import MissingGeometryError
from ..encryption.targets import TARGET_PREFIX, ReconstructionTarget, target_name


def _target_index(name):
    """Index encoded in a Decrypt<N> name, or None for any other name"""
    suffix = name[len(TARGET_PREFIX):] if name.startswith(TARGET_PREFIX) else ""
    return int(suffix) if suffix.isdecimal() else None


def _extract_uv(mesh, n_vertices):
    """Per-vertex UVs of a trimesh, or None when the mesh is not textured"""
    visual = getattr(mesh, 'visual', None)
    uv = getattr(visual, 'uv', None)
    if uv is None:
        return None
    uv = np.asarray(uv, dtype=np.float64)
    if uv.shape != (n_vertices, 2):
        return None
    return uv


class MeshStore:
    """Vertex buffers, shading attributes and blend targets of one mesh"""

    def __init__(self, mesh, name: Optional[str] = None):
        """
        Initialize the store from a trimesh object.

        Args:
            mesh: trimesh.Trimesh (or any object with vertices / faces)
            name: Mesh name; defaults to the trimesh metadata name or 'mesh'
        """
        if mesh is None or getattr(mesh, 'vertices', None) is None:
            raise MissingGeometryError("Mesh store needs a mesh with a vertex buffer")

        self._source = mesh
        metadata = getattr(mesh, 'metadata', None) or {}
        self.name = name or metadata.get('name') or 'mesh'

        self._positions = as_vector_buffer(mesh.vertices, "vertices")
        faces = getattr(mesh, 'faces', None)
        self._faces = np.zeros((0, 3), dtype=np.int64) if faces is None else np.array(faces, dtype=np.int64).reshape(-1, 3)
        self._uv = _extract_uv(mesh, len(self._positions))

        if len(self._faces) > 0:
            self._normals = as_vector_buffer(mesh.vertex_normals, "normals")
        else:
            self._normals = np.zeros_like(self._positions)
        self._tangents = None
        self._bounds = None
        self._recalculate_bounds()
        self._recalculate_tangents()

        self._targets = []
        self._next_target_index = 0

    @classmethod
    def from_buffers(cls, vertices, faces, name: str = 'mesh', uv=None) -> "MeshStore":
        """Build a store from raw arrays"""
        mesh = trimesh.Trimesh(vertices=np.asarray(vertices, dtype=np.float64),
                               faces=np.asarray(faces, dtype=np.int64).reshape(-1, 3),
                               process=False)
        if uv is not None:
            mesh.visual = trimesh.visual.TextureVisuals(uv=np.asarray(uv, dtype=np.float64))
        return cls(mesh, name=name)

    # ------------------------------------------------------------------
    # Buffers
    # ------------------------------------------------------------------

    @property
    def vertex_count(self) -> int:
        return len(self._positions)

    @property
    def faces(self) -> np.ndarray:
        return self._faces.copy()

    @property
    def positions(self) -> np.ndarray:
        return self._positions.copy()

    @property
    def normals(self) -> np.ndarray:
        return self._normals.copy()

    @property
    def tangents(self) -> Optional[np.ndarray]:
        return None if self._tangents is None else self._tangents.copy()

    @property
    def bounds(self) -> np.ndarray:
        """(2, 3) array of min and max corner"""
        return self._bounds.copy()

    @property
    def uv(self) -> Optional[np.ndarray]:
        return None if self._uv is None else self._uv.copy()

    def has_geometry(self) -> bool:
        return self.vertex_count > 0

    def snapshot(self) -> Geometry:
        """Copy of the current positions and normals"""
        return Geometry(positions=self._positions, normals=self._normals)

    def replace_positions(self, positions) -> None:
        """
        Replace the vertex positions and recalculate bounds, normals and tangents.

        Args:
            positions: (n, 3) new positions, n equal to the current vertex count
        """
        positions = as_vector_buffer(positions, "positions")
        if len(positions) != self.vertex_count:
            raise ValueError(
                f"Position buffer has {len(positions)} vertices, mesh has {self.vertex_count}"
            )
        self._positions = positions
        self._recalculate_bounds()
        self._normals = compute_vertex_normals(self._positions, self._faces)
        self._recalculate_tangents()

    def _recalculate_bounds(self):
        if self.vertex_count == 0:
            self._bounds = np.zeros((2, 3), dtype=np.float64)
        else:
            self._bounds = np.array([self._positions.min(axis=0), self._positions.max(axis=0)])

    def _recalculate_tangents(self):
        if self._uv is None:
            self._tangents = None
        else:
            self._tangents = compute_vertex_tangents(self._positions, self._faces, self._normals, self._uv)

    # ------------------------------------------------------------------
    # Reconstruction targets
    # ------------------------------------------------------------------

    @property
    def targets(self) -> Tuple[ReconstructionTarget, ...]:
        return tuple(self._targets)

    @property
    def target_count(self) -> int:
        return len(self._targets)

    def next_target_name(self) -> str:
        """Name the next added target will get; indices are never reused"""
        return target_name(self._next_target_index)

    def get_target(self, name: str) -> ReconstructionTarget:
        for target in self._targets:
            if target.name == name:
                return target
        raise KeyError(f"No reconstruction target named {name!r}")

    def add_target(self, target: ReconstructionTarget) -> None:
        """Append a finished target to the mesh"""
        if target.vertex_count != self.vertex_count:
            raise ValueError(
                f"Target {target.name} has {target.vertex_count} vertices, mesh has {self.vertex_count}"
            )
        if any(existing.name == target.name for existing in self._targets):
            raise ValueError(f"Reconstruction target {target.name!r} already exists")
        self._targets.append(target)
        self._next_target_index += 1

        index = _target_index(target.name)
        if index is not None:
            self._next_target_index = max(self._next_target_index, index + 1)

    def remove_target(self, name: str) -> ReconstructionTarget:
        target = self.get_target(name)
        self._targets.remove(target)
        return target

    def apply_weights(self, weights: Dict[str, float]) -> Geometry:
        """
        Evaluate the mesh with targets blended in.

        Args:
            weights: Mapping of target name to weight on the 0-100 scale

        Returns:
            Geometry after blending; the store itself is not modified
        """
        positions = self._positions
        normals = self._normals
        for name, weight in weights.items():
            positions, normals = self.get_target(name).apply(positions, normals, weight)
        return Geometry(positions=positions, normals=normals)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_trimesh(self) -> trimesh.Trimesh:
        """Current positions and normals as a trimesh, keeping the source visuals"""
        mesh = trimesh.Trimesh(vertices=self._positions.copy(),
                               faces=self._faces.copy(),
                               vertex_normals=self._normals.copy(),
                               process=False)
        visual = getattr(self._source, 'visual', None)
        if visual is not None and len(self._faces) > 0:
            mesh.visual = visual.copy()
        mesh.metadata['name'] = self.name
        return mesh
