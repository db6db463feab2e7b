import numpy as np
import pytest
import trimesh

from meshcrypt.mesh import MeshStore


@pytest.fixture
def sphere_mesh() -> trimesh.Trimesh:
    return trimesh.creation.icosphere(subdivisions=2, radius=1.0)


@pytest.fixture
def sphere_store(sphere_mesh) -> MeshStore:
    return MeshStore(sphere_mesh, name="sphere")


@pytest.fixture
def quad_store() -> MeshStore:
    vertices = np.asarray(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [1.0, 1.0, 0.0],
            [0.0, 1.0, 0.0],
        ]
    )
    faces = np.asarray([[0, 1, 2], [0, 2, 3]])
    uv = vertices[:, :2].copy()
    return MeshStore.from_buffers(vertices, faces, name="quad", uv=uv)


@pytest.fixture
def empty_store() -> MeshStore:
    return MeshStore.from_buffers(np.zeros((0, 3)), np.zeros((0, 3), dtype=np.int64), name="empty")
