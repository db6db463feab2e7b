"""
Shading Attributes

Recalculation of per-vertex normals and tangents after vertex positions
change. Normals come from trimesh's face-angle weighted vertex normals.
"""

import warnings
import numpy as np
import trimesh


def compute_vertex_normals(vertices, faces) -> np.ndarray:
    """
    Recalculate unit vertex normals from positions and triangle faces.

    Args:
        vertices: (n, 3) vertex positions
        faces: (m, 3) triangle vertex indices

    Returns:
        (n, 3) float64 normals; vertices not referenced by any face get zeros
    """
    vertices = np.asarray(vertices, dtype=np.float64)
    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)

    if len(vertices) == 0:
        return np.zeros((0, 3), dtype=np.float64)
    if len(faces) == 0:
        warnings.warn("Mesh has no faces, vertex normals cannot be recalculated")
        return np.zeros_like(vertices)

    mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
    return np.array(mesh.vertex_normals, dtype=np.float64)


def compute_vertex_tangents(vertices, faces, normals, uv) -> np.ndarray:
    """
    Recalculate per-vertex tangents from UV layout.

    Face tangent/bitangent directions are accumulated on each corner vertex,
    then the tangent is Gram-Schmidt orthogonalised against the normal.

    Args:
        vertices: (n, 3) vertex positions
        faces: (m, 3) triangle vertex indices
        normals: (n, 3) vertex normals
        uv: (n, 2) texture coordinates

    Returns:
        (n, 4) array, xyz the unit tangent and w the bitangent handedness (+1/-1)
    """
    vertices = np.asarray(vertices, dtype=np.float64)
    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
    normals = np.asarray(normals, dtype=np.float64)
    uv = np.asarray(uv, dtype=np.float64)

    n_vertices = len(vertices)
    if uv.shape != (n_vertices, 2):
        raise ValueError(f"UV array must have shape ({n_vertices}, 2), got {uv.shape}")

    tangents = np.zeros((n_vertices, 4), dtype=np.float64)
    tangents[:, 3] = 1.0
    if n_vertices == 0 or len(faces) == 0:
        return tangents

    p0, p1, p2 = (vertices[faces[:, k]] for k in range(3))
    w0, w1, w2 = (uv[faces[:, k]] for k in range(3))

    e1 = p1 - p0
    e2 = p2 - p0
    d1 = w1 - w0
    d2 = w2 - w0

    det = d1[:, 0] * d2[:, 1] - d2[:, 0] * d1[:, 1]
    r = np.zeros_like(det)
    valid = np.abs(det) > 1e-12
    r[valid] = 1.0 / det[valid]

    sdir = (e1 * d2[:, 1:2] - e2 * d1[:, 1:2]) * r[:, None]
    tdir = (e2 * d1[:, 0:1] - e1 * d2[:, 0:1]) * r[:, None]

    tan1 = np.zeros((n_vertices, 3), dtype=np.float64)
    tan2 = np.zeros((n_vertices, 3), dtype=np.float64)
    for k in range(3):
        np.add.at(tan1, faces[:, k], sdir)
        np.add.at(tan2, faces[:, k], tdir)

    # Gram-Schmidt against the normal
    ortho = tan1 - normals * np.sum(normals * tan1, axis=1, keepdims=True)
    lengths = np.linalg.norm(ortho, axis=1)
    nonzero = lengths > 1e-12
    tangents[nonzero, :3] = ortho[nonzero] / lengths[nonzero, None]

    handedness = np.sum(np.cross(normals, tan1) * tan2, axis=1)
    tangents[:, 3] = np.where(handedness < 0.0, -1.0, 1.0)
    return tangents
