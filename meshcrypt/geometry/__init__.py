"""
Geometry Module

Vertex buffers and shading attribute computation shared by the encryption
core and the mesh store.
"""

from .buffers import Geometry
from .shading import compute_vertex_normals, compute_vertex_tangents

__all__ = [
    'Geometry',
    'compute_vertex_normals',
    'compute_vertex_tangents'
]
