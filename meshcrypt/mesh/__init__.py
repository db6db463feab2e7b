"""
Mesh Module

Mesh loading, the vertex buffer store and skinning conversion.
"""

from .loader import load_mesh, get_supported_formats, is_supported_format, get_mesh_info
from .store import MeshStore
from .skinning import SkinBinding, convert_to_skinned, skin_positions

__all__ = [
    'load_mesh',
    'get_supported_formats',
    'is_supported_format',
    'get_mesh_info',
    'MeshStore',
    'SkinBinding',
    'convert_to_skinned',
    'skin_positions'
]
