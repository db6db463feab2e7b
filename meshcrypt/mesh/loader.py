"""
Mesh Loading

Reads 3D mesh files into trimesh objects for the encryption pipeline.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import trimesh

from ..encryption.errors import MissingGeometryError


# Supported input formats (trimesh can load these)
SUPPORTED_FORMATS = {
    '.obj': 'Wavefront OBJ',
    '.ply': 'Polygon File Format',
    '.stl': 'STereoLithography',
    '.glb': 'glTF Binary',
    '.gltf': 'GL Transmission Format',
    '.off': 'Object File Format',
    '.dae': 'COLLADA'
}

# Formats trimesh can write the encrypted mesh back to
EXPORT_FORMATS = ('obj', 'ply', 'stl', 'glb', 'off')


def get_supported_formats() -> List[str]:
    """Return list of supported mesh file extensions."""
    return list(SUPPORTED_FORMATS.keys())


def is_supported_format(file_path: Union[str, Path]) -> bool:
    """Check if file format is supported for loading."""
    return Path(file_path).suffix.lower() in SUPPORTED_FORMATS


def load_mesh(file_path: Union[str, Path]) -> trimesh.Trimesh:
    """
    Load a mesh file without merging or reordering vertices.

    Args:
        file_path: Path to mesh file

    Returns:
        trimesh.Trimesh

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the format is not supported
        MissingGeometryError: if the file holds no vertices
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Mesh file not found: {file_path}")
    if not is_supported_format(file_path):
        raise ValueError(
            f"Unsupported mesh format: {file_path.suffix}. Supported: {', '.join(get_supported_formats())}"
        )

    mesh = trimesh.load(str(file_path), process=False)

    # Handle scene objects (e.g., from glTF files)
    if isinstance(mesh, trimesh.Scene):
        geometries = list(mesh.geometry.values())
        if not geometries:
            raise MissingGeometryError(f"No geometry found in mesh file: {file_path}")
        mesh = geometries[0]

    if not hasattr(mesh, 'vertices') or len(mesh.vertices) == 0:
        raise MissingGeometryError(f"Mesh has no vertices: {file_path}")

    return mesh


def get_mesh_info(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Get basic information about a mesh file.

    Args:
        file_path: Path to mesh file

    Returns:
        Dictionary with mesh information, or an 'error' entry if loading failed
    """
    try:
        mesh = load_mesh(file_path)
    except (OSError, ValueError) as e:
        return {
            'file_path': str(file_path),
            'format': Path(file_path).suffix.lower(),
            'error': str(e),
            'vertices': 0,
            'faces': 0
        }

    return {
        'file_path': str(file_path),
        'format': Path(file_path).suffix.lower(),
        'vertices': len(mesh.vertices),
        'faces': len(mesh.faces) if hasattr(mesh, 'faces') else 0,
        'bounds': mesh.bounds.tolist() if mesh.bounds is not None else None
    }
