"""
Pipeline Utility Functions

Summary output for the encryption command line tool.
"""

import os
from datetime import datetime

from .export import directory_size_mb
from ..mesh.loader import get_mesh_info


def print_summary(mesh_file, result, paths, output_dir):
    """Print pipeline completion summary"""

    print("\nEncryption completed successfully")
    print("=" * 50)
    print(f"Mesh: {os.path.basename(str(mesh_file))}")
    print(f"Encrypted mesh: {paths['mesh']}")

    info = get_mesh_info(paths['mesh'])
    if 'error' in info:
        print(f"  Could not read back: {info['error']}")
    else:
        print(f"  Vertices: {info['vertices']}")
        print(f"  Faces: {info['faces']}")

    print(f"Targets: {len(result.targets)}")
    for layer, parameter in zip(result.layers, result.controller.parameters):
        print(f"  {layer.target_name}: key {layer.key:g}, parameter {parameter.name} = {parameter.default:g}")
    print(f"Reconstruction error (positions): {result.max_position_error():.2e}")
    print(f"Reconstruction error (normals): {result.max_normal_error():.2e}")

    if os.path.isdir(output_dir):
        print(f"Output size: {directory_size_mb(output_dir):.2f}MB")
    print(f"Completed: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 50)
