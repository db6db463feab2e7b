"""
Result Export

Writes the encrypted mesh, its reconstruction targets, the decryption clips
and the controller to an output directory.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np
import yaml

from ..encryption.targets import ReconstructionTarget
from ..mesh.loader import EXPORT_FORMATS

ENCRYPTED_SUFFIX = "_Encrypted"


def ensure_dir_exists(directory: Union[str, Path]) -> Path:
    """Create `directory` if needed and return it as a Path"""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def save_encrypted_mesh(store, output_dir: Union[str, Path], mesh_format: str = 'obj') -> Path:
    """
    Export the store's current (encrypted) geometry.

    Args:
        store: MeshStore after encryption
        output_dir: Output directory
        mesh_format: One of EXPORT_FORMATS

    Returns:
        Path of the written mesh file
    """
    mesh_format = mesh_format.lower().lstrip('.')
    if mesh_format not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {mesh_format}. Supported: {', '.join(EXPORT_FORMATS)}")

    output_dir = ensure_dir_exists(output_dir)
    output_path = output_dir / f"{store.name}{ENCRYPTED_SUFFIX}.{mesh_format}"
    store.to_trimesh().export(str(output_path))

    if not output_path.exists():
        raise RuntimeError(f"Mesh export failed - file not created: {output_path}")
    return output_path


def save_targets(targets: List[ReconstructionTarget], output_path: Union[str, Path]) -> Path:
    """
    Save reconstruction targets to a compressed .npz archive.

    Args:
        targets: Targets, all with the same vertex count
        output_path: Archive path

    Returns:
        Path of the archive
    """
    output_path = Path(output_path)
    ensure_dir_exists(output_path.parent)

    if targets:
        position_deltas = np.stack([t.position_deltas for t in targets])
        normal_deltas = np.stack([t.normal_deltas for t in targets])
    else:
        position_deltas = np.zeros((0, 0, 3), dtype=np.float64)
        normal_deltas = np.zeros((0, 0, 3), dtype=np.float64)

    np.savez_compressed(
        output_path,
        names=np.array([t.name for t in targets], dtype=str),
        keys=np.array([t.key for t in targets], dtype=np.float64),
        frame_weights=np.array([t.frame_weight for t in targets], dtype=np.float64),
        position_deltas=position_deltas,
        normal_deltas=normal_deltas
    )
    return output_path


def load_targets(archive_path: Union[str, Path]) -> List[ReconstructionTarget]:
    """Read targets written by save_targets"""
    with np.load(archive_path) as data:
        return [
            ReconstructionTarget(
                name=str(data['names'][i]),
                key=float(data['keys'][i]),
                position_deltas=data['position_deltas'][i],
                normal_deltas=data['normal_deltas'][i],
                frame_weight=float(data['frame_weights'][i])
            )
            for i in range(len(data['names']))
        ]


def save_clip(clip, output_dir: Union[str, Path], suffix: Optional[int] = None) -> Path:
    """
    Save a decryption clip as JSON.

    The file is named MeshDecrypt_<target>_<suffix>.json, where suffix is a
    random number in [1000, 9999] unless given.
    """
    output_dir = ensure_dir_exists(output_dir)
    if suffix is None:
        suffix = int(np.random.default_rng().integers(1000, 10000))

    clip_path = output_dir / f"MeshDecrypt_{clip.target_name}_{suffix}.json"
    with open(clip_path, 'w') as f:
        json.dump(clip.to_dict(), f, indent=2)
    return clip_path


def save_controller(controller, output_dir: Union[str, Path]) -> Path:
    """Save the decryption controller as YAML"""
    output_dir = ensure_dir_exists(output_dir)
    controller_path = output_dir / f"{controller.name}.yaml"
    with open(controller_path, 'w') as f:
        yaml.safe_dump(controller.to_dict(), f, default_flow_style=False, sort_keys=False)
    return controller_path


def save_skin_binding(binding, output_path: Union[str, Path]) -> Path:
    """Save a skin binding to a .npz archive"""
    output_path = Path(output_path)
    ensure_dir_exists(output_path.parent)
    np.savez_compressed(output_path, **binding.to_dict())
    return output_path


def export_result(store, result, output_dir: Union[str, Path],
                  mesh_format: str = 'obj', save_clips: bool = True,
                  skin_binding=None) -> Dict[str, Union[Path, List[Path]]]:
    """
    Write all artifacts of an encryption run.

    Args:
        store: Encrypted MeshStore
        result: EncryptionResult of the run
        output_dir: Output directory
        mesh_format: Export format of the encrypted mesh
        save_clips: Whether to write one clip file per target
        skin_binding: Optional SkinBinding to write alongside the mesh

    Returns:
        Dictionary of written paths
    """
    output_dir = ensure_dir_exists(output_dir)
    base_name = f"{store.name}{ENCRYPTED_SUFFIX}"

    paths = {
        'mesh': save_encrypted_mesh(store, output_dir, mesh_format),
        'targets': save_targets(list(store.targets), output_dir / f"{base_name}_targets.npz"),
        'controller': save_controller(result.controller, output_dir),
        'clips': []
    }

    if save_clips:
        paths['clips'] = [save_clip(layer.clip, output_dir) for layer in result.layers]

    if skin_binding is not None:
        paths['skin'] = save_skin_binding(skin_binding, output_dir / f"{base_name}_skin.npz")

    return paths


def directory_size_mb(directory: Union[str, Path]) -> float:
    """Total size of the files directly inside `directory`, in MB"""
    total = 0
    for entry in os.scandir(directory):
        if entry.is_file():
            total += entry.stat().st_size
    return total / (1024 * 1024)
