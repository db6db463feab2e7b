#!/usr/bin/env python3
"""
Mesh encryption tool.

Displaces every vertex of a mesh by a pseudorandom offset field derived from
an encryption code, and writes blend targets that restore the original shape
when played back at their decryption keys, plus the clips and controller
that play them.

Output layout (under the output directory):
- <mesh>_Encrypted.<format>           encrypted mesh
- <mesh>_Encrypted_targets.npz        reconstruction targets
- <mesh>_Encrypted_skin.npz           single-bone skin binding
- MeshDecrypt_<target>_<n>.json       one clip per target
- CombinedDecryptionAnimator.yaml     controller

Usage:
    python encrypt_mesh.py <mesh.obj>
    python encrypt_mesh.py <mesh.obj> --code secret --magnitude 0.2 --keys 25 60
"""

import os
import sys
import argparse
from pathlib import Path

from meshcrypt.encryption import EncryptionError
from meshcrypt.mesh import MeshStore, load_mesh, get_supported_formats, is_supported_format, convert_to_skinned
from meshcrypt.pipeline import encrypt_mesh
from meshcrypt.utils import ConfigManager, export_result, print_summary
from meshcrypt.utils.config import DEFAULT_CONFIG_PATH


def build_parser():
    parser = argparse.ArgumentParser(
        description='meshcrypt - Mesh geometry encryption with blend shape decryption',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument('mesh_pos', nargs='?',
                        help='Path to mesh file (.obj, .ply, .stl, .glb, .gltf, etc.)')
    parser.add_argument('--mesh', dest='mesh',
                        help='Path to mesh file (alternative to the positional argument)')
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH,
                        help='Path to configuration file (.yaml)')
    parser.add_argument('--code', help='Encryption code (overrides config)')
    parser.add_argument('--magnitude', type=float, help='Offset magnitude (overrides config)')
    parser.add_argument('--targets', type=int,
                        help='Number of blend targets, clamped to [1, 32] (overrides config)')
    parser.add_argument('--keys', type=float, nargs='+',
                        help='Decryption key per target (overrides config)')
    parser.add_argument('--output-dir', dest='output_dir', help='Output directory (overrides config)')
    parser.add_argument('--format', dest='mesh_format', help='Encrypted mesh format (overrides config)')
    parser.add_argument('--no-clips', action='store_true', help='Do not write clip files')
    parser.add_argument('--quiet', action='store_true', help='Suppress progress and summary output')
    return parser


def apply_overrides(config, args):
    """Write command line overrides into the loaded configuration"""
    if args.code is not None:
        config.update_config('encryption.code', args.code)
    if args.magnitude is not None:
        config.update_config('encryption.magnitude', args.magnitude)
    if args.keys:
        config.update_config('encryption.keys', list(args.keys))
        if args.targets is None:
            config.update_config('encryption.target_count', len(args.keys))
    if args.targets is not None:
        config.update_config('encryption.target_count', args.targets)
    if args.output_dir is not None:
        config.update_config('output.directory', args.output_dir)
    if args.mesh_format is not None:
        config.update_config('output.mesh_format', args.mesh_format)
    if args.no_clips:
        config.update_config('output.save_clips', False)


def main(argv=None):
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.config):
        print(f"Error: Configuration file not found: {args.config}")
        return 1

    try:
        config = ConfigManager(args.config)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    apply_overrides(config, args)

    # Mesh path resolution: positional -> optional -> config file
    mesh_file = args.mesh_pos or args.mesh or config.get('input.mesh')
    if not mesh_file:
        print("Error: Mesh not specified and not found in config file")
        return 1

    if not os.path.exists(mesh_file):
        print(f"Error: Mesh file not found: {mesh_file}")
        return 1

    if not is_supported_format(mesh_file):
        print(f"Error: Unsupported mesh format: {Path(mesh_file).suffix.lower()}")
        print(f"Supported formats: {', '.join(get_supported_formats())}")
        return 1

    try:
        encryption_config = config.get_encryption_config()
        animation_config = config.get_animation_config()
        output_config = config.get_output_config()

        store = MeshStore(load_mesh(mesh_file), name=Path(mesh_file).stem)

        skin_binding = convert_to_skinned(store) if output_config['save_skin'] else None

        result = encrypt_mesh(
            store,
            encryption_config,
            frame_rate=animation_config['frame_rate'],
            controller_name=animation_config['controller_name'],
            quiet=args.quiet
        )

        output_dir = Path(output_config['directory'])
        paths = export_result(
            store,
            result,
            output_dir,
            mesh_format=output_config['mesh_format'],
            save_clips=output_config['save_clips'],
            skin_binding=skin_binding
        )
    except (EncryptionError, ValueError, OSError, RuntimeError) as e:
        print(f"Error: {e}")
        return 1

    if not args.quiet:
        print_summary(mesh_file, result, paths, output_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
