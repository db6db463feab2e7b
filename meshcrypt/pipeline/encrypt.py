"""
Mesh Encryption Pipeline

Runs one encryption pass per decryption key against a mesh store:

1. snapshot the current geometry
2. displace every vertex by the offset field of the encryption code and
   let the store recalculate bounds, normals and tangents
3. build the reconstruction target for that pass and append it to the store
4. create the clip that drives the target to its key

The passes stack, so the encrypted mesh is restored when every target plays
at its own key, which is what the generated controller does.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from ..geometry import Geometry
from ..encryption import (
    EncryptionConfig,
    MissingGeometryError,
    ReconstructionTarget,
    build_target,
    compute_scale,
    displace_positions
)
from ..animation import (
    AnimatorController,
    DecryptionLayerData,
    build_controller,
    create_decryption_clip
)
from ..animation.clips import DEFAULT_FRAME_RATE
from ..animation.controller import DEFAULT_CONTROLLER_NAME


@dataclass
class EncryptionPass:
    """Geometry before and after one displacement, and the target undoing it"""
    before: Geometry
    after: Geometry
    target: ReconstructionTarget


@dataclass
class EncryptionResult:
    """Everything one encryption run produced"""
    config: EncryptionConfig
    passes: List[EncryptionPass] = field(default_factory=list)
    layers: List[DecryptionLayerData] = field(default_factory=list)
    controller: Optional[AnimatorController] = None

    @property
    def original(self) -> Geometry:
        return self.passes[0].before

    @property
    def encrypted(self) -> Geometry:
        return self.passes[-1].after

    @property
    def targets(self) -> List[ReconstructionTarget]:
        return [p.target for p in self.passes]

    def reconstruct(self) -> Geometry:
        """Encrypted geometry with every target blended in at its key"""
        positions = self.encrypted.positions
        normals = self.encrypted.normals
        for target in self.targets:
            positions, normals = target.apply(positions, normals, target.key)
        return Geometry(positions=positions, normals=normals)

    def max_position_error(self) -> float:
        """Largest per-component position difference after reconstruction"""
        restored = self.reconstruct()
        return float(np.max(np.abs(restored.positions - self.original.positions)))

    def max_normal_error(self) -> float:
        """Largest per-component normal difference after reconstruction"""
        restored = self.reconstruct()
        return float(np.max(np.abs(restored.normals - self.original.normals)))


def run_encryption_pass(store, code: str, magnitude: float, key: float) -> EncryptionPass:
    """
    Displace the mesh once and append the target that undoes it.

    Args:
        store: MeshStore to encrypt
        code: Encryption code
        magnitude: Offset magnitude
        key: Decryption key for the new target

    Returns:
        EncryptionPass

    Raises:
        InvalidKeyError: if key is zero; the store is left untouched
    """
    compute_scale(key)
    name = store.next_target_name()

    before = store.snapshot()
    store.replace_positions(displace_positions(before.positions, code, magnitude))
    after = store.snapshot()

    target = build_target(before, after, key, name)
    store.add_target(target)
    return EncryptionPass(before=before, after=after, target=target)


def encrypt_mesh(store, config: EncryptionConfig,
                 frame_rate: float = DEFAULT_FRAME_RATE,
                 controller_name: str = DEFAULT_CONTROLLER_NAME,
                 quiet: bool = False) -> EncryptionResult:
    """
    Encrypt a mesh and build its decryption controller.

    All keys are validated before the mesh is touched, so a zero key leaves
    the store's buffers and target list unchanged.

    Args:
        store: MeshStore to encrypt in place
        config: Encryption parameters (one pass per key)
        frame_rate: Frame rate of the generated clips
        controller_name: Name of the generated controller
        quiet: Suppress progress output

    Returns:
        EncryptionResult

    Raises:
        MissingGeometryError: if the store has no vertices
        InvalidKeyError: if any key is zero
    """
    if store is None or not store.has_geometry():
        raise MissingGeometryError("Mesh store does not have a valid mesh")

    for key in config.keys:
        compute_scale(key)

    if not quiet:
        print(f"Encrypting {store.name}: {store.vertex_count} vertices, {len(config.keys)} target(s)")

    result = EncryptionResult(config=config)
    for key in tqdm(config.keys, desc="Building decryption targets", unit="target", disable=quiet):
        encryption_pass = run_encryption_pass(store, config.code, config.magnitude, key)
        result.passes.append(encryption_pass)

        name = encryption_pass.target.name
        clip = create_decryption_clip(name, key, frame_rate=frame_rate)
        result.layers.append(DecryptionLayerData(target_name=name, key=float(key), clip=clip))

    result.controller = build_controller(result.layers, name=controller_name)
    return result
