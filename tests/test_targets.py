import numpy as np
import pytest

from meshcrypt.encryption import (
    InvalidKeyError,
    MissingGeometryError,
    ReconstructionTarget,
    build_target,
    compute_scale,
    generate_offsets,
    target_name,
)
from meshcrypt.geometry import Geometry


def _random_pair(n_vertices: int = 64, seed: int = 3):
    rng = np.random.default_rng(seed)
    positions = rng.normal(size=(n_vertices, 3))
    normals = rng.normal(size=(n_vertices, 3))
    normals /= np.linalg.norm(normals, axis=1, keepdims=True)
    original = Geometry(positions=positions, normals=normals)

    displaced_normals = normals + rng.normal(scale=0.05, size=normals.shape)
    displaced = Geometry(
        positions=positions + generate_offsets("pair", 0.5, n_vertices),
        normals=displaced_normals,
    )
    return original, displaced


@pytest.mark.parametrize("key", [0.5, 1.0, 25.0, 57.9, 100.0, -30.0])
def test_target_restores_positions_at_key_weight(key: float) -> None:
    original, displaced = _random_pair()
    target = build_target(original, displaced, key, "Decrypt0")

    positions, normals = target.apply(displaced.positions, displaced.normals, key)

    assert np.allclose(positions, original.positions, atol=1e-4)
    assert np.allclose(normals, original.normals, atol=1e-4)


def test_deltas_are_scaled_by_hundred_over_key() -> None:
    original, displaced = _random_pair()
    target = build_target(original, displaced, 20.0, "Decrypt0")

    assert compute_scale(20.0) == pytest.approx(5.0)
    assert np.allclose(target.position_deltas, (original.positions - displaced.positions) * 5.0)
    assert np.allclose(target.normal_deltas, (original.normals - displaced.normals) * 5.0)
    assert target.frame_weight == 100.0
    assert target.key == 20.0


def test_zero_weight_leaves_geometry_unchanged() -> None:
    original, displaced = _random_pair()
    target = build_target(original, displaced, 40.0, "Decrypt0")

    positions, _ = target.apply(displaced.positions, displaced.normals, 0.0)
    assert np.array_equal(positions, displaced.positions)


def test_zero_key_is_rejected() -> None:
    original, displaced = _random_pair()
    with pytest.raises(InvalidKeyError):
        build_target(original, displaced, 0.0, "Decrypt0")
    with pytest.raises(InvalidKeyError):
        compute_scale(float("nan"))


def test_empty_original_is_reported() -> None:
    empty = Geometry(positions=np.zeros((0, 3)), normals=np.zeros((0, 3)))
    with pytest.raises(MissingGeometryError):
        build_target(empty, empty, 25.0, "Decrypt0")


def test_vertex_count_mismatch_is_rejected() -> None:
    original, _ = _random_pair(n_vertices=10)
    _, displaced = _random_pair(n_vertices=11)
    with pytest.raises(ValueError):
        build_target(original, displaced, 25.0, "Decrypt0")


def test_targets_are_immutable() -> None:
    original, displaced = _random_pair()
    target = build_target(original, displaced, 25.0, "Decrypt0")

    with pytest.raises(ValueError):
        target.position_deltas[0, 0] = 1.0
    with pytest.raises(AttributeError):
        target.key = 50.0


def test_apply_rejects_wrong_buffer_size() -> None:
    target = ReconstructionTarget(name="Decrypt0", key=25.0, position_deltas=np.zeros((4, 3)), normal_deltas=np.zeros((4, 3)))
    with pytest.raises(ValueError):
        target.apply(np.zeros((3, 3)), np.zeros((3, 3)), 25.0)


def test_target_name() -> None:
    assert target_name(0) == "Decrypt0"
    assert target_name(12) == "Decrypt12"


def test_geometry_rejects_misaligned_buffers() -> None:
    with pytest.raises(ValueError):
        Geometry(positions=np.zeros((3, 3)), normals=np.zeros((2, 3)))
