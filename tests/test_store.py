import numpy as np
import pytest

from meshcrypt.encryption import ReconstructionTarget
from meshcrypt.geometry import compute_vertex_normals


def _zero_target(name: str, n_vertices: int) -> ReconstructionTarget:
    return ReconstructionTarget(
        name=name,
        key=25.0,
        position_deltas=np.zeros((n_vertices, 3)),
        normal_deltas=np.zeros((n_vertices, 3)),
    )


def test_snapshot_is_a_copy(sphere_store) -> None:
    snapshot = sphere_store.snapshot()
    sphere_store.replace_positions(snapshot.positions * 2.0)

    assert not np.allclose(snapshot.positions, sphere_store.positions)
    assert snapshot.vertex_count == sphere_store.vertex_count


def test_replace_positions_recalculates_normals_and_bounds(sphere_store) -> None:
    rng = np.random.default_rng(0)
    displaced = sphere_store.positions + rng.uniform(-0.2, 0.2, size=(sphere_store.vertex_count, 3))

    sphere_store.replace_positions(displaced)

    expected = compute_vertex_normals(displaced, sphere_store.faces)
    assert np.allclose(sphere_store.normals, expected)
    assert np.allclose(np.linalg.norm(sphere_store.normals, axis=1), 1.0)
    assert np.allclose(sphere_store.bounds[0], displaced.min(axis=0))
    assert np.allclose(sphere_store.bounds[1], displaced.max(axis=0))


def test_replace_positions_rejects_wrong_count(sphere_store) -> None:
    with pytest.raises(ValueError):
        sphere_store.replace_positions(np.zeros((3, 3)))


def test_quad_normals_and_tangents(quad_store) -> None:
    assert np.allclose(quad_store.normals, [[0.0, 0.0, 1.0]] * 4)

    tangents = quad_store.tangents
    assert tangents.shape == (4, 4)
    assert np.allclose(tangents[:, :3], [[1.0, 0.0, 0.0]] * 4)
    assert np.allclose(tangents[:, 3], 1.0)


def test_tangents_follow_position_changes(quad_store) -> None:
    # swap x and y; the u axis now runs along y and the winding flips
    quad_store.replace_positions(quad_store.positions[:, [1, 0, 2]])
    tangents = quad_store.tangents

    assert np.allclose(quad_store.normals, [[0.0, 0.0, -1.0]] * 4)
    assert np.allclose(tangents[:, :3], [[0.0, 1.0, 0.0]] * 4)
    assert np.allclose(tangents[:, 3], 1.0)


def test_untextured_mesh_has_no_tangents(sphere_store) -> None:
    assert sphere_store.uv is None
    assert sphere_store.tangents is None


def test_target_names_are_never_reused(sphere_store) -> None:
    n = sphere_store.vertex_count
    assert sphere_store.next_target_name() == "Decrypt0"

    sphere_store.add_target(_zero_target(sphere_store.next_target_name(), n))
    sphere_store.add_target(_zero_target(sphere_store.next_target_name(), n))
    assert [t.name for t in sphere_store.targets] == ["Decrypt0", "Decrypt1"]

    sphere_store.remove_target("Decrypt1")
    assert sphere_store.target_count == 1
    assert sphere_store.next_target_name() == "Decrypt2"


def test_next_name_moves_past_hand_named_targets(sphere_store) -> None:
    n = sphere_store.vertex_count
    sphere_store.add_target(_zero_target("Decrypt5", n))
    assert sphere_store.next_target_name() == "Decrypt6"

    sphere_store.add_target(_zero_target("Custom", n))
    assert sphere_store.next_target_name() == "Decrypt7"


def test_add_target_validates(sphere_store) -> None:
    n = sphere_store.vertex_count
    sphere_store.add_target(_zero_target("Decrypt0", n))

    with pytest.raises(ValueError):
        sphere_store.add_target(_zero_target("Decrypt0", n))
    with pytest.raises(ValueError):
        sphere_store.add_target(_zero_target("Decrypt9", n + 1))
    with pytest.raises(KeyError):
        sphere_store.get_target("missing")


def test_apply_weights_does_not_modify_store(sphere_store) -> None:
    n = sphere_store.vertex_count
    target = ReconstructionTarget(
        name="Decrypt0",
        key=50.0,
        position_deltas=np.ones((n, 3)),
        normal_deltas=np.zeros((n, 3)),
    )
    sphere_store.add_target(target)
    before = sphere_store.positions

    blended = sphere_store.apply_weights({"Decrypt0": 50.0})

    assert np.allclose(blended.positions, before + 0.5)
    assert np.array_equal(sphere_store.positions, before)


def test_to_trimesh_keeps_topology(sphere_store) -> None:
    mesh = sphere_store.to_trimesh()

    assert len(mesh.vertices) == sphere_store.vertex_count
    assert np.array_equal(mesh.faces, sphere_store.faces)
    assert mesh.metadata["name"] == "sphere"


def test_empty_store(empty_store) -> None:
    assert not empty_store.has_geometry()
    assert empty_store.snapshot().is_empty()
