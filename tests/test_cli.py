from pathlib import Path

import numpy as np
import trimesh
import yaml

from encrypt_mesh import main
from meshcrypt.utils.export import load_targets


def _setup(tmp_path: Path):
    mesh_path = tmp_path / "ball.obj"
    trimesh.creation.icosphere(subdivisions=1).export(str(mesh_path))

    output_dir = tmp_path / "results"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"output": {"directory": str(output_dir)}}))
    return mesh_path, config_path, output_dir


def test_cli_writes_outputs(tmp_path: Path, capsys) -> None:
    mesh_path, config_path, output_dir = _setup(tmp_path)

    exit_code = main([str(mesh_path), "--config", str(config_path), "--code", "cli", "--keys", "25", "75"])

    assert exit_code == 0
    assert (output_dir / "ball_Encrypted.obj").exists()
    assert (output_dir / "ball_Encrypted_skin.npz").exists()
    assert (output_dir / "CombinedDecryptionAnimator.yaml").exists()
    assert len(list(output_dir.glob("MeshDecrypt_Decrypt0_*.json"))) == 1
    assert len(list(output_dir.glob("MeshDecrypt_Decrypt1_*.json"))) == 1

    targets = load_targets(output_dir / "ball_Encrypted_targets.npz")
    assert [t.key for t in targets] == [25.0, 75.0]
    out = capsys.readouterr().out
    assert "Encryption completed successfully" in out
    assert "Vertices:" in out


def test_cli_target_count_overrides_keys(tmp_path: Path) -> None:
    mesh_path, config_path, output_dir = _setup(tmp_path)

    exit_code = main([str(mesh_path), "--config", str(config_path), "--targets", "50", "--keys", "10", "--quiet", "--no-clips"])

    assert exit_code == 0
    targets = load_targets(output_dir / "ball_Encrypted_targets.npz")
    assert len(targets) == 32
    assert np.all([t.key == 10.0 for t in targets])
    assert list(output_dir.glob("MeshDecrypt_*.json")) == []


def test_cli_rejects_zero_key(tmp_path: Path, capsys) -> None:
    mesh_path, config_path, output_dir = _setup(tmp_path)

    exit_code = main([str(mesh_path), "--config", str(config_path), "--keys", "0", "--quiet"])

    assert exit_code == 1
    assert "Error:" in capsys.readouterr().out
    assert not (output_dir / "ball_Encrypted.obj").exists()


def test_cli_reports_missing_mesh(tmp_path: Path, capsys) -> None:
    _, config_path, _ = _setup(tmp_path)

    assert main([str(tmp_path / "nope.obj"), "--config", str(config_path)]) == 1
    assert "Mesh file not found" in capsys.readouterr().out


def test_cli_reports_unsupported_format(tmp_path: Path, capsys) -> None:
    _, config_path, _ = _setup(tmp_path)
    bad = tmp_path / "mesh.xyz"
    bad.write_text("0 0 0\n")

    assert main([str(bad), "--config", str(config_path)]) == 1
    assert "Unsupported mesh format" in capsys.readouterr().out


def test_cli_reports_missing_config(tmp_path: Path, capsys) -> None:
    mesh_path, _, _ = _setup(tmp_path)

    assert main([str(mesh_path), "--config", str(tmp_path / "absent.yaml")]) == 1
    assert "Configuration file not found" in capsys.readouterr().out


def test_cli_reads_mesh_from_config(tmp_path: Path) -> None:
    mesh_path, config_path, output_dir = _setup(tmp_path)
    data = yaml.safe_load(config_path.read_text())
    data["input"] = {"mesh": str(mesh_path)}
    config_path.write_text(yaml.safe_dump(data))

    assert main(["--config", str(config_path), "--quiet"]) == 0
    assert (output_dir / "ball_Encrypted.obj").exists()
