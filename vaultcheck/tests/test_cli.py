"""
Tests for the vaultcheck CLI (exit codes and output).
"""

import dataclasses
import json
import logging

import pytest
from typer.testing import CliRunner

from vaultcheck.core.canonical import canonical_snapshot_bytes
from vaultcheck.core.models import FileEntry
from vaultcheck_cli.main import app
from vaultcheck.tests.helpers import (
    public_key_b64,
    put_chunk,
    sample_files,
    signed_record,
    write_record,
)

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    """The CLI reconfigures the root logger; undo it after each test."""
    for key in ("VAULTCHECK_OBJECTS_DIR", "VAULTCHECK_PUBKEY", "VAULTCHECK_SHOW_MISSING", "VAULTCHECK_WORKERS"):
        monkeypatch.delenv(key, raising=False)
    # Keep stderr quiet so --json stdout parses on every click version
    monkeypatch.setenv("VAULTCHECK_LOG_LEVEL", "CRITICAL")
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_verify_valid_snapshot(tmp_path):
    _, record = signed_record(files=sample_files())
    path = write_record(record, str(tmp_path))
    objects = tmp_path / "objects"
    for h in ("aa11bb22", "cc33dd44", "ee55ff66"):
        put_chunk(str(objects), h, sharded=True)

    result = runner.invoke(app, ["snapshot", "verify", path, "--objects", str(objects)])

    assert result.exit_code == 0, result.output
    assert "Snapshot ID: snap-1" in result.stdout
    assert "Parent: snap-0" in result.stdout
    assert "Files: 2" in result.stdout
    assert "Total declared byte size: 5120" in result.stdout
    assert "valid" in result.stdout
    assert "Unique chunks referenced: 3" in result.stdout
    assert "All chunks are present locally." in result.stdout


def test_verify_embedded_key_warns(tmp_path):
    _, record = signed_record(files=[], parent=None)
    path = write_record(record, str(tmp_path))

    result = runner.invoke(app, ["snapshot", "verify", path, "--objects", str(tmp_path)])

    assert result.exit_code == 0
    assert "Parent: <none>" in result.stdout
    assert "embedded" in result.stdout
    assert "--pubkey" in result.stdout


def test_verify_pinned_key(tmp_path):
    private_key, record = signed_record(files=[])
    path = write_record(record, str(tmp_path))

    result = runner.invoke(
        app,
        ["snapshot", "verify", path, "--objects", str(tmp_path), "--pubkey", public_key_b64(private_key), "--json"],
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["signature"]["trust"] == "pinned"


def test_verify_invalid_signature_exit_1(tmp_path):
    _, record = signed_record(files=sample_files())
    files = (dataclasses.replace(record.files[0], size=1),) + record.files[1:]
    path = write_record(dataclasses.replace(record, files=files), str(tmp_path))

    result = runner.invoke(app, ["snapshot", "verify", path, "--objects", str(tmp_path)])

    assert result.exit_code == 1
    assert "INVALID" in result.stdout
    assert "signature verification failed" in result.stdout


def test_verify_missing_chunks_truncated(tmp_path):
    hashes = tuple("%08x" % i for i in range(25))
    _, record = signed_record(
        files=[FileEntry(path="big.bin", mode=0o644, mod_time="t", size=25, chunk_hashes=hashes)]
    )
    path = write_record(record, str(tmp_path))

    result = runner.invoke(
        app,
        ["snapshot", "verify", path, "--objects", str(tmp_path / "objects"), "--show-missing", "20"],
    )

    assert result.exit_code == 0
    assert "Missing chunks: 25 (showing up to 20)" in result.stdout
    assert "... and 5 more" in result.stdout
    shown = [h for h in hashes if "  " + h in result.stdout]
    assert len(shown) == 20


def test_verify_long_missing_hash_on_one_line(tmp_path):
    """SHA-512 sized hashes must not wrap, so they can be copied or grepped."""
    long_hash = "ab" * 64
    _, record = signed_record(
        files=[FileEntry(path="big.bin", mode=0o644, mod_time="t", size=1, chunk_hashes=(long_hash,))]
    )
    path = write_record(record, str(tmp_path))

    result = runner.invoke(
        app, ["snapshot", "verify", path, "--objects", str(tmp_path / "objects")]
    )

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert "  " + long_hash in lines
    assert any("embedded signer_pub" in line and "pin a known signer" in line for line in lines)


def test_verify_missing_chunks_strict_exit_3(tmp_path):
    _, record = signed_record(files=sample_files())
    path = write_record(record, str(tmp_path))

    result = runner.invoke(
        app, ["snapshot", "verify", path, "--objects", str(tmp_path), "--strict", "--json"]
    )

    assert result.exit_code == 3
    data = json.loads(result.stdout)
    assert data["chunks"]["missing"] == ["aa11bb22", "cc33dd44", "ee55ff66"]
    assert data["chunks"]["missing_hidden"] == 0


def test_verify_objects_dir_from_env(tmp_path, monkeypatch):
    _, record = signed_record(files=sample_files())
    path = write_record(record, str(tmp_path))
    objects = tmp_path / "store"
    for h in ("aa11bb22", "cc33dd44", "ee55ff66"):
        put_chunk(str(objects), h)
    monkeypatch.setenv("VAULTCHECK_OBJECTS_DIR", str(objects))

    result = runner.invoke(app, ["snapshot", "verify", path, "--strict"])

    assert result.exit_code == 0
    assert "All chunks are present locally." in result.stdout


def test_verify_bad_key_exit_2(tmp_path):
    _, record = signed_record(files=[])
    path = write_record(dataclasses.replace(record, signer_pub="@@@"), str(tmp_path))

    result = runner.invoke(app, ["snapshot", "verify", path, "--objects", str(tmp_path), "--json"])

    assert result.exit_code == 2
    assert "base64" in json.loads(result.stdout)["error"]


def test_verify_bad_signature_exit_2(tmp_path):
    _, record = signed_record(files=[])
    path = write_record(dataclasses.replace(record, signature="AAAA"), str(tmp_path))

    result = runner.invoke(app, ["snapshot", "verify", path, "--objects", str(tmp_path)])

    assert result.exit_code == 2
    assert "Error" in result.stdout


def test_verify_unparseable_snapshot_exit_2(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["snapshot", "verify", str(path), "--json"])

    assert result.exit_code == 2
    assert "parse" in json.loads(result.stdout)["error"]


def test_canonical_command_writes_exact_bytes(tmp_path):
    _, record = signed_record(
        files=[FileEntry(path="a<b>c&d", mode=0o600, mod_time="t", size=1, chunk_hashes=("ab12",))]
    )
    path = write_record(record, str(tmp_path))

    result = runner.invoke(app, ["snapshot", "canonical", path])

    assert result.exit_code == 0
    assert result.stdout_bytes == canonical_snapshot_bytes(record)


def test_inspect_json(tmp_path):
    _, record = signed_record(files=sample_files())
    path = write_record(record, str(tmp_path))

    result = runner.invoke(app, ["snapshot", "inspect", path, "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["count"] == 2
    assert data["total_size"] == 5120
    assert data["unique_chunks"] == 3
    assert [f["path"] for f in data["files"]] == ["docs/readme.txt", "bin/tool"]


def test_inspect_table(tmp_path):
    _, record = signed_record(files=sample_files())
    path = write_record(record, str(tmp_path))

    result = runner.invoke(app, ["snapshot", "inspect", path])

    assert result.exit_code == 0
    assert "Total files:" in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "vaultcheck" in result.stdout
