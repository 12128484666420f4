"""Tests for CLI."""

import json
import subprocess
from pathlib import Path


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["python", "-m", "whistler_gtfs.cli", *args],
        capture_output=True,
        text=True,
    )


def test_cli_transform_basic(gtfs_whistler: Path) -> None:
    """Test CLI transform command."""
    result = run_cli("transform", "--input", str(gtfs_whistler))

    assert result.returncode == 0
    assert "Transform successful" in result.stdout
    assert "'trip_variants': 9" in result.stdout


def test_cli_transform_service_ids(gtfs_whistler: Path, tmp_path: Path) -> None:
    """Test CLI reads useful service ids from a file."""
    service_ids = tmp_path / "service_ids.txt"
    service_ids.write_text("WK\n\nSAT\n", encoding="utf-8")

    result = run_cli("transform", "--input", str(gtfs_whistler), "--service-ids", str(service_ids))

    assert result.returncode == 0
    assert "'trips': 11" in result.stdout


def test_cli_transform_mismatch_halts(gtfs_unexpected: Path) -> None:
    """Test CLI exits non-zero at the first mismatch."""
    result = run_cli("transform", "--input", str(gtfs_unexpected))

    assert result.returncode == 1
    assert "Rule mismatch" in result.stderr


def test_cli_transform_mismatch_skip(gtfs_unexpected: Path) -> None:
    """Test CLI lists every mismatch in skip mode."""
    result = run_cli("transform", "--input", str(gtfs_unexpected), "--on-mismatch", "skip")

    assert result.returncode == 1
    assert "2 rule mismatches" in result.stdout
    assert "To Creekside" in result.stdout


def test_cli_transform_invalid_input() -> None:
    """Test CLI with invalid input."""
    result = run_cli("transform", "--input", "/nonexistent/path")

    assert result.returncode == 1
    assert "Error" in result.stdout or "Error" in result.stderr


def test_cli_check_rules() -> None:
    """Test CLI check-rules command."""
    result = run_cli("check-rules")

    assert result.returncode == 0
    assert "Rule table valid" in result.stdout
    assert "24000020" in result.stdout


def test_cli_check_rules_invalid(tmp_path: Path) -> None:
    """Test CLI check-rules on a broken table."""
    rules_path = tmp_path / "rules.json"
    rules_path.write_text("[]", encoding="utf-8")

    result = run_cli("check-rules", "--rules", str(rules_path))

    assert result.returncode == 1
    assert "Invalid rule table" in result.stderr


def test_cli_dump_rules() -> None:
    """Test CLI dump-rules prints the packaged table."""
    result = run_cli("dump-rules")

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["agency_id"] == "1"
    assert data["alpha_route_colors"]["20X"] == "004B8D"


def test_cli_version() -> None:
    """Test CLI version flag."""
    result = run_cli("--version")

    assert result.returncode == 0
    assert "0.1.0" in result.stdout


def test_cli_help() -> None:
    """Test CLI help."""
    result = run_cli("--help")

    assert result.returncode == 0
    assert "transform" in result.stdout
    assert "check-rules" in result.stdout
