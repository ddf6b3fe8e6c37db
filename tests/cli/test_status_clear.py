"""Tests for ygg-keygen status and ygg-keygen clear."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from ygg_keygen.cli.main import cli
from ygg_keygen.keys import SigningKind

runner = CliRunner()


def _write_cache(path: Path, strengths: list[int]) -> None:
    """Cache file of real signing keys labelled with the given strengths."""
    kind = SigningKind()
    entries = [[kind.encode_joined(kind.generate()), strength] for strength in strengths]
    path.write_text(yaml.safe_dump({"signing": entries}))


class TestStatus:
    def test_empty_cache(self, config_file: Path, cache_path: Path) -> None:
        result = runner.invoke(cli, ["-c", str(config_file), "status"])

        assert result.exit_code == 0, result.output
        assert result.stdout == f"Cache: {cache_path}\n  signing: empty\n"

    def test_summary(self, config_file: Path, cache_path: Path) -> None:
        _write_cache(cache_path, [9, 5, 3])

        result = runner.invoke(cli, ["-c", str(config_file), "status"])

        assert result.exit_code == 0, result.output
        assert "signing: 3/4 keys, strength 3..9" in result.stdout

    def test_json(self, config_file: Path, cache_path: Path) -> None:
        _write_cache(cache_path, [9, 5])

        result = runner.invoke(
            cli, ["-c", str(config_file), "status", "--json", "--kind", "signing", "--kind", "encryption"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "path": str(cache_path),
            "kinds": {
                "signing": {"size": 2, "target_size": 4, "strongest": 9, "weakest": 5},
                "encryption": {"size": 0, "target_size": 4, "strongest": None, "weakest": None},
            },
        }

    def test_does_not_consume(self, config_file: Path, cache_path: Path) -> None:
        _write_cache(cache_path, [7])
        before = cache_path.read_text()

        runner.invoke(cli, ["-c", str(config_file), "status"])

        assert cache_path.read_text() == before


class TestClear:
    def test_nothing_to_clear(self, config_file: Path) -> None:
        result = runner.invoke(cli, ["-c", str(config_file), "clear", "--yes"])

        assert result.exit_code == 0, result.output
        assert "Nothing to clear" in result.stderr

    def test_clear_with_yes(self, config_file: Path, cache_path: Path) -> None:
        _write_cache(cache_path, [7, 2])

        result = runner.invoke(cli, ["-c", str(config_file), "clear", "-y"])

        assert result.exit_code == 0, result.output
        assert cache_path.read_text() == ""
        assert "Cleared" in result.stderr

    def test_generate_after_clear_starts_fresh(self, config_file: Path, cache_path: Path) -> None:
        _write_cache(cache_path, [200])
        runner.invoke(cli, ["-c", str(config_file), "clear", "-y"])

        result = runner.invoke(cli, ["-c", str(config_file), "generate", "--tries", "0"])

        assert json.loads(result.stdout) == {"signing": None}
