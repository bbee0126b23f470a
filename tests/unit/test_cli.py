"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import REPO_REMOTE
from git_source.cli import cli

OWNERS = [
    {
        "full_name": "folder/repo",
        "display_name": "Repo",
        "sources": [
            {
                "id": "repo",
                "remote": REPO_REMOTE,
                "excludes": "release/*",
            }
        ],
    }
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sources_file(tmp_path: Path) -> Path:
    path = tmp_path / "sources.json"
    path.write_text(json.dumps(OWNERS), encoding="utf-8")
    return path


@pytest.mark.unit
class TestMigrateCommand:
    """Tests for `git-source migrate`."""

    def test_prints_traits(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "source.json"
        path.write_text(
            json.dumps(
                {
                    "id": "legacy",
                    "remote": REPO_REMOTE,
                    "remoteName": "upstream",
                    "ignoreOnPushNotifications": True,
                }
            ),
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["migrate", str(path)])

        assert result.exit_code == 0
        assert '"kind": "remote_name"' in result.output
        assert '"kind": "ignore_push_notifications"' in result.output
        assert "Ref specs: +refs/heads/*:refs/remotes/upstream/*" in result.output

    def test_rejects_unknown_trait(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "source.json"
        path.write_text(
            json.dumps({"remote": REPO_REMOTE, "traits": [{"kind": "nope"}]}),
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["migrate", str(path)])

        assert result.exit_code == 1
        assert "Unknown trait kind: nope" in result.output

    def test_rejects_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "source.json"
        path.write_text("{", encoding="utf-8")

        result = runner.invoke(cli, ["migrate", str(path)])

        assert result.exit_code == 1


@pytest.mark.unit
class TestNotifyCommand:
    """Tests for `git-source notify`."""

    def test_without_branches(self, runner: CliRunner, sources_file: Path) -> None:
        result = runner.invoke(
            cli, ["notify", "-s", str(sources_file), "-u", "https://example.com/org/repo"]
        )

        assert result.exit_code == 0
        assert "Triggered: Repo" in result.output
        assert "Scheduled indexing of Repo" in result.output

    def test_with_branches(self, runner: CliRunner, sources_file: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "notify",
                "-s", str(sources_file),
                "-u", REPO_REMOTE,
                "-b", "main",
                "-b", "release/1.0",
                "--sha1", "abc123",
            ],
        )

        assert result.exit_code == 0
        assert "folder/repo [repo] main -> abc123" in result.output
        assert "folder/repo [repo] release/1.0 -> excluded" in result.output

    def test_unknown_revision(self, runner: CliRunner, sources_file: Path) -> None:
        result = runner.invoke(
            cli, ["notify", "-s", str(sources_file), "-u", REPO_REMOTE, "-b", "main"]
        )
        assert "folder/repo [repo] main -> unknown revision" in result.output

    def test_no_consumers(self, runner: CliRunner, sources_file: Path) -> None:
        result = runner.invoke(
            cli, ["notify", "-s", str(sources_file), "-u", "https://example.com/other.git"]
        )
        assert result.exit_code == 0
        assert "No git consumers for URI https://example.com/other.git" in result.output

    def test_invalid_url(self, runner: CliRunner, sources_file: Path) -> None:
        result = runner.invoke(cli, ["notify", "-s", str(sources_file), "-u", "https://"])
        assert result.exit_code == 1
        assert "Error:" in result.output


@pytest.mark.unit
class TestSourcesCommand:
    """Tests for `git-source sources`."""

    def test_lists_sources(self, runner: CliRunner, sources_file: Path) -> None:
        result = runner.invoke(cli, ["sources", "-s", str(sources_file)])

        assert result.exit_code == 0
        assert "Repo" in result.output
        assert f"  - {REPO_REMOTE}" in result.output
        assert "traits:    branch_discovery, wildcard_filter" in result.output

    def test_empty(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["sources", "-s", str(tmp_path / "none.json")])
        assert result.exit_code == 0
        assert "No sources tracked." in result.output
