"""
Unit tests for the command-line interface.
"""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner
from instawrapped.cli import cli, render_summary
from instawrapped.extractor.models import CreatorStats, ExtractionResult, RankedEntry
from rich.console import Console


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger onto the runner's streams."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _write(tmp_path: Path, name: str, data: bytes) -> Path:
    path = tmp_path / name
    path.write_bytes(data)
    return path


class TestExtractCommand:
    def test_json_output(self, tmp_path: Path, full_export: bytes):
        archive = _write(tmp_path, "export.zip", full_export)
        runner = CliRunner()
        result = runner.invoke(cli, ["--log-level", "ERROR", "extract", str(archive), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["contentCreated"] == {"posts": 3, "reels": 1, "stories": 2}
        assert payload["likes"]["topCreator"] == "@alice"
        assert [entry["name"] for entry in payload["topChatPartners"]] == ["bob", "alice"]

    def test_table_output(self, tmp_path: Path, full_export: bytes):
        archive = _write(tmp_path, "export.zip", full_export)
        result = CliRunner().invoke(cli, ["--log-level", "ERROR", "extract", str(archive)])

        assert result.exit_code == 0, result.output
        assert "Content created" in result.output
        assert "@alice" in result.output

    def test_invalid_archive_exits_with_2(self, tmp_path: Path):
        archive = _write(tmp_path, "broken.zip", b"not a zip")
        result = CliRunner().invoke(cli, ["--log-level", "ERROR", "extract", str(archive)])

        assert result.exit_code == 2
        assert "could not process" in result.output

    def test_config_file_is_applied(self, tmp_path: Path, full_export: bytes):
        config = tmp_path / "instawrapped.yaml"
        config.write_text("extraction:\n  ranking_size: 1\n")
        archive = _write(tmp_path, "export.zip", full_export)
        result = CliRunner().invoke(
            cli, ["--config", str(config), "--log-level", "ERROR", "extract", str(archive), "--json"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["topChatPartners"] == [{"name": "bob", "count": 3}]


class TestRenderSummary:
    def test_empty_result_renders_placeholders(self):
        console = Console(record=True, width=120)
        console.print(render_summary(ExtractionResult.empty()))
        text = console.export_text()
        assert "Account age" in text
        assert "-" in text

    def test_long_names_are_truncated(self):
        result = ExtractionResult(
            top_chat_partners=(RankedEntry(name="x" * 80, count=12_345),),
            likes=CreatorStats(total=15_000, top_creator="@alice", top_creator_count=3),
        )
        console = Console(record=True, width=200)
        console.print(render_summary(result))
        text = console.export_text()
        assert "x" * 80 not in text
        assert "12.3K" in text
        assert "15K" in text
