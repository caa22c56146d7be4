"""Tests for the command-line interface."""

import json

import pytest

from scripts.cli.url_shortener_cli import main
from lib.common.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI points log handlers at the captured stdout; reset them afterwards."""
    yield
    setup_logging(level="INFO")


@pytest.mark.asyncio
class TestCLI:
    """Drive the CLI against a temporary data file."""

    async def test_shorten_get_list(self, tmp_path, capsys):
        data_file = str(tmp_path / "urlRecords.json")

        code = await main(["--data-file", data_file, "shorten", "https://example.com/cli", "--custom-code", "cli"])
        assert code == 0
        created = json.loads(capsys.readouterr().out)
        assert created["shortCode"] == "cli"

        code = await main(["--data-file", data_file, "get", "cli"])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["originalLink"] == "https://example.com/cli"

        code = await main(["--data-file", data_file, "list"])
        assert code == 0
        listing = json.loads(capsys.readouterr().out)
        assert listing["count"] == 1
        assert listing["urls"][0]["expired"] is False

    async def test_errors_exit_non_zero(self, tmp_path, capsys):
        data_file = str(tmp_path / "urlRecords.json")

        assert await main(["--data-file", data_file, "get", "missing"]) == 1
        assert json.loads(capsys.readouterr().err)["error"] == "Short link not found."

        assert await main(["--data-file", data_file, "shorten", "not-a-url"]) == 1
        assert json.loads(capsys.readouterr().err)["error"] == "A valid web address is required."

    async def test_stats(self, tmp_path, capsys):
        data_file = str(tmp_path / "urlRecords.json")
        await main(["--data-file", data_file, "shorten", "https://example.com", "--expiry-minutes", "2"])
        capsys.readouterr()

        assert await main(["--data-file", data_file, "stats"]) == 0
        stats = json.loads(capsys.readouterr().out)["statistics"]
        assert stats["total"] == 1
        assert stats["active"] == 1

    async def test_no_command_prints_help(self, capsys):
        assert await main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()
