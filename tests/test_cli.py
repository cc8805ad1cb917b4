"""Tests for the command-line client."""

import json

import pytest

from kvshort.cli import KVShortCLI, build_parser, run


@pytest.fixture
def cli(store):
    """CLI bound to the in-memory store."""
    return KVShortCLI(store=store, key_prefix="test")


def last_json(text: str) -> dict:
    return json.loads(text)


class TestCLI:
    """Test CLI commands."""

    @pytest.mark.asyncio
    async def test_create_and_resolve(self, cli, capsys):
        """Test create then resolve."""
        assert await cli.create("https://example.com", "abc") == 0
        slug = last_json(capsys.readouterr().out)["slug"]

        assert await cli.resolve(slug) == 0
        out = last_json(capsys.readouterr().out)
        assert out["url"] == "https://example.com"

        # resolve does not count as an access
        assert await cli.stats(slug, "abc") == 0
        assert last_json(capsys.readouterr().out)["total_accesses"] == 0

    @pytest.mark.asyncio
    async def test_update_and_delete(self, cli, capsys):
        """Test key rotation and deletion."""
        await cli.create("https://example.com", "abc")
        slug = last_json(capsys.readouterr().out)["slug"]

        assert await cli.update(slug, "abc", "def") == 0
        capsys.readouterr()

        assert await cli.delete(slug, "abc") == 1
        assert "UnauthorizedError" in capsys.readouterr().err

        assert await cli.delete(slug, "def") == 0
        capsys.readouterr()

        assert await cli.resolve(slug) == 1
        assert "RecordNotFoundError" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_invalid_input(self, cli, capsys):
        """Validation errors exit non-zero."""
        assert await cli.create("not-a-url", "abc") == 1
        err = last_json(capsys.readouterr().err)
        assert err["success"] is False
        assert "Invalid URL" in err["error"]

    @pytest.mark.asyncio
    async def test_health(self, cli, capsys):
        """Test health command."""
        assert await cli.health() == 0
        assert last_json(capsys.readouterr().out)["health"]["overall"] is True

    @pytest.mark.asyncio
    async def test_run_dispatch(self, cli, capsys):
        """Parsed arguments reach the matching command and the store is closed."""
        args = build_parser().parse_args(["create", "https://example.com", "--key", "abc"])

        assert await run(args, cli) == 0
        assert last_json(capsys.readouterr().out)["success"] is True
        assert len(cli.store) == 0

    def test_parser_requires_command(self):
        """Test missing subcommand."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
