"""Tests for core.domain.commands."""

from __future__ import annotations

import pytest

from core.domain.commands import (
    ALIASES,
    COMMANDS,
    Command,
    UnknownCommandError,
    aliases_of,
    resolve_command,
    spec_for,
)


class TestResolveCommand:
    """Tests for resolve_command."""

    def test_missing_name_means_list(self) -> None:
        """No command argument resolves to list."""
        assert resolve_command(None) is Command.LIST
        assert resolve_command("") is Command.LIST
        assert resolve_command("   ") is Command.LIST

    @pytest.mark.parametrize("name", ["list", "LIST", "List", " details "])
    def test_case_insensitive(self, name: str) -> None:
        """Command names ignore case and surrounding blanks."""
        assert resolve_command(name).value == name.strip().lower()

    @pytest.mark.parametrize(
        ("alias", "command"),
        [("read", Command.GET), ("add", Command.CREATE), ("change", Command.UPDATE), ("remove", Command.DELETE)],
    )
    def test_aliases(self, alias: str, command: Command) -> None:
        """Aliases resolve to their canonical command, in any case."""
        assert resolve_command(alias) is command
        assert resolve_command(alias.upper()) is command

    def test_unknown_command(self) -> None:
        """Unknown names raise UnknownCommandError."""
        with pytest.raises(UnknownCommandError, match="frobnicate"):
            resolve_command("frobnicate")


class TestCommandTable:
    """Tests for the command lookup table."""

    def test_every_command_is_in_the_table(self) -> None:
        """Each Command is present in COMMANDS."""
        assert set(COMMANDS) == set(Command)

    @pytest.mark.parametrize(
        ("command", "method", "path"),
        [
            (Command.LIST, "GET", ""),
            (Command.GET, "GET", "7/raw"),
            (Command.DETAILS, "GET", "7"),
            (Command.SEARCH, "GET", ""),
            (Command.CREATE, "POST", ""),
            (Command.UPDATE, "PUT", "7"),
            (Command.DELETE, "DELETE", "7"),
        ],
    )
    def test_method_and_path(self, command: Command, method: str, path: str) -> None:
        """Methods and path suffixes match the REST resource."""
        spec = COMMANDS[command]
        assert spec.method == method
        assert spec.path_for(7 if spec.needs_id else None) == path

    def test_alias_specs_are_identical(self) -> None:
        """An alias yields the very same record as its command."""
        for alias, command in ALIASES.items():
            assert spec_for(alias) is spec_for(command.value)

    def test_path_requires_id(self) -> None:
        """Commands addressing one snippet refuse to render without an id."""
        with pytest.raises(ValueError, match="requires a snippet id"):
            COMMANDS[Command.DELETE].path_for(None)

    def test_aliases_of(self) -> None:
        """aliases_of lists the alternative names for help text."""
        assert aliases_of(Command.GET) == ["read"]
        assert aliases_of(Command.LIST) == []
