"""Snippet commands and their request shapes.

Why a lookup table:
- Every command name (and alias) resolves once to a small immutable record
  describing the HTTP method and the path below the snippets collection.
- The CLI and the request builder read the same table, so `get` and `read`
  can never drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Command(str, Enum):
    LIST = "list"
    GET = "get"
    DETAILS = "details"
    SEARCH = "search"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class CommandSpec:
    """How one command talks to `{api_root}/projects/{project}/snippets`."""

    command: Command
    method: str
    path: str = ""
    needs_id: bool = False
    needs_body: bool = False
    summary: str = ""

    def path_for(self, snippet_id: int | None = None) -> str:
        """Render the path suffix, validating the snippet id requirement."""

        if self.needs_id:
            if snippet_id is None:
                raise ValueError(f"command {self.command.value!r} requires a snippet id")
            return self.path.format(id=snippet_id)
        return self.path


COMMANDS: dict[Command, CommandSpec] = {
    Command.LIST: CommandSpec(Command.LIST, "GET", summary="List the project's snippets."),
    Command.GET: CommandSpec(
        Command.GET, "GET", "{id}/raw", needs_id=True, summary="Print the raw content of a snippet."
    ),
    Command.DETAILS: CommandSpec(
        Command.DETAILS, "GET", "{id}", needs_id=True, summary="Show a snippet's metadata as JSON."
    ),
    Command.SEARCH: CommandSpec(Command.SEARCH, "GET", summary="Search snippets by title, file name or description."),
    Command.CREATE: CommandSpec(Command.CREATE, "POST", needs_body=True, summary="Create a new snippet."),
    Command.UPDATE: CommandSpec(
        Command.UPDATE, "PUT", "{id}", needs_id=True, needs_body=True, summary="Change an existing snippet."
    ),
    Command.DELETE: CommandSpec(Command.DELETE, "DELETE", "{id}", needs_id=True, summary="Delete a snippet."),
}

ALIASES: dict[str, Command] = {
    "read": Command.GET,
    "add": Command.CREATE,
    "change": Command.UPDATE,
    "remove": Command.DELETE,
}


class UnknownCommandError(ValueError):
    """Raised when a name matches neither a command nor an alias."""


def resolve_command(name: str | None) -> Command:
    """Map a user supplied command name to a `Command`.

    Matching is case-insensitive; an empty or missing name means `list`.
    """

    if name is None or not name.strip():
        return Command.LIST
    key = name.strip().lower()
    if key in ALIASES:
        return ALIASES[key]
    try:
        return Command(key)
    except ValueError:
        raise UnknownCommandError(f"unknown command {name!r}") from None


def spec_for(name: str | Command | None) -> CommandSpec:
    command = name if isinstance(name, Command) else resolve_command(name)
    return COMMANDS[command]


def aliases_of(command: Command) -> list[str]:
    return sorted(alias for alias, target in ALIASES.items() if target is command)
