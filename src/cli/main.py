"""gitlab-snippets command line (Typer).

Usage:

    snippets [GLOBAL OPTIONS] [COMMAND] [ARGS]...

Global options must come before the command. Without a command the
project's snippets are listed. Command names are case-insensitive and
accept aliases (`read`, `add`, `change`, `remove`).
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Iterator, Optional

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from typer.core import TyperCommand, TyperGroup

from adapters.http_client import HttpxTransport, build_client, require_httpx
from cli.ui_components import print_error, print_json, print_saved, print_snippets
from core.config import APP_VERSION, load_settings
from core.domain.commands import COMMANDS, Command, UnknownCommandError, aliases_of, resolve_command
from core.domain.log_level import LogLevel
from core.domain.models import Configuration, SnippetChanges, SnippetDraft, Visibility
from core.errors import SnippetsError
from core.log import configure_logging, get_logger
from core.services.resolver import resolve_configuration
from core.services.snippets import SnippetService

PROG_NAME = "snippets"
DEFAULT_FILE_NAME = "snippet.txt"

_COMMAND_CONTEXT = {"help_option_names": ["-h", "--help"]}
HELP_TEXT = "Show this message and exit"

_log = get_logger("cli")


class SnippetsGroup(TyperGroup):
    """Resolves aliases and case, and maps every failure to exit status 1."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        try:
            command = resolve_command(cmd_name)
        except UnknownCommandError:
            return None
        return super().get_command(ctx, command.value)

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise
        except SnippetsError as exc:
            _log.debug("command failed", exc_info=True)
            state = ctx.obj if isinstance(ctx.obj, CliState) else None
            print_error(state.err_console if state else Console(stderr=True), str(exc))
            raise typer.Exit(code=1) from exc


@dataclass(frozen=True)
class CliState:
    config: Configuration
    console: Console
    err_console: Console


app = typer.Typer(
    name=PROG_NAME,
    cls=SnippetsGroup,
    help="Manage the snippets of a GitLab project.",
    add_completion=False,
    rich_markup_mode=None,
    pretty_exceptions_enable=False,
    context_settings={"help_option_names": []},
)


def _help_callback(ctx: typer.Context, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=0)


def _subcommand_help_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    _help_callback(ctx, value)


class SnippetsCommand(TyperCommand):
    """Subcommand whose `-h/--help` also writes usage to stderr."""

    def get_help_option(self, ctx: click.Context) -> Optional[click.Option]:
        names = self.get_help_option_names(ctx)
        if not names or not self.add_help_option:
            return None
        return click.Option(
            names,
            is_flag=True,
            is_eager=True,
            expose_value=False,
            callback=_subcommand_help_callback,
            help=HELP_TEXT,
        )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {APP_VERSION}")
        raise typer.Exit(code=0)


def _command_help(command: Command) -> str:
    summary = COMMANDS[command].summary
    aliases = aliases_of(command)
    if aliases:
        return f"{summary} (alias: {', '.join(aliases)})"
    return summary


@app.callback(invoke_without_command=True)
def app_callback(
    ctx: typer.Context,
    gitlab: Annotated[
        Optional[str],
        typer.Option("--gitlab", "-g", metavar="HOST", help="GitLab host [env: GITLAB_HOST, default: gitlab.com]"),
    ] = None,
    root: Annotated[
        Optional[str],
        typer.Option("--root", "-r", metavar="URL", help="API root URL [env: GITLAB_ROOT, default: https://HOST/api/v4]"),
    ] = None,
    token: Annotated[
        Optional[str],
        typer.Option("--token", "-t", metavar="TOKEN", help="Private token [env: GITLAB_TOKEN]"),
    ] = None,
    project: Annotated[
        Optional[str],
        typer.Option("--project", "-p", metavar="PROJECT", help="Project id or group/project path [env: GITLAB_PROJECT]"),
    ] = None,
    verbose: Annotated[
        str,
        typer.Option("--verbose", "-v", metavar="LEVEL", help="Log level: trace, debug, info, warning or error"),
    ] = LogLevel.default().value,
    non_interactive: Annotated[
        bool,
        typer.Option("--non-interactive", help="Plain tab-separated output, no prompts, no colour"),
    ] = False,
    no_colour: Annotated[
        bool,
        typer.Option("--no-colour", "--no-color", help="Disable coloured output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit"),
    ] = False,
    show_help: Annotated[
        bool,
        typer.Option("--help", "-h", callback=_help_callback, is_eager=True, help=HELP_TEXT),
    ] = False,
) -> None:
    del version, show_help
    require_httpx()

    try:
        level = LogLevel.parse(verbose)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="'--verbose'") from exc

    interactive = not non_interactive
    colour = interactive and not no_colour
    configure_logging(level, colour=colour)

    settings = load_settings(host=gitlab, root=root, token=token, project=project)
    config = resolve_configuration(settings, log_level=level, interactive=interactive, colour=colour)
    _log.debug("api root %s, project %s", config.api_root, config.project_id or "-")

    ctx.obj = CliState(
        config=config,
        console=Console(no_color=not colour, highlight=False),
        err_console=Console(stderr=True, no_color=not colour, highlight=False),
    )
    if ctx.invoked_subcommand is None:
        _list(ctx.obj)


def _state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    if state is None:  # pragma: no cover - the callback always sets it
        raise click.UsageError("internal error: configuration not resolved", ctx)
    return state


@contextmanager
def _service(state: CliState) -> Iterator[SnippetService]:
    with HttpxTransport(build_client(state.config)) as transport:
        yield SnippetService(state.config, transport)


def _read_source(source: Optional[Path]) -> str:
    """Content from SOURCE, or stdin when SOURCE is `-` or omitted."""

    if source is None or str(source) == "-":
        return click.get_text_stream("stdin").read()
    try:
        return source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"cannot read {source}: {exc}", param_hint="SOURCE") from exc


def _stdin_is_tty() -> bool:
    return sys.stdin.isatty()


def _source_name(source: Optional[Path]) -> Optional[str]:
    if source is None or str(source) == "-":
        return None
    return source.name


def _usage_from_validation(exc: ValidationError) -> click.UsageError:
    problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors())
    return click.UsageError(problems)


def _list(state: CliState, *, page: Optional[int] = None, per_page: Optional[int] = None) -> None:
    with _service(state) as service:
        snippets = service.list(page=page, per_page=per_page)
    print_snippets(state.console, snippets, interactive=state.config.interactive)


@app.command("list", help=_command_help(Command.LIST), context_settings=_COMMAND_CONTEXT, cls=SnippetsCommand)
def list_snippets(
    ctx: typer.Context,
    page: Annotated[Optional[int], typer.Option("--page", min=1, help="Page number")] = None,
    per_page: Annotated[Optional[int], typer.Option("--per-page", min=1, max=100, help="Snippets per page")] = None,
) -> None:
    _list(_state(ctx), page=page, per_page=per_page)


@app.command("get", help=_command_help(Command.GET), context_settings=_COMMAND_CONTEXT, cls=SnippetsCommand)
def get_snippet(
    ctx: typer.Context,
    snippet_id: Annotated[int, typer.Argument(metavar="ID", min=1, help="Snippet id")],
) -> None:
    state = _state(ctx)
    with _service(state) as service:
        content = service.raw(snippet_id)
    stdout = click.get_binary_stream("stdout")
    stdout.write(content)
    stdout.flush()


@app.command("details", help=_command_help(Command.DETAILS), context_settings=_COMMAND_CONTEXT, cls=SnippetsCommand)
def snippet_details(
    ctx: typer.Context,
    snippet_id: Annotated[int, typer.Argument(metavar="ID", min=1, help="Snippet id")],
    compact: Annotated[bool, typer.Option("--compact", "-c", help="Print the JSON unformatted")] = False,
) -> None:
    state = _state(ctx)
    with _service(state) as service:
        data = service.details(snippet_id)
    print_json(state.console, data, interactive=state.config.interactive, compact=compact)


@app.command("search", help=_command_help(Command.SEARCH), context_settings=_COMMAND_CONTEXT, cls=SnippetsCommand)
def search_snippets(
    ctx: typer.Context,
    term: Annotated[str, typer.Argument(metavar="TERM", help="Text to look for")],
) -> None:
    if not term.strip():
        raise click.UsageError("search term must not be empty", ctx)
    state = _state(ctx)
    with _service(state) as service:
        snippets = service.search(term)
    print_snippets(state.console, snippets, interactive=state.config.interactive, title=f"Snippets matching {term!r}")


@app.command("create", help=_command_help(Command.CREATE), context_settings=_COMMAND_CONTEXT, cls=SnippetsCommand)
def create_snippet(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(metavar="TITLE", help="Snippet title")],
    source: Annotated[
        Optional[Path],
        typer.Argument(metavar="[SOURCE]", help="File with the content; '-' or omitted reads stdin"),
    ] = None,
    file_name: Annotated[Optional[str], typer.Option("--file-name", "-f", help="File name shown by GitLab")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d", help="Longer description")] = None,
    visibility: Annotated[
        Visibility,
        typer.Option("--visibility", case_sensitive=False, help="Snippet visibility"),
    ] = Visibility.PRIVATE,
) -> None:
    state = _state(ctx)
    content = _read_source(source)
    try:
        draft = SnippetDraft(
            title=title,
            file_name=file_name or _source_name(source) or DEFAULT_FILE_NAME,
            content=content,
            description=description,
            visibility=visibility,
        )
    except ValidationError as exc:
        raise _usage_from_validation(exc) from exc

    with _service(state) as service:
        snippet = service.create(draft)
    print_saved(state.console, snippet, action="Created", interactive=state.config.interactive)


@app.command("update", help=_command_help(Command.UPDATE), context_settings=_COMMAND_CONTEXT, cls=SnippetsCommand)
def update_snippet(
    ctx: typer.Context,
    snippet_id: Annotated[int, typer.Argument(metavar="ID", min=1, help="Snippet id")],
    source: Annotated[
        Optional[Path],
        typer.Argument(metavar="[SOURCE]", help="File with the new content; '-' reads stdin"),
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", help="New title")] = None,
    file_name: Annotated[Optional[str], typer.Option("--file-name", "-f", help="New file name")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d", help="New description")] = None,
    visibility: Annotated[
        Optional[Visibility],
        typer.Option("--visibility", case_sensitive=False, help="New visibility"),
    ] = None,
) -> None:
    state = _state(ctx)
    content = _read_source(source) if source is not None else None
    try:
        changes = SnippetChanges(
            title=title,
            file_name=file_name,
            content=content,
            description=description,
            visibility=visibility,
        )
    except ValidationError as exc:
        raise _usage_from_validation(exc) from exc
    if changes.is_empty():
        raise click.UsageError("nothing to update: give SOURCE or at least one option", ctx)

    with _service(state) as service:
        snippet = service.update(snippet_id, changes)
    print_saved(state.console, snippet, action="Updated", interactive=state.config.interactive)


@app.command("delete", help=_command_help(Command.DELETE), context_settings=_COMMAND_CONTEXT, cls=SnippetsCommand)
def delete_snippet(
    ctx: typer.Context,
    snippet_id: Annotated[int, typer.Argument(metavar="ID", min=1, help="Snippet id")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
) -> None:
    state = _state(ctx)
    if state.config.interactive and not yes and _stdin_is_tty():
        typer.confirm(f"Delete snippet {snippet_id}?", abort=True, err=True)

    with _service(state) as service:
        service.delete(snippet_id)
    if state.config.interactive:
        state.console.print(f"Deleted snippet {snippet_id}")
    else:
        typer.echo(str(snippet_id))


def run() -> None:
    app(prog_name=PROG_NAME)


if __name__ == "__main__":
    run()
