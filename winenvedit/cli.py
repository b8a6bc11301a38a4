import logging
from pathlib import Path

import click

from .core.session import EditSession
from .core.types import RegistryValueKind, VariableScope
from .core.validation import (
    is_valid_path,
    looks_like_path,
    validate_data_all_errors,
    validate_name_all_errors,
)
from .errors import VariableNotFoundError, WinEnvEditError
from .output.formatters import format_output
from .profile import SUGGESTED_FILE_NAME, import_from_file
from .store import TomlProfileStore
from .utils.clipboard import parse_single_line
from .utils.config import get_config_path, get_profile_path, load_config
from .utils.paths import contains_path_entry, insert_path_entry, remove_path_entry, split_path_list

logger = logging.getLogger(__name__)


class OrderedGroup(click.Group):
    def __init__(self, *args, commands_order: list[str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.commands_order = commands_order or []

    def list_commands(self, ctx):
        commands = super().list_commands(ctx)
        if self.commands_order:
            ordered = [c for c in self.commands_order if c in commands]
            remaining = [c for c in commands if c not in self.commands_order]
            return ordered + remaining
        return commands


SCOPE_CHOICES = click.Choice([s.value for s in VariableScope], case_sensitive=False)
TYPE_CHOICES = click.Choice(
    [k.value for k in (RegistryValueKind.STRING, RegistryValueKind.EXPAND_STRING)],
    case_sensitive=False,
)


def parse_scope(value: str | None) -> VariableScope | None:
    if value is None:
        return None
    for scope in VariableScope:
        if scope.value.lower() == value.lower():
            return scope
    raise click.BadParameter(f"Unknown scope: {value}")


def parse_type(value: str) -> RegistryValueKind:
    for kind in RegistryValueKind:
        if kind.value.lower() == value.lower():
            return kind
    raise click.BadParameter(f"Unknown type: {value}")


def output_format(ctx) -> str:
    return "json" if ctx.obj["json"] else "plain"


def variable_dicts(variables) -> list[dict]:
    return [v.model_dump(mode="json") for v in variables]


def open_session(ctx) -> EditSession:
    config = ctx.obj["config"]
    store = TomlProfileStore(
        ctx.obj["profile"],
        include_process_environment=config["store"]["include_process_environment"],
    )
    session = EditSession(store, max_history=config["history"]["max_depth"])
    try:
        session.load()
    except WinEnvEditError as e:
        raise click.ClickException(str(e))
    return session


def save_session(ctx, session: EditSession) -> None:
    try:
        saved = session.save()
    except WinEnvEditError as e:
        raise click.ClickException(str(e))
    click.echo(format_output({"saved": variable_dicts(saved)}, output_format(ctx)))


CLI_HELP = """\
winenvedit edits Windows-style environment variables kept in a TOML profile.

Variables live in one of two scopes, User and System, and carry a registry
value kind (String or ExpandString for values containing %VAR% references).
Edits are validated, tracked and only the changed variables are written back.

The profile defaults to $XDG_DATA_HOME/winenvedit/environment.toml; use
--profile or the [store] section of the config file to point elsewhere.

See `winenvedit COMMAND --help` for more documentation and command-specific options.
"""


@click.group(
    cls=OrderedGroup,
    commands_order=[
        "list",
        "get",
        "set",
        "unset",
        "path",
        "copy",
        "paste",
        "import",
        "export",
        "validate",
        "config",
    ],
    help=CLI_HELP,
    context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 120},
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--profile", type=click.Path(dir_okay=False, path_type=Path), help="Profile file to edit")
@click.pass_context
def cli(ctx, json_output, profile):
    config = load_config()

    level = getattr(logging, str(config["logging"]["level"]).upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["config"] = config
    ctx.obj["profile"] = profile or get_profile_path(config)


@cli.command("list")
@click.argument("search", required=False)
@click.option("--scope", "-s", type=SCOPE_CHOICES, help="Only show one scope")
@click.option("--volatile/--no-volatile", default=None, help="Include volatile variables")
@click.pass_context
def list_variables(ctx, search, scope, volatile):
    """List variables, optionally filtered by SEARCH.

    SEARCH matches case-insensitively against names and values.
    """
    session = open_session(ctx)
    if volatile is None:
        volatile = ctx.obj["config"]["display"]["show_volatile"]

    variables = session.filter(search, parse_scope(scope), show_volatile=volatile)
    click.echo(format_output(variable_dicts(variables), output_format(ctx)))


@cli.command("get")
@click.argument("name")
@click.option("--scope", "-s", type=SCOPE_CHOICES, help="Scope to look in (default: any)")
@click.pass_context
def get_variable(ctx, name, scope):
    """Print a single variable."""
    session = open_session(ctx)
    variable = session.find(name, parse_scope(scope))
    if variable is None:
        raise click.ClickException(f"Variable not found: {name}")
    click.echo(format_output(variable.model_dump(mode="json"), output_format(ctx)))


@cli.command("set")
@click.argument("name")
@click.argument("value", required=False)
@click.option("--scope", "-s", type=SCOPE_CHOICES, default="User", show_default=True)
@click.option("--type", "type_", type=TYPE_CHOICES, default="String", show_default=True,
              help="Value kind for new variables; existing variables keep theirs")
@click.pass_context
def set_variable(ctx, name, value, scope, type_):
    """Add a variable, update its value, or restore it.

    Takes NAME VALUE, or a single NAME=value argument.
    """
    if value is None:
        name, value = parse_single_line(name)
        if not name:
            raise click.UsageError("Expected NAME VALUE or NAME=value")

    session = open_session(ctx)
    try:
        result, _ = session.add_or_update(name, value, parse_type(type_), parse_scope(scope))
    except WinEnvEditError as e:
        raise click.ClickException(str(e))
    logger.info(f"set {name}: {result.value}")
    save_session(ctx, session)


@cli.command("unset")
@click.argument("name")
@click.option("--scope", "-s", type=SCOPE_CHOICES, default="User", show_default=True)
@click.pass_context
def unset_variable(ctx, name, scope):
    """Delete a variable."""
    session = open_session(ctx)
    try:
        session.remove(name, parse_scope(scope))
    except WinEnvEditError as e:
        raise click.ClickException(str(e))
    save_session(ctx, session)


@cli.group("path")
@click.pass_context
def path(ctx):
    """Show and edit semicolon-separated list variables such as Path."""
    pass


def list_scope(session: EditSession, name: str, scope: str | None) -> VariableScope:
    if scope is not None:
        return parse_scope(scope)
    for candidate in VariableScope:
        variable = session.find(name, candidate)
        if variable is not None and not variable.is_removed:
            return candidate
    return VariableScope.USER


def edit_path_list(ctx, session: EditSession, name: str, entries: list[str], scope: VariableScope) -> None:
    try:
        session.set_path_entries(name, entries, scope)
    except WinEnvEditError as e:
        raise click.ClickException(str(e))
    save_session(ctx, session)


@path.command("show")
@click.argument("name", default="Path")
@click.option("--scope", "-s", type=SCOPE_CHOICES, help="Scope to look in (default: any)")
@click.pass_context
def path_show(ctx, name, scope):
    """Show the entries of a list variable (default: Path).

    Entries that look like filesystem paths but do not exist are marked.
    """
    session = open_session(ctx)
    variable = session.find(name, parse_scope(scope))
    if variable is None:
        raise click.ClickException(f"Variable not found: {name}")

    entries = [
        {"path": p, "exists": is_valid_path(p) if looks_like_path(p) else True}
        for p in split_path_list(variable.data)
    ]
    data = {"name": variable.name, "scope": variable.scope.value, "paths": entries}
    click.echo(format_output(data, output_format(ctx)))


@path.command("add")
@click.argument("name")
@click.argument("entry")
@click.option("--scope", "-s", type=SCOPE_CHOICES, help="Scope of the variable (default: where it exists, else User)")
@click.option("--position", "-p", type=click.IntRange(min=0), help="Insert before this index instead of appending")
@click.pass_context
def path_add(ctx, name, entry, scope, position):
    """Add ENTRY to list variable NAME, creating the variable if needed."""
    session = open_session(ctx)
    target = list_scope(session, name, scope)
    try:
        current = session.path_entries(name, target)
    except VariableNotFoundError:
        current = []

    if contains_path_entry(current, entry):
        raise click.ClickException(f"{entry} is already in {name}")
    edit_path_list(ctx, session, name, insert_path_entry(current, entry, position), target)


@path.command("remove")
@click.argument("name")
@click.argument("entry")
@click.option("--scope", "-s", type=SCOPE_CHOICES, help="Scope of the variable (default: where it exists)")
@click.pass_context
def path_remove(ctx, name, entry, scope):
    """Remove ENTRY from list variable NAME. Matching ignores case."""
    session = open_session(ctx)
    target = list_scope(session, name, scope)
    try:
        current = session.path_entries(name, target)
    except VariableNotFoundError as e:
        raise click.ClickException(str(e))

    remaining = remove_path_entry(current, entry)
    if len(remaining) == len(current):
        raise click.ClickException(f"{entry} is not in {name}")
    edit_path_list(ctx, session, name, remaining, target)


@path.command("set")
@click.argument("name")
@click.argument("entries", nargs=-1, required=True)
@click.option("--scope", "-s", type=SCOPE_CHOICES, help="Scope of the variable (default: where it exists, else User)")
@click.pass_context
def path_set(ctx, name, entries, scope):
    """Replace all entries of list variable NAME with ENTRIES, in order."""
    session = open_session(ctx)
    edit_path_list(ctx, session, name, list(entries), list_scope(session, name, scope))


@cli.command("copy")
@click.argument("search", required=False)
@click.option("--scope", "-s", type=SCOPE_CHOICES, help="Only copy one scope")
@click.pass_context
def copy_variables(ctx, search, scope):
    """Print variables as NAME=value lines, ready for `winenvedit paste`."""
    session = open_session(ctx)
    click.echo(session.copy_text(parse_scope(scope), search))


@cli.command("paste")
@click.option("--scope", "-s", type=SCOPE_CHOICES, default="User", show_default=True)
@click.pass_context
def paste_variables(ctx, scope):
    """Add or update variables from NAME=value lines on stdin."""
    text = click.get_text_stream("stdin").read()
    session = open_session(ctx)
    session.paste(text, parse_scope(scope))
    save_session(ctx, session)


@cli.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_profile(ctx, file):
    """Make the profile match FILE.

    Variables missing from FILE are deleted, the others are added or updated.
    """
    session = open_session(ctx)
    try:
        session.import_variables(import_from_file(file))
    except WinEnvEditError as e:
        raise click.ClickException(str(e))
    save_session(ctx, session)


@cli.command("export")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path), default=SUGGESTED_FILE_NAME, required=False)
@click.pass_context
def export_profile(ctx, file):
    """Write all persistent variables to FILE (default: winenvedit.toml)."""
    session = open_session(ctx)
    try:
        session.export(file)
    except OSError as e:
        raise click.ClickException(f"Failed to write {file}: {e}")
    click.echo(format_output({"status": f"Exported to {file}"}, output_format(ctx)))


@cli.command("validate")
@click.argument("name")
@click.argument("value", required=False)
@click.pass_context
def validate(ctx, name, value):
    """Check a variable name, and optionally a value, against the naming rules."""
    errors = [f"name {e}" for e in validate_name_all_errors(name)]
    if value is not None:
        errors += [f"value {e}" for e in validate_data_all_errors(value)]

    click.echo(format_output({"name": name, "valid": not errors, "errors": errors}, output_format(ctx)))
    if errors:
        ctx.exit(1)


@cli.command("config")
@click.pass_context
def config(ctx):
    """Print config file location and contents."""
    config_path = get_config_path()
    click.echo(f"Config file: {config_path}")
    click.echo(f"Profile: {ctx.obj['profile']}")
    click.echo()

    if config_path.exists():
        click.echo(config_path.read_text())
    else:
        click.echo("(file does not exist, using defaults)")


if __name__ == "__main__":
    cli()
