"""Typer application and CLI entry point for jsonapi-vanilla.

The CLI loads a JSON:API document from a file (or ``-`` for stdin), builds
it with :func:`~jsonapi_vanilla.parser.builder.build`, and prints views of
the resulting graph:

* ``summary`` -- data shape, error count and a table of resource types.
* ``find`` -- one resource, flattened, with its links and meta.
* ``list`` -- every resource of a type.
* ``errors`` -- the raw ``errors`` array.
* ``config`` -- show or change stored output defaults.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.  Unhandled exceptions are written to a crash log under
the data directory.
"""

from __future__ import annotations

import json
import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from jsonapi_vanilla import __version__
from jsonapi_vanilla.document import Document
from jsonapi_vanilla.exceptions import (
    ConfigError,
    InvalidUsageError,
    ResourceNotFoundError,
    VanillaError,
)
from jsonapi_vanilla.exit_codes import EXIT_GENERIC_FAILURE
from jsonapi_vanilla.models import GlobalConfig, OutputConfig
from jsonapi_vanilla.output import (
    OutputFormat,
    OutputManager,
    debug,
    error,
    get_output,
    info,
    print_value,
    set_output,
    success,
)
from jsonapi_vanilla.parser.registry import is_stub, links_of, meta_of, to_dict

app = typer.Typer(
    name="jsonapi-vanilla",
    help="Inspect JSON:API documents as plain resource graphs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

config_app = typer.Typer(no_args_is_help=True)
app.add_typer(config_app, name="config", help="Show or change stored defaults.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"jsonapi-vanilla {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Install the global :class:`OutputManager` and stash the effective config in ``ctx.obj``."""
    from jsonapi_vanilla.config import resolve_config

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    try:
        config = resolve_config(cli_format=cli_format)
    except ConfigError as exc:
        set_output(OutputManager(no_color=no_color))
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    set_output(
        OutputManager(
            format=OutputFormat(config.output.format),
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _load(source: str) -> Document:
    """Load and build the document at *source*, exiting with the error's code on failure."""
    from jsonapi_vanilla.parser import build, load_document

    try:
        doc = build(load_document(source))
    except VanillaError as exc:
        _fail(exc)
    debug(f"Built {doc!r}")
    return doc


def _fail(exc: VanillaError) -> NoReturn:
    """Report *exc* on stderr and exit with its code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code) from None


def _config(ctx: typer.Context) -> GlobalConfig:
    if ctx.obj and "config" in ctx.obj:
        return ctx.obj["config"]
    return GlobalConfig()


# ------------------------------------------------------------------ #
# Document commands
# ------------------------------------------------------------------ #


@app.command("summary")
def summary_command(
    source: str = typer.Argument(..., help="Document file path, or '-' for stdin."),
) -> None:
    """Summarise a document: data shape, errors and resource types.

    Example::

        jsonapi-vanilla summary articles.json
    """
    doc = _load(source)
    error_count = len(doc.errors) if doc.errors is not None else 0
    info(f"data: {doc.data_shape.value}, errors: {error_count}")

    rows: list[list[str]] = []
    for type_name in doc.types():
        schema = doc.schema(type_name)
        resources = list(doc.find_all(type_name))
        stubs = sum(1 for r in resources if is_stub(r))
        rows.append([
            str(type_name),
            schema.class_name,
            str(len(resources)),
            str(stubs),
            ", ".join(sorted(schema.fields)),
        ])

    get_output().print_table(
        ["Type", "Class", "Resources", "Stubs", "Fields"],
        rows,
        title=f"Resource types ({len(rows)})",
    )


@app.command("find")
def find_command(
    source: str = typer.Argument(..., help="Document file path, or '-' for stdin."),
    type_name: str = typer.Argument(..., metavar="TYPE", help="Resource type."),
    id_: str = typer.Argument(..., metavar="ID", help="Resource id."),
) -> None:
    """Show one resource with its links and meta.

    Related resources are printed as ``{"type": ..., "id": ...}``
    identifiers.

    Example::

        jsonapi-vanilla find articles.json people 9
    """
    doc = _load(source)
    resource = doc.find(type_name, id_)
    if resource is None:
        _fail(ResourceNotFoundError(f"No '{type_name}' resource with id '{id_}' in {source}"))

    print_value({
        "resource": to_dict(resource),
        "links": links_of(resource),
        "meta": meta_of(resource),
        "stub": is_stub(resource),
    })


@app.command("list")
def list_command(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Document file path, or '-' for stdin."),
    type_name: str = typer.Argument(..., metavar="TYPE", help="Resource type."),
) -> None:
    """List every resource of a type in document order.

    Example::

        jsonapi-vanilla list articles.json comments
    """
    doc = _load(source)
    show_stubs = _config(ctx).output.show_stubs

    rows: list[list[str]] = []
    for resource in doc.find_all(type_name):
        if is_stub(resource) and not show_stubs:
            continue
        fields = {k: v for k, v in to_dict(resource).items() if k not in ("type", "id")}
        rows.append([
            str(resource.id),
            "yes" if is_stub(resource) else "",
            json.dumps(fields, ensure_ascii=False, default=str),
        ])

    if not rows:
        info(f"No '{type_name}' resources in {source}")
    get_output().print_table(["ID", "Stub", "Fields"], rows, title=f"{type_name} ({len(rows)})")


@app.command("errors")
def errors_command(
    source: str = typer.Argument(..., help="Document file path, or '-' for stdin."),
) -> None:
    """Print the document's ``errors`` array exactly as it was decoded."""
    doc = _load(source)
    if doc.errors is None:
        info("Document has no errors member")
        return
    print_value(doc.errors)


# ------------------------------------------------------------------ #
# Config commands
# ------------------------------------------------------------------ #


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration, with ``--json``/``--plain`` and environment overrides applied."""
    print_value(_config(ctx).model_dump(mode="json"))


@config_app.command("set-format")
def config_set_format(
    fmt: str = typer.Argument(..., metavar="FORMAT", help="auto, json, plain or rich."),
) -> None:
    """Store the default output format."""
    from pydantic import ValidationError

    from jsonapi_vanilla.config import load_global_config, save_global_config

    config = load_global_config()
    try:
        config.output = OutputConfig(format=fmt, show_stubs=config.output.show_stubs)
    except ValidationError:
        _fail(InvalidUsageError(f"Unknown output format '{fmt}'. Choose from: auto, json, plain, rich"))
    save_global_config(config)
    success(f"Default output format set to '{fmt}'")


@config_app.command("set-stubs")
def config_set_stubs(
    show: bool = typer.Option(
        True, "--show/--hide", help="Include stub resources in listings."
    ),
) -> None:
    """Choose whether ``list`` includes resources only known from relationship linkage."""
    from jsonapi_vanilla.config import load_global_config, save_global_config

    config = load_global_config()
    config.output.show_stubs = show
    save_global_config(config)
    success(f"Stub resources will be {'shown' if show else 'hidden'} in listings")


# ------------------------------------------------------------------ #
# Entry point
# ------------------------------------------------------------------ #


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback under the data directory and return its path."""
    from jsonapi_vanilla.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``jsonapi-vanilla`` console script.

    :class:`~jsonapi_vanilla.exceptions.VanillaError` exits with the error's
    ``exit_code``; anything else writes a crash log and exits with
    :data:`~jsonapi_vanilla.exit_codes.EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except VanillaError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
