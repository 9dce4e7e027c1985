"""CLI entry point for boardkit.

Invoked as::

    boardkit [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m boardkit.cli.main

Commands
--------
check       Decode a widget file and show its widget tree
peek        Print the widget type of an envelope without decoding it
fmt         Re-encode a widget file in canonical JSON or YAML
variants    List the registered widget types
version     Show version information
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from boardkit.codec.serializer import WidgetSerializer
    from boardkit.model.nodes import Widget

console = Console()
err_console = Console(stderr=True)


def _read_source(path: str) -> str:
    """Read a widget file, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {escape(path)}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(path)}: {escape(str(exc))}")
        sys.exit(1)


def _is_yaml(path: str) -> bool:
    return Path(path).suffix.lower() in (".yaml", ".yml")


def _decode_or_exit(
    serializer: "WidgetSerializer", source: str, path: str
) -> tuple[list["Widget"], bool]:
    """Decode one envelope or an array of envelopes, exiting on failure.

    Returns the widgets and whether the file held a single envelope.
    """
    from boardkit.codec.decoder import load_json
    from boardkit.codec.errors import WidgetCodecError

    try:
        tree: Any = serializer.load_yaml(source) if _is_yaml(path) else load_json(source)
        if isinstance(tree, list):
            return serializer.widgets_from_list(tree), False
        return [serializer.from_dict(tree)], True
    except WidgetCodecError as exc:
        err_console.print(f"[red]{type(exc).__name__}[/red] in {escape(path)}: {escape(str(exc))}")
        sys.exit(1)


def _label(widget: "Widget") -> str:
    definition = widget.definition
    title = getattr(definition, "title", None)
    parts = [f"[bold]{escape(widget.widget_type)}[/bold]"]
    if widget.id is not None:
        parts.append(f"[dim]#{widget.id}[/dim]")
    if title:
        parts.append(escape(repr(title)))
    return " ".join(parts)


def _add_branch(tree: Tree, widget: "Widget") -> None:
    from boardkit.model.nodes import GroupDefinition

    branch = tree.add(_label(widget))
    if isinstance(widget.definition, GroupDefinition):
        for child in widget.definition.widgets:
            _add_branch(branch, child)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="boardkit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="YAML file with codec settings",
)
@click.option("--max-depth", type=int, default=None, help="Maximum group nesting depth")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, max_depth: int | None) -> None:
    """Typed codec for polymorphic dashboard widgets."""
    from boardkit.config import CodecConfig, ConfigError

    try:
        config = CodecConfig.from_yaml(config_path) if config_path else CodecConfig()
        config = config.replace(max_depth=max_depth)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {escape(str(exc))}")
        sys.exit(1)
    ctx.obj = config


def _serializer(ctx: click.Context, indent: int | None = None) -> "WidgetSerializer":
    from boardkit.codec.serializer import WidgetSerializer
    from boardkit.config import ConfigError

    try:
        config = ctx.obj.replace(indent=indent)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {escape(str(exc))}")
        sys.exit(1)
    return WidgetSerializer(config=config)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from boardkit import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]boardkit[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# variants command
# ---------------------------------------------------------------------------


@cli.command(name="variants")
def variants_command() -> None:
    """List the registered widget types."""
    from boardkit.codec.registry import DEFAULT_REGISTRY

    table = Table(title="Widget types")
    table.add_column("Type", style="bold")
    table.add_column("Definition")
    table.add_column("Shape")
    for shape in DEFAULT_REGISTRY:
        table.add_row(shape.name, shape.definition_class.__name__, type(shape).__name__)
    console.print(table)


# ---------------------------------------------------------------------------
# peek command
# ---------------------------------------------------------------------------


@cli.command(name="peek")
@click.argument("file", type=click.Path(exists=False))
def peek_command(file: str) -> None:
    """Print the widget type of an envelope without decoding it.

    FILE is the path to a JSON widget envelope.
    """
    from boardkit.codec.decoder import peek_discriminator
    from boardkit.codec.errors import WidgetCodecError

    source = _read_source(file)
    try:
        console.print(peek_discriminator(source), markup=False)
    except WidgetCodecError as exc:
        err_console.print(f"[red]{type(exc).__name__}[/red] in {escape(file)}: {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("file", type=click.Path(exists=False))
@click.pass_context
def check_command(ctx: click.Context, file: str) -> None:
    """Decode a widget file and show its widget tree.

    FILE holds one envelope or an array of envelopes, as JSON or YAML.
    """
    serializer = _serializer(ctx)
    widgets, _ = _decode_or_exit(serializer, _read_source(file), file)

    tree = Tree(f"[green]OK[/green] {escape(file)}")
    for widget in widgets:
        _add_branch(tree, widget)
    console.print(tree)

    total = sum(1 for w in widgets for _ in w.walk())
    console.print(f"\n[bold]{total}[/bold] widget(s) decoded")


# ---------------------------------------------------------------------------
# fmt command
# ---------------------------------------------------------------------------


@cli.command(name="fmt")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="JSON indentation (defaults to the configured value, else 2)",
)
@click.option("--check", is_flag=True, default=False, help="Check if file is already canonical")
@click.option("--in-place", is_flag=True, default=False, help="Rewrite the file in place")
@click.pass_context
def fmt_command(
    ctx: click.Context,
    file: str,
    output_format: str,
    indent: int | None,
    check: bool,
    in_place: bool,
) -> None:
    """Re-encode a widget file in canonical form.

    FILE holds one envelope or an array of envelopes. Absent fields are
    dropped, present values (including zeros) are kept.
    """
    if indent is None:
        indent = ctx.obj.indent if ctx.obj.indent is not None else 2
    serializer = _serializer(ctx, indent=indent)
    source = _read_source(file)
    widgets, single = _decode_or_exit(serializer, source, file)

    if output_format == "yaml":
        text = serializer.to_yaml(widgets[0]) if single else serializer.widgets_to_yaml(widgets)
        lang = "yaml"
    else:
        text = serializer.to_json(widgets[0]) if single else serializer.widgets_to_json(widgets)
        text += "\n"
        lang = "json"

    if check:
        if text == source:
            console.print(f"[green]OK[/green] already formatted: {escape(file)}")
            sys.exit(0)
        console.print(f"[yellow]NEEDS FORMATTING[/yellow] {escape(file)}")
        sys.exit(1)
    elif in_place:
        Path(file).write_text(text, encoding="utf-8")
        console.print(f"[green]Formatted[/green] {escape(file)}")
    else:
        console.print(Syntax(text, lang, line_numbers=True))


if __name__ == "__main__":
    cli()
