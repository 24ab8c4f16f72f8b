"""
auto-ui command line.

Commands for transpiling `.at` widgets to Python, rendering them through the
interpreter bridge, converting Node JSON dumps, checking sources and watching
them for hot reload.
"""

import time
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .bridge import BridgeError, InterpreterBridge, StringMessage
from .converter import ConversionError, convert_node
from .core import (
    JSONParseError,
    Policy,
    configure_logging,
    create_container,
    get_settings,
    load_json,
    safe_json_dumps,
)
from .lang import AutoError, is_widget_type, parse
from .node import Node
from .reload import HotReloadSession
from .trans import GenerationError, TypeMap, extract_widget, transpile_file
from .trans.symbols import collect_symbols
from .view import view_to_dict

app = typer.Typer(help="Auto UI toolkit: transpile, render and hot-reload .at widgets")

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> None:
    err_console.print(f"[red]✗[/red] {message}", highlight=False)
    raise typer.Exit(code=1)


def _bridge() -> InterpreterBridge:
    return create_container().get(InterpreterBridge)


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (default: settings)"),
    json_logs: bool | None = typer.Option(None, "--json-logs/--console-logs", help="Log format"),
) -> None:
    """Configure logging for every command."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_logs=settings.json_logs if json_logs is None else json_logs,
    )


@app.command("transpile")
def transpile(
    path: Path = typer.Argument(..., help="Source .at file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file"),
    write: bool = typer.Option(False, "--write", "-w", help="Write a sibling .py file"),
    strict: bool = typer.Option(False, "--strict", help="Fail on widgets without a view"),
) -> None:
    """Generate Python components from widget declarations."""
    target: Path | bool | None = output or (True if write else None)
    try:
        result = transpile_file(
            path,
            target,
            type_map=create_container().get(TypeMap),
            policy=Policy.STRICT if strict else None,
        )
    except GenerationError as e:
        _fail(str(e))
        return

    if target is None:
        typer.echo(result.text, nl=False)
        return

    written = output or path.with_suffix(get_settings().output_suffix)
    console.print(f"[green]✓[/green] Wrote {written} ({', '.join(result.widgets)})", highlight=False)


@app.command("render")
def render(
    path: Path = typer.Argument(..., help="Source .at file"),
    send: list[str] = typer.Option([], "--send", "-s", help="Message to dispatch before rendering"),
    node: bool = typer.Option(False, "--node", help="Print the Node tree instead of the View"),
) -> None:
    """Interpret a file, dispatch messages and print the resulting view as JSON."""
    bridge = _bridge()
    try:
        bridge.load_file(path)
        for message in send:
            bridge.handle_message(StringMessage(message))
        if node:
            data = bridge.get_main_view().to_dict()
        else:
            data = view_to_dict(bridge.render())
    except (BridgeError, ConversionError) as e:
        _fail(str(e))
        return

    typer.echo(safe_json_dumps(data, indent=2))


@app.command("convert")
def convert(
    path: Path = typer.Argument(..., help="Node tree as JSON (Node.to_dict output)"),
    permissive: bool = typer.Option(False, "--permissive", help="Render unknown kinds as empty"),
) -> None:
    """Convert a Node tree dumped by another interpreter into a View."""
    settings = get_settings()
    try:
        # Each Node level is a dict inside its parent's children list
        data = load_json(path.read_bytes(), max_depth=2 * settings.max_view_depth + 2)
        node = Node.from_dict(data)
        view = convert_node(node, policy=Policy.PERMISSIVE if permissive else None)
    except OSError as e:
        _fail(f"Cannot read {path}: {e}")
        return
    except (JSONParseError, ValueError, ConversionError) as e:
        _fail(str(e))
        return

    typer.echo(safe_json_dumps(view_to_dict(view), indent=2))


@app.command("check")
def check(path: Path = typer.Argument(..., help="Source .at file")) -> None:
    """Parse a file and list its widgets."""
    try:
        code = parse(path.read_text(encoding="utf-8"), str(path))
    except OSError as e:
        _fail(f"Cannot read {path}: {e}")
        return
    except AutoError as e:
        _fail(str(e))
        return

    widgets = [decl for decl in code.types() if is_widget_type(decl)]
    if not widgets:
        console.print(f"[yellow]No widgets found in {path}[/yellow]")
        return

    table = Table(title=f"Widgets in {path.name}")
    table.add_column("Widget", style="cyan")
    table.add_column("Fields")
    table.add_column("Messages")
    table.add_column("Root")
    for decl in widgets:
        info = extract_widget(decl, policy=Policy.PERMISSIVE, file=str(path))
        fields = ", ".join(f"{f.name}: {f.type_name}" for f in info.model.fields)
        variants = ", ".join(collect_symbols(info.view.root).sorted_variants())
        table.add_row(info.name, fields or "-", variants or "-", info.view.root.kind)
    console.print(table)


@app.command("watch")
def watch(
    path: Path = typer.Argument(..., help="Source .at file"),
    interval: float | None = typer.Option(None, "--interval", help="Poll interval (seconds)"),
    iterations: int = typer.Option(0, "--iterations", help="Stop after N polls (0: run until Ctrl-C)"),
) -> None:
    """Interpret a file and re-render it whenever it changes."""
    settings = get_settings()
    if interval is not None:
        settings = settings.model_copy(update={"watch_poll_interval": interval})

    session = HotReloadSession(_bridge(), path, settings)
    try:
        session.start()
        _print_view(session.bridge)
    except (BridgeError, ConversionError) as e:
        _fail(str(e))
        return

    console.print(f"[cyan]Watching {path}[/cyan] (Ctrl-C to stop)")
    count = 0
    try:
        while iterations <= 0 or count < iterations:
            count += 1
            if session.poll():
                _print_view(session.bridge)
            elif session.last_error is not None:
                err_console.print(f"[red]Reload failed:[/red] {session.last_error}", highlight=False)
                session.last_error = None
            time.sleep(settings.watch_poll_interval)
    except KeyboardInterrupt:
        pass
    finally:
        session.stop()


def _print_view(bridge: InterpreterBridge) -> None:
    try:
        view = bridge.render()
    except (BridgeError, ConversionError) as e:
        err_console.print(f"[red]Render failed:[/red] {e}", highlight=False)
        return
    typer.echo(safe_json_dumps(view_to_dict(view), indent=2))


if __name__ == "__main__":
    app()
