"""Add, preview and render server blocks."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.rule import Rule
from rich.syntax import Syntax
from rich.table import Table

from nsm_common import DEFAULT_INDEX, DEFAULT_LISTEN, ServerConfig, ServerType
from nsm.audit import audit
from nsm.errors import NsmError
from nsm.services import block_renderer, config_loader, nginx, nginx_conf
from nsm.services.http_section import MatchStrategy, preview_server_block

console = Console()

TYPE_HELP = "Server type: 'static' (file server) or 'proxy' (reverse proxy)"


def _fail(exc: NsmError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(exc.exit_code)


def _strategy(legacy_match: bool) -> MatchStrategy:
    return MatchStrategy.FIRST_CLOSE if legacy_match else MatchStrategy.BALANCED


def prompt_server_config(server_type: ServerType) -> ServerConfig:
    """Ask for the server fields on the terminal."""
    console.print("[bold]Interactive Configuration Mode[/bold]")
    console.print(Rule())

    data: dict[str, str] = {
        "server_name": typer.prompt("Server name (e.g., example.com)"),
        "listen": typer.prompt("Listen port", default=DEFAULT_LISTEN),
    }
    if server_type is ServerType.STATIC:
        data["root"] = typer.prompt("Document root (e.g., /var/www/html)")
        data["index"] = typer.prompt("Index file", default=DEFAULT_INDEX)
    else:
        target = typer.prompt("Proxy target (e.g., 8084 or http://127.0.0.1:8084)")
        if target.startswith(("http://", "https://")):
            data["proxy_pass"] = target
        else:
            data["proxy_port"] = target
    console.print()
    return config_loader.build_server_config(data)


def _resolve_server(
    server_type: ServerType, config: Optional[Path], interactive: bool
) -> ServerConfig:
    if interactive:
        return prompt_server_config(server_type)
    if config is None:
        raise typer.BadParameter("--config is required unless --interactive is given", param_hint="--config")
    return config_loader.load_server_config(config)


def _resolve_nginx(nginx_path: Optional[Path], auto_detect: bool) -> Path:
    if nginx_path is not None:
        return nginx_path
    if not auto_detect:
        raise typer.BadParameter("--nginx is required when auto-detection is disabled", param_hint="--nginx")
    console.print("Auto-detecting nginx configuration...")
    path = nginx.detect_config()
    console.print(f"[green]Auto-detected nginx config:[/green] {path}")
    return path


def show_summary(server: ServerConfig, server_type: ServerType) -> None:
    table = Table(title="Configuration Preview", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Server Name", server.server_name)
    table.add_row("Listen Port", server.listen)
    table.add_row("Server Type", server_type.value)
    if server_type is ServerType.STATIC:
        table.add_row("Document Root", server.root)
        table.add_row("Index File", server.index)
    elif server.proxy_pass:
        table.add_row("Proxy Target", server.proxy_pass)
    else:
        table.add_row("Proxy Port", server.proxy_port)
    console.print(table)


def show_preview(document: str, block: str, strategy: MatchStrategy) -> None:
    preview = preview_server_block(document, block, strategy=strategy)
    console.print(Rule("Nginx Configuration Preview"))
    console.print(Syntax(preview, "nginx", theme="monokai"))
    console.print(Rule())


def add(
    server_type: str = typer.Option("static", "--type", "-t", help=TYPE_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Server configuration file (.json/.yaml/.yml)"),
    nginx_path: Optional[Path] = typer.Option(None, "--nginx", "-n", help="nginx.conf to modify (auto-detected if omitted)"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Prompt for the server fields"),
    preview: bool = typer.Option(True, help="Show a preview and ask before writing"),
    backup: bool = typer.Option(True, help="Back up nginx.conf before modifying it"),
    auto_detect: bool = typer.Option(True, help="Auto-detect nginx.conf when --nginx is omitted"),
    legacy_match: bool = typer.Option(False, "--legacy-match", help="End the http section at the first closing brace"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
) -> None:
    """Add a server block to the http section of an existing nginx.conf."""
    strategy = _strategy(legacy_match)
    try:
        kind = block_renderer.parse_server_type(server_type)
        path = _resolve_nginx(nginx_path, auto_detect)
        server = _resolve_server(kind, config, interactive)

        with audit("server.add", target=str(path), server_type=kind.value,
                   server_name=server.server_name, backup=backup) as event:
            console.print("[bold][1/4][/bold] Rendering server block")
            block = block_renderer.render_server_block(server, kind)
            document = nginx_conf.read_document(path)

            if preview:
                console.print("[bold][2/4][/bold] Previewing changes")
                show_summary(server, kind)
                show_preview(document, block, strategy)
                if not yes and not typer.confirm("Do you want to proceed with these changes?", default=False):
                    event.result = "cancelled"
                    console.print("Operation cancelled.")
                    return
            else:
                console.print("[bold][2/4][/bold] Skipping preview (--no-preview)")

            if backup:
                console.print("[bold][3/4][/bold] Backing up and writing nginx.conf")
            else:
                console.print("[bold][3/4][/bold] Writing nginx.conf (--no-backup)")
            backup_file = nginx_conf.add_server_to_nginx(
                server, path, kind, backup=backup, strategy=strategy, document=document
            )
            if backup_file is not None:
                event.params["backup_file"] = str(backup_file)
                console.print(f"  Backup created: {backup_file}")

            console.print("[bold][4/4][/bold] Done")
    except NsmError as exc:
        raise _fail(exc) from exc

    console.print(f"\n[green bold]Server block added successfully to:[/green bold] {path}")
    console.print(f"  Server type: {kind.value}")
    console.print(f"  Server name: {server.server_name}")


def preview_cmd(
    server_type: str = typer.Option("static", "--type", "-t", help=TYPE_HELP),
    config: Path = typer.Option(..., "--config", "-c", help="Server configuration file (.json/.yaml/.yml)"),
    nginx_path: Path = typer.Option(..., "--nginx", "-n", help="nginx.conf to preview against"),
    legacy_match: bool = typer.Option(False, "--legacy-match", help="End the http section at the first closing brace"),
) -> None:
    """Show how the server block would be inserted, without writing anything."""
    try:
        kind = block_renderer.parse_server_type(server_type)
        server = config_loader.load_server_config(config)
        block = block_renderer.render_server_block(server, kind)
        document = nginx_conf.read_document(nginx_path)
        text = preview_server_block(document, block, strategy=_strategy(legacy_match))
    except NsmError as exc:
        raise _fail(exc) from exc
    typer.echo(text)


def render(
    server_type: str = typer.Option("static", "--type", "-t", help=TYPE_HELP),
    config: Path = typer.Option(..., "--config", "-c", help="Server configuration file (.json/.yaml/.yml)"),
) -> None:
    """Print the rendered server block."""
    try:
        server = config_loader.load_server_config(config)
        block = block_renderer.render_server_block(server, server_type)
    except NsmError as exc:
        raise _fail(exc) from exc
    typer.echo(block)


def detect() -> None:
    """Print the auto-detected nginx.conf path."""
    try:
        path = nginx.detect_config()
    except NsmError as exc:
        raise _fail(exc) from exc
    typer.echo(str(path))
