"""CLI application for notevault using Rich and Typer."""

import json
import logging
import sys
from datetime import datetime
from functools import wraps
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from notevault.core.errors import StorageError
from notevault.core.factory import build_storage
from notevault.core.types import Node, NodeKind, PathBacked
from notevault.vault.service import VaultService

app = typer.Typer(
    name="notevault",
    help="notevault - vaults, trees and notes on disk",
    no_args_is_help=True,
)
vaults_app = typer.Typer(help="Manage registered vaults", no_args_is_help=True)
prefs_app = typer.Typer(help="Read and write preferences", no_args_is_help=True)
plugins_app = typer.Typer(help="Manage enabled plugin ids", no_args_is_help=True)
app.add_typer(vaults_app, name="vaults")
app.add_typer(prefs_app, name="pref")
app.add_typer(plugins_app, name="plugins")

console = Console()
err_console = Console(stderr=True)

KIND_STYLES = {
    NodeKind.FOLDER: "bold blue",
    NodeKind.CANVAS: "magenta",
    NodeKind.FILE: "",
}


def _service(ctx: typer.Context) -> VaultService:
    return ctx.find_root().obj


def handle_errors(func):
    """Report storage errors on stderr and exit non-zero."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except StorageError as e:
            err_console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    return wrapper


def _add_branch(branch: Tree, nodes: list[Node], show_ids: bool) -> None:
    for node in nodes:
        style = KIND_STYLES[node.kind]
        label = f"[{style}]{escape(node.name)}[/]" if style else escape(node.name)
        if show_ids:
            label += f" [dim]{node.id}[/dim]"
        child = branch.add(label)
        if node.children:
            _add_branch(child, node.children, show_ids)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[str] = typer.Option(
        None,
        "--data-dir",
        envvar="NOTEVAULT_DATA_DIR",
        help="Application data directory (default: per-OS location)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """notevault - vaults, trees and notes on disk."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
            force=True,
        )
    try:
        ctx.obj = build_storage(data_dir)
    except StorageError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


# --- Vaults ---


@vaults_app.command("list")
@handle_errors
def vaults_list(ctx: typer.Context):
    """List registered vaults."""
    vaults = _service(ctx).list_vaults()
    if not vaults:
        console.print("[dim]No vaults yet.[/dim]")
        return

    table = Table(title="Vaults", show_header=True)
    table.add_column("ID")
    table.add_column("Name", style="cyan")
    table.add_column("Backing")
    table.add_column("Created")

    for vault in vaults:
        kind = vault.kind
        if isinstance(kind, PathBacked):
            status = "" if kind.available else " [yellow](unavailable)[/yellow]"
            backing = f"{kind.root}{status}"
        else:
            backing = "[dim]app-managed[/dim]"
        created = datetime.fromtimestamp(vault.created_at / 1000)
        table.add_row(vault.id, vault.name, backing, created.strftime("%Y-%m-%d %H:%M"))

    console.print(table)


@vaults_app.command("create")
@handle_errors
def vaults_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Display name"),
    path: Optional[str] = typer.Argument(
        None, help="Absolute directory to back the vault (omit for app-managed)"
    ),
):
    """Register a vault. The directory itself is left untouched."""
    vault_id = _service(ctx).create_vault(name, path)
    typer.echo(vault_id)


@vaults_app.command("delete")
@handle_errors
def vaults_delete(
    ctx: typer.Context,
    vault_id: str = typer.Argument(..., help="Vault id"),
):
    """Forget a vault. Files in its directory are kept."""
    if _service(ctx).delete_vault(vault_id):
        console.print(f"[green]Vault {vault_id} removed[/green]")
    else:
        console.print(f"[yellow]Vault not found: {vault_id}[/yellow]")


# --- Trees and nodes ---


@app.command()
@handle_errors
def tree(
    ctx: typer.Context,
    vault_id: str = typer.Argument(..., help="Vault id"),
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON"),
    show_ids: bool = typer.Option(False, "--ids", help="Show node ids"),
):
    """Show the tree of a vault."""
    service = _service(ctx)
    nodes = service.load_tree(vault_id)
    if as_json:
        console.print_json(json.dumps([node.to_dict() for node in nodes]))
        return

    vault = service.vaults.get(vault_id)
    root = Tree(f"[bold]{vault.name if vault else vault_id}[/bold]")
    _add_branch(root, nodes, show_ids)
    console.print(root)


@app.command()
@handle_errors
def snapshot(
    ctx: typer.Context,
    vault_id: str = typer.Argument(..., help="Vault id"),
):
    """Store the current tree of a path-backed vault inside the vault."""
    nodes = _service(ctx).save_snapshot(vault_id)
    console.print(f"[green]Snapshot saved ({len(nodes)} top-level nodes)[/green]")


@app.command()
@handle_errors
def new(
    ctx: typer.Context,
    vault_id: str = typer.Argument(..., help="Vault id"),
    name: str = typer.Argument(..., help="Name of the new entry"),
    parent: Optional[str] = typer.Option(
        None, "--parent", "-p", help="Parent folder id"
    ),
    kind: NodeKind = typer.Option(NodeKind.FILE, "--kind", "-k", help="Entry kind"),
):
    """Create a folder, file or canvas and print its id."""
    typer.echo(_service(ctx).create_node(vault_id, parent, name, kind))


@app.command()
@handle_errors
def rm(
    ctx: typer.Context,
    vault_id: str = typer.Argument(..., help="Vault id"),
    node_id: str = typer.Argument(..., help="Node id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete a file or folder. This cannot be undone."""
    if not yes:
        typer.confirm(f"Permanently delete {node_id}?", abort=True)
    _service(ctx).delete_node(vault_id, node_id)
    console.print(f"[green]Deleted {node_id}[/green]")


@app.command()
@handle_errors
def mv(
    ctx: typer.Context,
    vault_id: str = typer.Argument(..., help="Vault id"),
    node_id: str = typer.Argument(..., help="Node id"),
    new_name: str = typer.Argument(..., help="New name within the same folder"),
):
    """Rename a file or folder and print its new id."""
    typer.echo(_service(ctx).rename_node(vault_id, node_id, new_name))


# --- Content ---


@app.command()
@handle_errors
def cat(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., help="Node id"),
):
    """Print the stored content of a node."""
    result = _service(ctx).read_content(node_id)
    if not result.found:
        err_console.print(f"[dim]No content for {node_id}[/dim]")
        return
    sys.stdout.write(result.text)


@app.command()
@handle_errors
def write(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., help="Node id"),
    text: Optional[str] = typer.Option(
        None, "--text", "-t", help="Content to store (default: read stdin)"
    ),
):
    """Replace the content of a node."""
    payload = text if text is not None else sys.stdin.read()
    path = _service(ctx).save_content(node_id, payload)
    console.print(f"[dim]Wrote {path}[/dim]")


# --- Preferences ---


@prefs_app.command("get")
@handle_errors
def pref_get(ctx: typer.Context, key: str = typer.Argument(...)):
    """Print a preference (empty when unset)."""
    typer.echo(_service(ctx).get_preference(key))


@prefs_app.command("set")
@handle_errors
def pref_set(
    ctx: typer.Context,
    key: str = typer.Argument(...),
    value: str = typer.Argument(...),
):
    """Store a preference."""
    _service(ctx).save_preference(key, value)


# --- Plugins ---


def _plugin_ids(service: VaultService, vault_id: Optional[str]) -> list[str]:
    if vault_id:
        return service.plugins.get_workspace_ids(vault_id)
    return service.plugins.get_global_ids()


def _save_plugin_ids(service: VaultService, vault_id: Optional[str], ids: list[str]):
    if vault_id:
        service.plugins.save_workspace_ids(vault_id, ids)
    else:
        service.plugins.save_global_ids(ids)


VAULT_OPTION = typer.Option(
    None, "--vault", "-v", help="Vault id for workspace plugins (default: global)"
)


@plugins_app.command("list")
@handle_errors
def plugins_list(ctx: typer.Context, vault_id: Optional[str] = VAULT_OPTION):
    """List enabled plugin ids."""
    ids = _plugin_ids(_service(ctx), vault_id)
    if not ids:
        console.print("[dim]No plugins enabled.[/dim]")
    for plugin_id in ids:
        typer.echo(plugin_id)


@plugins_app.command("add")
@handle_errors
def plugins_add(
    ctx: typer.Context,
    plugin_id: str = typer.Argument(...),
    vault_id: Optional[str] = VAULT_OPTION,
):
    """Enable a plugin id."""
    service = _service(ctx)
    ids = _plugin_ids(service, vault_id)
    if plugin_id not in ids:
        _save_plugin_ids(service, vault_id, [*ids, plugin_id])


@plugins_app.command("remove")
@handle_errors
def plugins_remove(
    ctx: typer.Context,
    plugin_id: str = typer.Argument(...),
    vault_id: Optional[str] = VAULT_OPTION,
):
    """Disable a plugin id."""
    service = _service(ctx)
    ids = _plugin_ids(service, vault_id)
    _save_plugin_ids(service, vault_id, [i for i in ids if i != plugin_id])


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
