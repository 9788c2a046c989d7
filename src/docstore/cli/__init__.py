"""CLI module for inspecting snapshots and managing global values.

Usage:
    docstore inspect saves/world.json
    docstore validate saves/world.json
    docstore show saves/world.json Admin u1
    docstore global set high_score 1200
    docstore global get high_score
    docstore --config docstore.toml global remove high_score

Commands:
    inspect   - List the tables of a snapshot
    validate  - Validate a snapshot file
    show      - Print one merged record from a snapshot
    global    - Get, set or remove a global value
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from docstore.config.loader import load_store_config
from docstore.config.models import StoreConfig
from docstore.errors import DocStoreError
from docstore.global_store import GlobalStore
from docstore.snapshot.dump_restore import read_snapshot, restore_database, validate_snapshot

console = Console()


def _load_config(args: argparse.Namespace) -> StoreConfig:
    config_path = getattr(args, "config", None)
    return load_store_config(Path(config_path) if config_path else None)


# ============================================================================
# Command implementations
# ============================================================================


def cmd_inspect(args: argparse.Namespace) -> int:
    """List the tables of a snapshot file.

    Args:
        args: Parsed arguments with snapshot.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        data = read_snapshot(args.snapshot)
        db = restore_database(data)
    except (FileNotFoundError, ValueError, DocStoreError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    # Predicates are not stored, so view names come from the file itself
    view_names = {t["name"]: t.get("views", []) for t in data["tables"]}

    console.print(f"Database: [bold cyan]{db.name}[/bold cyan]")

    if not db.tables:
        console.print("[yellow]No tables.[/yellow]")
        return 0

    table = Table(title="Tables", show_header=True, header_style="bold")
    table.add_column("Table", style="cyan")
    table.add_column("Ancestors")
    table.add_column("Descendants")
    table.add_column("Own", justify="right")
    table.add_column("Shards", justify="right")
    table.add_column("Views")
    table.add_column("Fields", style="dim")

    for name in db.table_names():
        summary = db.get_table(name).summary()
        table.add_row(
            summary.name,
            ", ".join(summary.ancestors) or "-",
            ", ".join(summary.descendants) or "-",
            str(summary.own_entry_count),
            str(summary.entry_count),
            ", ".join(view_names.get(name, [])) or "-",
            ", ".join(summary.fields),
        )

    console.print(table)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a snapshot file.

    Returns:
        0 on valid snapshot, 1 on invalid or unreadable file.
    """
    try:
        data = read_snapshot(args.snapshot)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    result = validate_snapshot(data)
    if result.valid:
        console.print("[bold green]v[/bold green] Snapshot is valid")
        if result.warnings:
            console.print(result.format_report())
        return 0

    console.print("[bold red]x[/bold red] Snapshot is invalid")
    console.print(result.format_report())
    return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Print the merged record for one key of a snapshot table.

    Returns:
        0 on success, 1 if the snapshot, table or key is missing.
    """
    try:
        db = restore_database(read_snapshot(args.snapshot))
        record = db.get_table(args.table).get(args.key)
    except (FileNotFoundError, ValueError, DocStoreError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    table = Table(title=f"{args.table} / {args.key}", show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field_name, value in record.items():
        table.add_row(field_name, "[dim]null[/dim]" if value is None else repr(value))

    console.print(table)
    return 0


def cmd_global(args: argparse.Namespace) -> int:
    """Get, set or remove a global value.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        store = GlobalStore.from_config(_load_config(args))

        if args.action == "get":
            console.print(store.get(args.key))
        elif args.action == "set":
            if args.value is None:
                console.print("[red]Error: set requires a VALUE[/red]")
                return 1
            store.add(args.key, args.value)
            console.print(f"[green]v[/green] Set [cyan]{args.key}[/cyan]")
        else:
            store.remove(args.key)
            console.print(f"[green]v[/green] Removed [cyan]{args.key}[/cyan]")
    except (FileNotFoundError, ValueError, DocStoreError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    return 0


# ============================================================================
# Main entry point
# ============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to appropriate handler.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        prog="docstore",
        description="Inspect docstore snapshots and manage global values",
    )

    # Global option: --config
    parser.add_argument(
        "--config",
        default=None,
        help="Path to docstore.toml (default: ./docstore.toml if present)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # inspect command
    p_inspect = subparsers.add_parser("inspect", help="List the tables of a snapshot")
    p_inspect.add_argument("snapshot", help="Path to snapshot JSON file")
    p_inspect.set_defaults(func=cmd_inspect)

    # validate command
    p_validate = subparsers.add_parser("validate", help="Validate a snapshot file")
    p_validate.add_argument("snapshot", help="Path to snapshot JSON file")
    p_validate.set_defaults(func=cmd_validate)

    # show command
    p_show = subparsers.add_parser("show", help="Print one merged record from a snapshot")
    p_show.add_argument("snapshot", help="Path to snapshot JSON file")
    p_show.add_argument("table", help="Table name")
    p_show.add_argument("key", help="Record key")
    p_show.set_defaults(func=cmd_show)

    # global command
    p_global = subparsers.add_parser("global", help="Get, set or remove a global value")
    p_global.add_argument("action", choices=["get", "set", "remove"])
    p_global.add_argument("key", help="Global key")
    p_global.add_argument("value", nargs="?", default=None, help="Value (set only)")
    p_global.set_defaults(func=cmd_global)

    args = parser.parse_args(argv)

    try:
        config = _load_config(args)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    logging.basicConfig(level=config.log_level)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
