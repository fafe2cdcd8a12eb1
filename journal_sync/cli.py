"""journal-sync CLI — inspect and synchronize a record store from the shell."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from journal_sync import __version__
from journal_sync.config import load_settings
from journal_sync.errors import JournalSyncError
from journal_sync.logging_config import configure_logging
from journal_sync.store.record_store import RecordStore
from journal_sync.sync.bulk_save import BulkSaver
from journal_sync.sync.reconciler import Reconciler

console = Console()


def _open_store(ctx: click.Context, db: str | None) -> RecordStore:
    return RecordStore(db or ctx.obj["settings"].db_path)


def _read_json(path: str):
    with open(path) as f:
        return json.load(f)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, help="YAML settings file")
@click.pass_context
def main(ctx: click.Context, config_path: str | None):
    """Journal Sync — keep journal records in step across applications."""
    settings = load_settings(config_path)
    configure_logging(settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# ── List ─────────────────────────────────────────────────────────────


@main.command("list")
@click.argument("app_id", required=False)
@click.option("--db", default=None, help="Path to the SQLite database")
@click.pass_context
def list_entries(ctx: click.Context, app_id: str | None, db: str | None):
    """Show the records stored for APP_ID (newest first)."""
    app_id = app_id or ctx.obj["settings"].default_app_id
    store = _open_store(ctx, db)
    try:
        records = store.list_by_partition(app_id)
    finally:
        store.close()

    if not records:
        console.print(f"[yellow]No records for '{app_id}'.[/]")
        return

    table = Table(title=f"{app_id} ({len(records)} records)")
    table.add_column("ID", style="cyan")
    table.add_column("Date")
    table.add_column("Category")
    table.add_column("Tags")
    table.add_column("Content")
    for r in records:
        date = "" if r.date is None else str(r.date)
        table.add_row(r.id, date, r.category, ", ".join(r.tags), r.content[:60])
    console.print(table)


# ── Save ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--db", default=None, help="Path to the SQLite database")
@click.pass_context
def save(ctx: click.Context, file: str, db: str | None):
    """Create or overwrite the records in FILE (a JSON object or list)."""
    store = _open_store(ctx, db)
    try:
        saver = BulkSaver(store, default_app_id=ctx.obj["settings"].default_app_id)
        count = saver.save_entries(_read_json(file))
    except (JournalSyncError, json.JSONDecodeError) as e:
        console.print(f"[red]Save failed:[/] {e}")
        raise SystemExit(1)
    finally:
        store.close()
    console.print(f"[green]Saved {count} record(s).[/]")


# ── Sync ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("app_id")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--db", default=None, help="Path to the SQLite database")
@click.option("--output", "-o", default=None, help="Write downloaded records to this JSON file")
@click.pass_context
def sync(ctx: click.Context, app_id: str, file: str, db: str | None, output: str | None):
    """Reconcile the records in FILE with partition APP_ID.

    FILE holds the client's local records as a JSON list. Records the store
    lacks are inserted; records the client lacks are reported.
    """
    store = _open_store(ctx, db)
    try:
        local = _read_json(file)
        if not isinstance(local, list):
            local = [local]
        reconciler = Reconciler(store, default_app_id=ctx.obj["settings"].default_app_id)
        result = reconciler.reconcile(app_id, local)
    except (JournalSyncError, json.JSONDecodeError) as e:
        console.print(f"[red]Sync failed:[/] {e}")
        raise SystemExit(1)
    finally:
        store.close()

    console.print(f"  Uploaded:   {result.uploaded_count}")
    console.print(f"  Downloaded: {len(result.to_download)}")
    if output:
        with open(output, "w") as f:
            json.dump(result.to_dict()["downloaded"], f, indent=2, ensure_ascii=False)
        console.print(f"\n[green]Downloaded records written to:[/] {output}")


if __name__ == "__main__":
    main()
