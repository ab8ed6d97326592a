"""
Snapshot commands: verify, inspect, canonical
"""

import sys
import json
import typer
from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vaultcheck.config import Settings
from vaultcheck.core import DecodeError, SnapshotRecord, canonical_snapshot_bytes, load_snapshot
from vaultcheck.signature import TrustMode
from vaultcheck.verify import EXIT_DECODE_ERROR, SnapshotReport, verify_snapshot

app = typer.Typer()
console = Console(soft_wrap=True)


def _fail(message: str, json_output: bool) -> None:
    if json_output:
        print(json.dumps({"error": message}))
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(EXIT_DECODE_ERROR)


def _print_header(record: SnapshotRecord) -> None:
    console.print(f"Snapshot ID: {escape(record.id)}")
    parent = escape(record.parent) if record.parent is not None else "<none>"
    console.print(f"Parent: {parent}")
    console.print(f"Root: {escape(record.root)}")
    console.print(f"Timestamp: {escape(record.timestamp)}")
    console.print(f"Files: {len(record.files)}")
    console.print(f"Total declared byte size: {record.total_size()}")


def _print_report(report: SnapshotReport, show_missing: int) -> None:
    sig = report.signature
    if sig.valid:
        console.print(
            f"Signature: [green]valid[/green] (trust: {sig.trust}, key: {sig.pubkey_id})"
        )
    else:
        console.print(f"Signature: [red]INVALID[/red] ({sig.error})")

    if sig.trust == TrustMode.EMBEDDED:
        console.print(
            "[yellow]Warning: verified against the snapshot's embedded signer_pub; "
            "use --pubkey to pin a known signer[/yellow]"
        )

    chunks = report.chunks
    console.print(f"Unique chunks referenced: {chunks.total}")
    if chunks.complete:
        console.print("All chunks are present locally.")
        return

    console.print(
        f"Missing chunks: {len(chunks.missing)} (showing up to {show_missing})"
    )
    for chunk_hash in chunks.shown(show_missing):
        console.print(f"  {escape(chunk_hash)}")
    hidden = chunks.hidden_count(show_missing)
    if hidden:
        console.print(f"  ... and {hidden} more")


@app.command()
def verify(
    snapshot_path: str = typer.Argument(..., help="Path to snapshot metadata JSON (decrypted)"),
    objects: Optional[str] = typer.Option(
        None,
        "--objects",
        "-o",
        help="Base object storage directory where chunks live",
    ),
    pubkey: Optional[str] = typer.Option(
        None,
        "--pubkey",
        help="Override signer public key (base64) instead of using embedded signer_pub",
    ),
    show_missing: Optional[int] = typer.Option(
        None,
        "--show-missing",
        min=0,
        help="Maximum number of missing chunk hashes to display",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        help="Number of threads probing the object store",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit non-zero when chunks are missing",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify snapshot signature and local chunk availability.

    Examples:
        vaultcheck snapshot verify snap.json --objects /var/lib/vault/objects
        vaultcheck snapshot verify snap.json --pubkey <base64> --strict
        vaultcheck snapshot verify snap.json --json
    """
    settings = Settings.from_env()
    objects_dir = objects or settings.objects_dir
    override_pub = pubkey if pubkey is not None else settings.pubkey
    limit = show_missing if show_missing is not None else settings.show_missing
    probe_workers = workers if workers is not None else settings.workers

    try:
        record = load_snapshot(snapshot_path)
    except DecodeError as e:
        _fail(str(e), json_output)

    if not json_output:
        _print_header(record)

    try:
        report = verify_snapshot(
            record,
            objects_dir,
            override_pub=override_pub,
            workers=probe_workers,
        )
    except DecodeError as e:
        _fail(str(e), json_output)

    if json_output:
        print(json.dumps(report.to_dict(limit), indent=2))
    else:
        _print_report(report, limit)

    raise typer.Exit(report.exit_code(strict=strict))


@app.command()
def inspect(
    snapshot_path: str = typer.Argument(..., help="Path to snapshot metadata JSON"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List files recorded in a snapshot.

    Examples:
        vaultcheck snapshot inspect snap.json
        vaultcheck snapshot inspect snap.json --json
    """
    try:
        record = load_snapshot(snapshot_path)
    except DecodeError as e:
        _fail(str(e), json_output)

    if json_output:
        files = [
            {
                "path": f.path,
                "mode": f.mode,
                "mod_time": f.mod_time,
                "size": f.size,
                "chunks": len(f.chunk_hashes),
            }
            for f in record.files
        ]
        print(
            json.dumps(
                {
                    "snapshot_id": record.id,
                    "files": files,
                    "count": len(files),
                    "total_size": record.total_size(),
                    "unique_chunks": len(record.unique_chunk_hashes()),
                },
                indent=2,
            )
        )
        raise typer.Exit(0)

    table = Table(title=f"Snapshot: {escape(record.id)}")
    table.add_column("Path", style="cyan")
    table.add_column("Mode", style="green")
    table.add_column("Size", justify="right")
    table.add_column("Chunks", justify="right", style="dim")

    for f in record.files:
        table.add_row(escape(f.path), oct(f.mode), str(f.size), str(len(f.chunk_hashes)))

    console.print(table)
    console.print(f"\n[bold]Total files:[/bold] {len(record.files)}")
    console.print(f"[bold]Total declared byte size:[/bold] {record.total_size()}")
    raise typer.Exit(0)


@app.command()
def canonical(
    snapshot_path: str = typer.Argument(..., help="Path to snapshot metadata JSON"),
):
    """
    Write the canonical signed bytes of a snapshot to stdout.

    Useful for byte-for-byte comparison with the signer's encoding.
    """
    try:
        record = load_snapshot(snapshot_path)
    except DecodeError as e:
        _fail(str(e), False)

    sys.stdout.flush()
    sys.stdout.buffer.write(canonical_snapshot_bytes(record))
    sys.stdout.buffer.flush()
