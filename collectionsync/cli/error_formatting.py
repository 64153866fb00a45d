"""Formatting of sync outcomes for CLI output."""

import json
from typing import Any

import click

from collectionsync.remote.exception import TransportError
from collectionsync.sync.orchestrator import SyncResult


def _upstream_payload(error: BaseException) -> Any:
    """Walk the cause chain for the first transport error carrying a payload."""
    seen = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, TransportError) and current.payload is not None:
            return current.payload
        current = current.__cause__
    return None


def pretty_print_failure(result: SyncResult) -> str:
    """Format a failed sync so an operator can check the remote state by hand.

    Example output:
        [ERROR] Sync stopped at stage: archive
          Collection: REST API (latest) (uid: 1234-abcd)
          Error: Failed to create snapshot 'REST API 1.3.0': POST /collections was rejected (400): ...
          Upstream response: {"error": {...}}
    """
    stage = result.failed_stage.value if result.failed_stage else "unknown"
    lines = [click.style("[ERROR]", fg="red", bold=True) + f" Sync stopped at stage: {stage}"]

    if result.resource is not None:
        lines.append(
            f"  Collection: {result.resource.name} (uid: {result.resource.identifier})"
        )
    else:
        lines.append("  Collection: not resolved")
    if result.snapshot is not None:
        lines.append(
            f"  Snapshot already created: {result.snapshot.name} "
            f"(uid: {result.snapshot.identifier})"
        )
    if result.error is not None:
        lines.append(f"  Error: {result.error}")
        payload = _upstream_payload(result.error)
        if payload is not None:
            if not isinstance(payload, str):
                payload = json.dumps(payload, indent=2, sort_keys=True)
            lines.append(f"  Upstream response: {payload}")
    return "\n".join(lines)


def format_summary(result: SyncResult) -> str:
    """Human summary of a successful run."""
    resource = result.resource
    if result.dry_run:
        return "\n".join(
            [
                "Dry run, nothing was changed:",
                f"  - Latest collection: {resource.name} (uid: {resource.identifier}, "
                f"matched by {result.matched_by})",
                f'  - Would create snapshot: "{result.snapshot_name}"',
                f'  - Would update "{resource.name}" with the new specification',
            ]
        )
    snapshot = result.snapshot
    return "\n".join(
        [
            click.style("✓ Success!", fg="green", bold=True),
            f'  - Created snapshot: "{snapshot.name}" (uid: {snapshot.identifier})',
            "  - Updated latest collection with the new specification",
            f"  - Collection uid stayed the same: {resource.identifier}",
        ]
    )
