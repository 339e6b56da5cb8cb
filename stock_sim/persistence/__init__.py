"""Snapshot persistence for resuming a simulation."""

from .snapshot import (
    SNAPSHOT_VERSION,
    SnapshotStore,
    registry_to_snapshot,
    restore_registry,
)

__all__ = [
    "SNAPSHOT_VERSION",
    "SnapshotStore",
    "registry_to_snapshot",
    "restore_registry",
]
