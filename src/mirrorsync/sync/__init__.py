"""Mirror sync engine."""

from .context import SyncContext
from .engine import MirrorSyncEngine

__all__ = [
    "MirrorSyncEngine",
    "SyncContext",
]
