"""Run configuration handed to the sync engine."""

from dataclasses import dataclass, field

from ..models import ServerConfig
from ..services.filter_service import FilterService


@dataclass(frozen=True)
class SyncContext:
    """Everything a run needs besides the gateway.

    Built once at startup and passed explicitly; nothing in the engine reads
    global state.
    """

    source: ServerConfig
    target: ServerConfig
    filters: FilterService = field(default_factory=FilterService)
    sync_organizations: bool = True
    sync_user_repositories: bool = False
    dry_run: bool = False
