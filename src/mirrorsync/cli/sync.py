"""Sync command mirroring a source Gitea server onto a target server."""

import logging

from ..config import Settings
from ..gitea import GiteaGateway
from ..models import OrgAction, OrgOutcome, SyncAction, SyncOutcome, SyncReport
from ..sync import MirrorSyncEngine
from .output import error, header, info, skipped, success

logger = logging.getLogger(__name__)

_REPO_LABELS = {
    SyncAction.CREATE: "create mirror",
    SyncAction.UPDATE: "update",
    SyncAction.RECREATE: "recreate mirror",
    SyncAction.SKIP_SOURCE_MIRROR: "skipped, source is a mirror",
    SyncAction.SKIP_DETACHED: "skipped, target is not a mirror",
    SyncAction.NOOP: "in sync",
}

_ORG_LABELS = {
    OrgAction.CREATE: "create organization",
    OrgAction.UPDATE: "update organization",
    OrgAction.NOOP: "in sync",
}


def run_sync(settings: Settings) -> int:
    """Mirror the source server onto the target.

    Args:
        settings: Validated settings

    Returns:
        Exit code (0 for success, 1 if any reconciliation unit failed)
    """
    context = settings.sync_context()

    header(f"Source: {context.source.base_url}")
    header(f"Target: {context.target.base_url}")
    if context.dry_run:
        info("Dry-run activated, no changes will be made")

    with GiteaGateway(timeout=settings.request_timeout) as gateway:
        engine = MirrorSyncEngine(gateway, context)
        report = engine.run()

    display_report(report)
    return 1 if report.has_errors else 0


def display_report(report: SyncReport) -> None:
    """Print one line per outcome and the totals."""
    print()
    if report.organizations:
        header("Organizations:", report.dry_run)
        for org_outcome in report.organizations:
            _display_org_outcome(org_outcome, report.dry_run)
        print()

    if report.repositories:
        header("Repositories:", report.dry_run)
        for outcome in report.repositories:
            _display_repo_outcome(outcome, report.dry_run)
        print()

    for err in report.errors:
        error(err)

    changed = sum(
        report.count(action)
        for action in (SyncAction.CREATE, SyncAction.UPDATE, SyncAction.RECREATE)
    )
    verb = "would change" if report.dry_run else "changed"
    success(f"Synchronization completed: {report.considered} repositories considered, {changed} {verb}")


def _display_org_outcome(outcome: OrgOutcome, dry_run: bool) -> None:
    line = f"{outcome.sync.source.name}: {_ORG_LABELS[outcome.action]}"
    if outcome.action == OrgAction.NOOP:
        skipped(line)
    elif outcome.organization is None and not dry_run:
        error(f"{line} failed")
    else:
        success(line)


def _display_repo_outcome(outcome: SyncOutcome, dry_run: bool) -> None:
    line = f"{outcome.sync.target_full_name}: {_REPO_LABELS[outcome.action]}"
    if outcome.action in (
        SyncAction.NOOP,
        SyncAction.SKIP_DETACHED,
        SyncAction.SKIP_SOURCE_MIRROR,
    ):
        skipped(line)
    elif outcome.repository is None and not dry_run:
        error(f"{line} failed")
    else:
        success(line)
