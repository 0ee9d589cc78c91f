"""Mirror sync engine.

This module provides the MirrorSyncEngine class which handles:
- Creating and updating target organizations from the source
- Pairing source repositories with same-named target repositories
- Creating, updating and re-creating pull mirrors on the target
- The two run passes (organizations, authenticated user's repositories)

Every mutating step makes the same decision and logs the same intent in
dry-run as in a live run. In dry-run the request is logged instead of sent
and the step yields no new state, so chained steps (delete, then create)
stop after the first one.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from ..models import (
    NamedOwner,
    Organization,
    OrganizationCreate,
    OrganizationOwner,
    OrganizationPatch,
    OrgAction,
    OrgOutcome,
    OrgSync,
    Owner,
    RepoSync,
    Repository,
    RepositoryMigrate,
    RepositoryPatch,
    ServerConfig,
    SyncAction,
    SyncOutcome,
    SyncReport,
    UserOwner,
)
from ..models.payloads import ApiPayload
from .context import SyncContext

if TYPE_CHECKING:
    from ..gitea.protocol import GatewayProtocol

logger = logging.getLogger(__name__)

MASKED = "********"


class MirrorSyncEngine:
    """Engine reconciling a target Gitea server with a source server.

    Handles the workflow of:
    1. Fetching and filtering source organizations
    2. Creating or updating each one on the target
    3. Pairing each organization's repositories with the target's
    4. Pairing the authenticated user's own repositories (optional pass)
    5. Deciding and executing one action per repository pairing

    The source always wins. Target repositories that are not mirrors are
    treated as detached and never touched.
    """

    def __init__(self, gateway: GatewayProtocol, context: SyncContext) -> None:
        """Initialize the sync engine.

        Args:
            gateway: Remote operations against source and target servers
            context: Servers, filters, pass switches and dry-run flag
        """
        self._gateway = gateway
        self._context = context

    @property
    def context(self) -> SyncContext:
        return self._context

    # --- Public API: Run ---

    def run(self) -> SyncReport:
        """Run both passes and reconcile every repository pairing.

        Returns:
            SyncReport with organization and repository outcomes
        """
        report = SyncReport(dry_run=self._context.dry_run)

        syncs = self.organization_syncs(report) + self.user_syncs()
        for sync in syncs:
            report.considered += 1
            try:
                report.repositories.append(self.reconcile_repository(sync))
            except Exception as e:
                error_msg = f"Failed to sync {sync.target_full_name}: {e}"
                report.errors.append(error_msg)
                logger.error(error_msg)

        logger.info("Considered %d repositories", report.considered)
        return report

    def organization_syncs(self, report: SyncReport | None = None) -> list[RepoSync]:
        """Reconcile organizations and pair their repositories.

        Args:
            report: Collects organization outcomes and errors when given

        Returns:
            Repository pairings for every organization present on the target
        """
        if not self._context.sync_organizations:
            logger.info("Organization sync disabled")
            return []

        source = self._context.source
        target = self._context.target

        all_orgs = self._gateway.list_organizations(source)
        source_orgs = self._context.filters.apply_organizations(all_orgs)
        target_orgs = {org.name: org for org in self._gateway.list_organizations(target)}
        logger.info(
            "Syncing %d/%d organizations from %s", len(source_orgs), len(all_orgs), source.base_url
        )

        syncs: list[RepoSync] = []
        for source_org in source_orgs:
            org_sync = OrgSync(source=source_org, target=target_orgs.get(source_org.name))
            try:
                outcome = self.reconcile_organization(org_sync)
            except Exception as e:
                error_msg = f"Failed to sync organization {source_org.name}: {e}"
                if report is not None:
                    report.errors.append(error_msg)
                logger.error(error_msg)
                continue
            if report is not None:
                report.organizations.append(outcome)

            # An update that yielded nothing still leaves the fetched target in place
            target_org = outcome.organization or org_sync.target
            if target_org is None:
                logger.info(
                    "Skipping repositories of %s: organization not available on target",
                    source_org.name,
                )
                continue

            syncs.extend(
                self._pair_repositories(
                    OrganizationOwner(server=source, organization=source_org),
                    OrganizationOwner(server=target, organization=target_org),
                )
            )
        return syncs

    def user_syncs(self) -> list[RepoSync]:
        """Pair the authenticated user's own repositories.

        Both tokens must belong to the same login; otherwise the pass yields
        nothing.
        """
        if not self._context.sync_user_repositories:
            logger.info("User repository sync disabled")
            return []

        source = self._context.source
        target = self._context.target

        source_user = self._gateway.get_current_user(source)
        target_user = self._gateway.get_current_user(target)
        if source_user is None or target_user is None:
            logger.warning("Skipping user repositories: could not resolve the token owners")
            return []
        if source_user.login != target_user.login:
            logger.warning(
                "Skipping user repositories: source token belongs to %s, target token to %s",
                source_user.login,
                target_user.login,
            )
            return []

        return self._pair_repositories(
            UserOwner(server=source, user=source_user),
            UserOwner(server=target, user=target_user),
        )

    # --- Organizations ---

    def reconcile_organization(self, org_sync: OrgSync) -> OrgOutcome:
        """Create, update or keep the target organization."""
        if org_sync.target is None:
            return OrgOutcome(
                org_sync, OrgAction.CREATE, self.create_organization(org_sync.source)
            )
        if org_sync.needs_update:
            return OrgOutcome(
                org_sync,
                OrgAction.UPDATE,
                self.update_organization(org_sync.target, org_sync.source),
            )
        logger.debug("%s is in sync", org_sync.source.name)
        return OrgOutcome(org_sync, OrgAction.NOOP, org_sync.target)

    def create_organization(self, source: Organization) -> Organization | None:
        logger.info("creating %s", source.name)
        server = self._context.target
        payload = OrganizationCreate.from_source(source)
        if self._context.dry_run:
            self._log_request(server, "POST", "/orgs", payload)
            return None
        return self._gateway.create_organization(server, payload)

    def update_organization(self, target: Organization, source: Organization) -> Organization | None:
        logger.info("updating %s", target.name)
        server = self._context.target
        payload = OrganizationPatch.from_source(source)
        if self._context.dry_run:
            self._log_request(server, "PATCH", f"/orgs/{target.name}", payload)
            return None
        return self._gateway.update_organization(server, target.name, payload)

    # --- Repositories ---

    @staticmethod
    def classify(sync: RepoSync) -> SyncAction:
        """Decide the action for a pairing.

        Precedence:
        1. Source is a mirror: skip
        2. No target: create
        3. Target is not a mirror: skip (detached)
        4. Target drifted: update
        5. Target mirrors another upstream: recreate
        6. Otherwise nothing to do

        Update wins over recreate, so a pairing with both drifted metadata
        and a moved clone URL is only updated in this pass.
        """
        if sync.source_repository.mirror:
            return SyncAction.SKIP_SOURCE_MIRROR
        if sync.target_repository is None:
            return SyncAction.CREATE
        if sync.is_detached:
            return SyncAction.SKIP_DETACHED
        if sync.needs_update:
            return SyncAction.UPDATE
        if sync.needs_recreate:
            return SyncAction.RECREATE
        return SyncAction.NOOP

    def reconcile_repository(self, sync: RepoSync) -> SyncOutcome:
        """Classify a pairing and execute the resulting action."""
        action = self.classify(sync)

        if action == SyncAction.CREATE:
            repository = self.create_mirror_repository(sync.target_owner, sync)
        elif action == SyncAction.UPDATE:
            repository = self.update_repository(sync)
        elif action == SyncAction.RECREATE:
            repository = self.recreate_repository(sync)
        elif action == SyncAction.NOOP:
            logger.debug("%s is in sync", sync.target_full_name)
            repository = sync.target_repository
        elif action == SyncAction.SKIP_SOURCE_MIRROR:
            logger.debug("%s is a mirror on the source, skipping", sync.source_repository.full_name)
            repository = None
        else:
            logger.info("%s is not a mirror on the target, leaving it alone", sync.target_full_name)
            repository = None

        return SyncOutcome(sync, action, repository)

    def create_mirror_repository(self, owner: Owner, sync: RepoSync) -> Repository | None:
        """Create a mirror of the pairing's source repository under `owner`."""
        source = sync.source_repository
        logger.info("creating %s/%s", owner.owner_name, source.name)
        payload = RepositoryMigrate.from_source(
            owner.owner_name, source, auth_token=sync.source_owner.server.token
        )
        if self._context.dry_run:
            self._log_request(owner.server, "POST", "/repos/migrate", payload)
            return None
        return self._gateway.create_mirror_repository(owner.server, owner.owner_name, payload)

    def update_repository(self, sync: RepoSync) -> Repository | None:
        """Overwrite the target mirror's settings with the source's."""
        target = sync.target_repository
        if target is None:
            logger.warning("Cannot update %s: no target repository", sync.target_full_name)
            return None

        owner = sync.target_owner
        logger.info("updating %s/%s", owner.owner_name, target.name)
        payload = RepositoryPatch.from_source(sync.source_repository)
        if self._context.dry_run:
            self._log_request(
                owner.server, "PATCH", f"/repos/{owner.owner_name}/{target.name}", payload
            )
            return None
        return self._gateway.update_repository(owner.server, owner.owner_name, target.name, payload)

    def delete_repository(self, owner: Owner, repository: Repository) -> bool:
        """Delete a target repository. False in dry-run or when the server refused."""
        logger.info("deleting %s/%s", owner.owner_name, repository.name)
        if self._context.dry_run:
            self._log_request(
                owner.server, "DELETE", f"/repos/{owner.owner_name}/{repository.name}", None
            )
            return False
        return self._gateway.delete_repository(owner.server, owner.owner_name, repository.name)

    def recreate_repository(self, sync: RepoSync) -> Repository | None:
        """Delete the target mirror and create it again from the source.

        The new mirror is addressed by owner name only; the owner fetched
        before the delete is not reused.
        """
        target = sync.target_repository
        if target is None:
            logger.warning("Cannot recreate %s: no target repository", sync.target_full_name)
            return None

        logger.info("have to recreate %s/%s", sync.target_owner.owner_name, target.name)
        if not self.delete_repository(sync.target_owner, target):
            if self._context.dry_run:
                logger.info(
                    "[DRY RUN] would re-create %s/%s after delete",
                    sync.target_owner.owner_name,
                    target.name,
                )
            else:
                logger.warning(
                    "Not re-creating %s/%s: the existing repository was not deleted",
                    sync.target_owner.owner_name,
                    target.name,
                )
            return None

        owner = NamedOwner(server=sync.target_owner.server, name=sync.target_owner.owner_name)
        return self.create_mirror_repository(owner, sync)

    # --- Helpers ---

    def _pair_repositories(self, source_owner: Owner, target_owner: Owner) -> list[RepoSync]:
        """Pair filtered source repositories with target repositories by name."""
        source_repos = self._context.filters.apply_repositories(
            self._gateway.list_repositories(source_owner)
        )
        target_repos = {repo.name: repo for repo in self._gateway.list_repositories(target_owner)}
        logger.debug(
            "Pairing %d repositories of %s with %d on target",
            len(source_repos),
            source_owner.owner_name,
            len(target_repos),
        )
        return [
            RepoSync(
                source_owner=source_owner,
                source_repository=repo,
                target_owner=target_owner,
                target_repository=target_repos.get(repo.name),
            )
            for repo in source_repos
        ]

    def _log_request(
        self, server: ServerConfig, method: str, path: str, payload: ApiPayload | None
    ) -> None:
        """Log the request a dry-run would have sent, with tokens masked."""
        if payload is None:
            logger.info("[DRY RUN] %s %s%s", method, server.api_url, path)
            return
        body = payload.to_json()
        if "auth_token" in body:
            body["auth_token"] = MASKED
        logger.info(
            "[DRY RUN] %s %s%s %s", method, server.api_url, path, json.dumps(body, sort_keys=True)
        )
