"""Application settings."""

import logging
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from ..models import ServerConfig
from ..services.filter_service import FilterService, NameFilter
from ..sync.context import SyncContext

logger = logging.getLogger(__name__)

NameList = Annotated[list[str], NoDecode]


class ConfigError(ValueError):
    """Configuration is missing or contradictory."""

    pass


class Settings(BaseSettings):
    """Application settings.

    Environment variables use the field names in upper case, e.g.
    SOURCE_GITEA_URL or WHITE_LIST_ORGANIZATIONS. Name lists are
    whitespace-separated in the environment.
    """

    source_gitea_url: str = Field(..., min_length=1, description="Base URL of the source server")
    source_gitea_token: str = Field(..., min_length=1, repr=False)
    target_gitea_url: str = Field(..., min_length=1, description="Base URL of the target server")
    target_gitea_token: str = Field(..., min_length=1, repr=False)

    dry_run: bool = Field(default=False, description="Log mutating requests instead of sending them")
    sync_organizations: bool = Field(default=True, description="Run the organization pass")
    sync_user_repositories: bool = Field(
        default=False, description="Run the authenticated user's repository pass"
    )

    white_list_organizations: NameList = Field(default_factory=list)
    black_list_organizations: NameList = Field(default_factory=list)
    white_list_repositories: NameList = Field(
        default_factory=list, description="Repository full names (owner/name)"
    )
    black_list_repositories: NameList = Field(
        default_factory=list, description="Repository full names (owner/name)"
    )

    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "",
        "extra": "ignore",
    }

    @field_validator(
        "white_list_organizations",
        "black_list_organizations",
        "white_list_repositories",
        "black_list_repositories",
        mode="before",
    )
    @classmethod
    def split_names(cls, v: Any) -> Any:
        """Accept whitespace-separated strings as well as lists."""
        if v is None:
            return []
        if isinstance(v, str):
            return v.split()
        return v

    @field_validator("source_gitea_url", "target_gitea_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def source(self) -> ServerConfig:
        return ServerConfig(base_url=self.source_gitea_url, token=self.source_gitea_token)

    @property
    def target(self) -> ServerConfig:
        return ServerConfig(base_url=self.target_gitea_url, token=self.target_gitea_token)

    def filter_service(self) -> FilterService:
        """Build the allow/deny filters from the configured name lists."""
        return FilterService(
            organizations=NameFilter.from_lists(
                self.white_list_organizations, self.black_list_organizations
            ),
            repositories=NameFilter.from_lists(
                self.white_list_repositories, self.black_list_repositories
            ),
        )

    def sync_context(self) -> SyncContext:
        """Build the run context handed to the sync engine."""
        return SyncContext(
            source=self.source,
            target=self.target,
            filters=self.filter_service(),
            sync_organizations=self.sync_organizations,
            sync_user_repositories=self.sync_user_repositories,
            dry_run=self.dry_run,
        )


def load_config_file(path: Path) -> dict[str, Any]:
    """Read settings from a YAML file.

    Keys are the lowercase setting names. An empty file yields no settings.

    Raises:
        ConfigError: File missing, unreadable, not YAML, or not a mapping
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        logger.warning("%s is empty", path)
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")

    logger.info("Loaded settings from %s", path)
    return {str(key).lower(): value for key, value in data.items()}


def check_settings(settings: Settings) -> Settings:
    """Reject settings that cannot produce a meaningful run.

    Raises:
        ConfigError: No pass enabled, or source and target are one server
    """
    if not settings.sync_organizations and not settings.sync_user_repositories:
        raise ConfigError(
            "Nothing to do: enable organization sync, user repository sync, or both"
        )
    if settings.source_gitea_url == settings.target_gitea_url:
        raise ConfigError(
            f"Source and target point at the same server: {settings.source_gitea_url}"
        )
    return settings


def load_settings(config_file: Path | None = None, **overrides: Any) -> Settings:
    """Build settings from environment, optional YAML file and overrides.

    Precedence: overrides > config file > environment > defaults. Overrides
    with value None are ignored.

    Raises:
        ConfigError: Unreadable config file or contradictory settings
        ValidationError: Missing or malformed values
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        values.update(load_config_file(config_file))
    values.update({key: value for key, value in overrides.items() if value is not None})
    return check_settings(Settings(**values))
