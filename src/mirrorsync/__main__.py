"""CLI entry point for mirrorsync."""

import argparse
from pathlib import Path

from pydantic import ValidationError

from . import __version__
from .cli.output import error, info
from .config import ConfigError, load_settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="gitea-mirror-sync",
        description="Mirror organizations and repositories from one Gitea server to another",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with settings (overrides environment variables)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Show what would change without changing the target",
    )
    parser.add_argument(
        "--organizations",
        dest="sync_organizations",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Sync organizations and their repositories (default: on)",
    )
    parser.add_argument(
        "--user-repositories",
        dest="sync_user_repositories",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Sync the authenticated user's own repositories (default: off)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=None,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            dry_run=args.dry_run,
            sync_organizations=args.sync_organizations,
            sync_user_repositories=args.sync_user_repositories,
            verbose=args.verbose,
            log_file=args.log_file,
        )
    except ConfigError as e:
        error(str(e))
        raise SystemExit(2) from e
    except ValidationError as e:
        error("Invalid configuration:")
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "settings"
            info(f"{field}: {err['msg']}")
        raise SystemExit(2) from e

    setup_logging(settings.verbose, settings.log_file)

    # Import here to keep --help and --version free of HTTP imports
    from .cli.sync import run_sync

    raise SystemExit(run_sync(settings))


if __name__ == "__main__":
    main()
