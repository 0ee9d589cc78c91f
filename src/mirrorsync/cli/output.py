"""Console output helpers for the sync report."""

import sys

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
DIM = "\033[2m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗
DASH = "\u2013"  # –

DRY_RUN_PREFIX = "[DRY RUN] "


def _supports_color() -> bool:
    """Colors only on an interactive stdout."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _colorize(text: str, color: str) -> str:
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    """Print a changed entity with a green checkmark."""
    print(f"{_colorize(CHECK, GREEN)} {message}")


def info(message: str) -> None:
    """Print a notice with a yellow bullet."""
    print(f"{_colorize(BULLET, YELLOW)} {message}")


def skipped(message: str) -> None:
    """Print an untouched entity, dimmed."""
    print(_colorize(f"{DASH} {message}", DIM))


def header(message: str, dry_run: bool = False) -> None:
    """Print a section header in blue."""
    prefix = DRY_RUN_PREFIX if dry_run else ""
    print(_colorize(f"{prefix}{message}", BLUE))


def error(message: str) -> None:
    """Print an error with a red cross on stderr."""
    print(f"{_colorize(CROSS, RED)} {message}", file=sys.stderr)
