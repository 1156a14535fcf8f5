"""
Utilities for handling file paths.
"""

from pathlib import Path


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def resolve_output_path(path: str) -> Path:
    """Expands '~' in a configured output path."""
    return Path(path).expanduser()
