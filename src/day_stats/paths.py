"""Locate the project root and the data sources read relative to it."""

from __future__ import annotations

from pathlib import Path

ROOT_MARKERS = ("pyproject.toml", ".git")
REMOTE_PREFIXES = ("http://", "https://")


def find_repo_root(start: Path | None = None) -> Path:
    origin = Path(start or __file__).resolve()
    directory = origin.parent if origin.is_file() else origin

    for candidate in (directory, *directory.parents):
        if any((candidate / marker).exists() for marker in ROOT_MARKERS):
            return candidate
    raise RuntimeError(f"No project root (pyproject.toml or .git) above {origin}")


def repo_file(*parts: str) -> Path:
    return find_repo_root().joinpath(*parts)


def is_remote_source(source: str) -> bool:
    return source.startswith(REMOTE_PREFIXES)


def resolve_data_source(source: str, root: Path | None = None) -> str:
    """URLs and absolute paths pass through; relative paths are anchored at the project root."""
    if is_remote_source(source):
        return source
    path = Path(source).expanduser()
    if path.is_absolute():
        return str(path)
    return str((root or find_repo_root()).joinpath(path))
