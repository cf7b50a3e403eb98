"""
Path helpers — the Wine drive-mapping namespace.

Paths inside the prefix are written Windows-style with a drive marker
(``c:/users/...`` or ``C:\\users\\...``). They resolve under the
prefix's ``drive_c`` directory. Anything else is a host path.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

DRIVE_MARKER = "c:"
DRIVE_DIR_NAME = "drive_c"

# Placeholder accepted in run programs, expanded to the prefix path
PREFIX_VARIABLE = "$WINEPREFIX"


def normalize_windows_path(path: str) -> str:
    """Turn backslashes into forward slashes."""
    return path.replace("\\", "/")


def is_drive_path(path: str) -> bool:
    """Whether ``path`` starts with the ``c:`` drive marker (any case)."""
    return normalize_windows_path(path).lower().startswith(DRIVE_MARKER)


def drive_relative(path: str) -> PurePosixPath:
    """Strip the drive marker, returning the path below the drive root.

    ``c:/target/file.txt`` → ``target/file.txt``
    """
    if not is_drive_path(path):
        raise ValueError(f"Not a drive path (must begin with {DRIVE_MARKER!r}): {path}")
    rest = PurePosixPath(normalize_windows_path(path)[len(DRIVE_MARKER):].lstrip("/"))
    if ".." in rest.parts:
        raise ValueError(f"Drive path must stay inside {DRIVE_MARKER!r}: {path}")
    return rest


def resolve_drive_path(prefix_dir: Path, path: str) -> Path:
    """Resolve a drive-relative path against the prefix's drive mapping."""
    return prefix_dir / DRIVE_DIR_NAME / drive_relative(path)


def resolve_source_path(prefix_dir: Path, path: str) -> Path:
    """Resolve a path that may be either drive-relative or on the host."""
    if is_drive_path(path):
        return resolve_drive_path(prefix_dir, path)
    if path.startswith(PREFIX_VARIABLE):
        return Path(str(prefix_dir) + path[len(PREFIX_VARIABLE):])
    return Path(path).expanduser()
