"""Security checks for search index files before they are imported."""

import os
from pathlib import Path
from typing import Optional


# --- Allowed Root ---

def _inside(root: Path, resolved: Path) -> bool:
    resolved_root = root.resolve()
    return os.path.commonpath([resolved_root, resolved]) == str(resolved_root)


def is_within_root(root: Path, target: Path) -> bool:
    """True when target, after following ``..`` and symlinks, lies under root.

    Used to confine imports to a documentation build directory.
    """
    try:
        return _inside(root, target.resolve())
    except (OSError, ValueError):
        return False


def is_symlink_escape(root: Path, path: Path) -> bool:
    """True when path is a symlink whose target lies outside root.

    An unresolvable link counts as an escape.
    """
    if not path.is_symlink():
        return False
    try:
        return not _inside(root, path.resolve())
    except (OSError, ValueError):
        return True


# --- Binary File Detection ---

BINARY_EXTENSIONS = frozenset([
    ".exe", ".dll", ".so", ".dylib", ".bin",
    ".zip", ".tar", ".gz", ".bz2", ".xz", ".7z",
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".svg", ".webp",
    ".pdf", ".woff", ".woff2", ".ttf", ".otf",
    ".db", ".sqlite", ".sqlite3",
])


def is_binary_extension(file_path: str) -> bool:
    """Check if a file has a known binary extension."""
    _, ext = os.path.splitext(file_path)
    return ext.lower() in BINARY_EXTENSIONS


def is_binary_content(data: bytes, check_size: int = 8192) -> bool:
    """Detect binary content by checking for null bytes."""
    return b"\x00" in data[:check_size]


def is_binary_file(file_path: Path, check_size: int = 8192) -> bool:
    """Check if a file is binary using extension check + content sniffing."""
    if is_binary_extension(str(file_path)):
        return True

    try:
        with open(file_path, "rb") as f:
            data = f.read(check_size)
        return is_binary_content(data, check_size)
    except OSError:
        return True  # Can't read -> skip


# --- Composite Filter ---

DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB


def should_exclude_file(
    file_path: Path,
    root: Optional[Path] = None,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> Optional[str]:
    """Run all checks on an index file. Returns reason string if excluded, None if ok.

    Args:
        file_path: Path to the search index file.
        root: Optional directory the file must stay inside.
        max_file_size: Maximum file size in bytes.

    Returns:
        A reason string if excluded, None if the file passes all checks.
    """
    if not file_path.is_file():
        return "not_a_file"

    if root is not None:
        if is_symlink_escape(root, file_path):
            return "symlink_escape"
        if not is_within_root(root, file_path):
            return "outside_root"

    try:
        if file_path.stat().st_size > max_file_size:
            return "file_too_large"
    except OSError:
        return "unreadable"

    if is_binary_file(file_path):
        return "binary_file"

    return None
