# SPDX-License-Identifier: MIT
"""Incremental file and directory synchronization.

Both entry points compare source and target by size and modification time
and copy only what changed, unless ``copy_all`` is set. Copies preserve the
source timestamps so an unchanged tree is a no-op on the next run.
"""

from __future__ import annotations

import fnmatch
import logging
import shutil
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

LogFunc = Callable[[str], None]


class FileUpdaterError(Exception):
    """Raised when a source path is missing or cannot be copied."""

    pass


def log_file_op(message: str) -> None:
    """Log a file operation, indented under the step that caused it."""
    logger.debug("  %s", message)


def _needs_update(source: Path, target: Path) -> bool:
    if not target.exists() or target.is_dir():
        return True
    source_stat = source.stat()
    target_stat = target.stat()
    # copy2 carries the source mtime over, so any difference means another
    # source (or an edit) produced the target
    return (
        source_stat.st_size != target_stat.st_size
        or source_stat.st_mtime != target_stat.st_mtime
    )


def _remove_path(target_path: Path, target: str, log: LogFunc) -> bool:
    if target_path.is_dir() and not target_path.is_symlink():
        log(f"rmdir  {target}")
        shutil.rmtree(target_path)
        return True
    if target_path.exists() or target_path.is_symlink():
        log(f"delete {target}")
        target_path.unlink()
        return True
    return False


def _update_path(
    source_path: Path,
    target_path: Path,
    source: str,
    target: str,
    copy_all: bool,
    log: LogFunc,
) -> bool:
    if not source_path.exists():
        raise FileUpdaterError(f"Source path does not exist: {source}")

    if source_path.is_dir():
        if target_path.exists() and not target_path.is_dir():
            log(f"delete {target} (replacing with directory)")
            target_path.unlink()
        if not target_path.exists():
            log(f"mkdir {target}")
            target_path.mkdir(parents=True)
            return True
        return False

    if target_path.is_dir():
        log(f"rmdir  {target} (replacing with file)")
        shutil.rmtree(target_path)

    if not copy_all and not _needs_update(source_path, target_path):
        return False

    log(f"copy  {source} {target}")
    target_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        shutil.copy2(source_path, target_path)
    except OSError as e:
        raise FileUpdaterError(f"Failed to copy {source} to {target}: {e}") from e
    return True


def update_paths(
    path_map: Mapping[str, Optional[str]],
    root_dir: Optional[str | Path] = None,
    copy_all: bool = False,
    log: Optional[LogFunc] = None,
) -> bool:
    """Bring a set of target paths up to date with their sources.

    Args:
        path_map: Target path -> source path; a None source deletes the target
        root_dir: Directory both sides are relative to (defaults to cwd)
        copy_all: Copy even when the target looks current
        log: Callback for file operation messages

    Returns:
        True if anything was copied, created or deleted

    Raises:
        FileUpdaterError: If a source path doesn't exist
    """
    root = Path(root_dir) if root_dir is not None else Path()
    log = log or log_file_op

    updated = False
    for target, source in path_map.items():
        target_path = root / target
        if source is None:
            updated = _remove_path(target_path, target, log) or updated
        else:
            updated = _update_path(root / source, target_path, source, target, copy_all, log) or updated
    return updated


def _is_excluded(rel_path: str, name: str, exclude: Sequence[str]) -> bool:
    return any(fnmatch.fnmatch(name, p) or fnmatch.fnmatch(rel_path, p) for p in exclude)


def _is_included(rel_path: str, name: str, include: Sequence[str]) -> bool:
    if not include:
        return True
    return any(fnmatch.fnmatch(name, p) or fnmatch.fnmatch(rel_path, p) for p in include)


def map_directory(
    root: Path,
    sub_dir: str | Path,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> dict[str, bool]:
    """Map every entry under ``root/sub_dir`` to whether it is a directory.

    Keys are POSIX paths relative to ``sub_dir``. Include patterns apply to
    files only; exclude patterns prune files and whole directories.
    """
    base = root / sub_dir
    entries: dict[str, bool] = {}
    if not base.is_dir():
        return entries

    def walk(current: Path) -> None:
        for item in sorted(current.iterdir()):
            rel_path = item.relative_to(base).as_posix()
            if _is_excluded(rel_path, item.name, exclude):
                continue
            if item.is_dir():
                entries[rel_path] = True
                walk(item)
            elif _is_included(rel_path, item.name, include):
                entries[rel_path] = False

    walk(base)
    return entries


def merge_and_update_dir(
    source_dirs: Sequence[str | Path],
    target_dir: str | Path,
    root_dir: Optional[str | Path] = None,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
    copy_all: bool = False,
    log: Optional[LogFunc] = None,
) -> bool:
    """Make ``target_dir`` the union of ``source_dirs``.

    Later source directories override earlier ones path by path. Entries in
    the target that no source provides are deleted; with no sources at all
    the target directory is emptied.

    Args:
        source_dirs: Source directories in increasing priority
        target_dir: Directory to update
        root_dir: Directory all paths are relative to (defaults to cwd)
        include: Glob patterns for files to consider
        exclude: Glob patterns for files and directories to skip
        copy_all: Copy even when the target looks current
        log: Callback for file operation messages

    Returns:
        True if anything was copied, created or deleted

    Raises:
        FileUpdaterError: If a source directory doesn't exist
    """
    root = Path(root_dir) if root_dir is not None else Path()
    log = log or log_file_op

    for source_dir in source_dirs:
        if not (root / source_dir).is_dir():
            raise FileUpdaterError(f"Source directory does not exist: {source_dir}")

    # rel path -> source dir providing it, or None when it should be removed
    providers: dict[str, Optional[str | Path]] = {
        rel: None for rel in map_directory(root, target_dir, include, exclude)
    }
    for source_dir in source_dirs:
        for rel in map_directory(root, source_dir, include, exclude):
            providers[rel] = source_dir

    target_base = Path(target_dir)
    updated = False

    stale = [rel for rel, provider in providers.items() if provider is None]
    for rel in sorted(stale, key=lambda p: p.count("/"), reverse=True):
        updated = _remove_path(root / target_base / rel, (target_base / rel).as_posix(), log) or updated

    if source_dirs and not (root / target_base).is_dir():
        log(f"mkdir {target_base.as_posix()}")
        (root / target_base).mkdir(parents=True)
        updated = True

    current = sorted(
        (rel for rel, provider in providers.items() if provider is not None),
        key=lambda p: (p.count("/"), p),
    )
    for rel in current:
        source = Path(providers[rel]) / rel  # type: ignore[arg-type]
        target = target_base / rel
        updated = (
            _update_path(root / source, root / target, source.as_posix(), target.as_posix(), copy_all, log)
            or updated
        )

    return updated
