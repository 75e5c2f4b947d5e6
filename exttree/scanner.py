from __future__ import annotations
import errno
import logging
import os
import stat as statmod
from typing import List, Optional, Set, Tuple

from .classify import classify
from .errors import RootUnreadable
from .models import BEYOND_DEPTH, DirNode, ExtensionStat, ScanConfig

logger = logging.getLogger(__name__)

Entry = Tuple[os.DirEntry, os.stat_result]
Visited = Set[Tuple[int, int]]  # (st_dev, st_ino) of directories entered while following links


def _list_entries(dir_path: str, follow_symlinks: bool) -> List[Entry]:
    """Read one directory. Opening it may raise; bad entries are skipped."""
    out: List[Entry] = []
    with os.scandir(dir_path) as it:
        for entry in it:
            try:
                if entry.is_symlink() and not follow_symlinks:
                    continue
            except OSError as e:
                logger.debug("skipping %s: %s", entry.path, e)
                continue

            try:
                st = entry.stat(follow_symlinks=follow_symlinks)
            except OSError as e:
                logger.debug("skipping %s: %s", entry.path, e)
                continue
            out.append((entry, st))
    return out


def _first_visit(path: str, config: ScanConfig, visited: Visited) -> bool:
    # Only a followed link can lead back into the tree. DirEntry.stat() reports
    # st_ino = st_dev = 0 on Windows, so the key comes from os.stat().
    if not config.follow_symlinks:
        return True
    try:
        st = os.stat(path)
    except OSError as e:
        logger.debug("skipping %s: %s", path, e)
        return False
    key = (st.st_dev, st.st_ino)
    if key in visited:
        logger.debug("already visited, not descending: %s", path)
        return False
    visited.add(key)
    return True


def _roll_up(entries: List[Entry], config: ScanConfig, visited: Visited) -> Tuple[int, int]:
    # Counts every regular file below a cut-off directory, extensions ignored.
    count = 0
    size = 0
    for entry, st in entries:
        mode = st.st_mode
        if statmod.S_ISDIR(mode):
            if not _first_visit(entry.path, config, visited):
                continue
            try:
                sub = _list_entries(entry.path, config.follow_symlinks)
            except OSError as e:
                logger.debug("skipping %s: %s", entry.path, e)
                continue
            c, s = _roll_up(sub, config, visited)
            count += c
            size += s
        elif statmod.S_ISREG(mode):
            count += 1
            size += int(st.st_size)
    return count, size


def _fill(node: DirNode, entries: List[Entry], config: ScanConfig, visited: Visited):
    for entry, st in entries:
        mode = st.st_mode
        if statmod.S_ISDIR(mode):
            if not _first_visit(entry.path, config, visited):
                continue
            child = _scan_dir(entry.path, node.depth + 1, config, visited)
            if child is not None:
                node.children.append(child)
        elif statmod.S_ISREG(mode):
            key = classify(entry.name, config.fold_case)
            es = node.stats.get(key)
            if es is None:
                es = node.stats[key] = ExtensionStat(key)
            es.add(int(st.st_size))

    node.is_empty = not node.stats and all(c.is_empty for c in node.children)


def _scan_dir(dir_path: str, depth: int, config: ScanConfig, visited: Visited) -> Optional[DirNode]:
    node = DirNode(name=os.path.basename(dir_path.rstrip("\\/")) or dir_path,
                   path=dir_path, depth=depth)
    try:
        entries = _list_entries(dir_path, config.follow_symlinks)
    except OSError as e:
        logger.debug("skipping unreadable directory %s: %s", dir_path, e)
        return None

    if config.expands(depth):
        _fill(node, entries, config, visited)
        return node

    node.truncated = True
    count, size = _roll_up(entries, config, visited)
    if count > 0:
        node.stats[BEYOND_DEPTH] = ExtensionStat(BEYOND_DEPTH, count, size)
    node.is_empty = count == 0
    return node


def aggregate(root_path, config: Optional[ScanConfig] = None) -> DirNode:
    """Walk `root_path` and build its DirNode tree.

    Directories deeper than ``config.max_depth`` are not expanded: each one is
    returned as a truncated leaf holding a single BEYOND_DEPTH entry with the
    count and size of every file below it. Unreadable entries below the root are
    skipped. The root itself failing raises RootUnreadable.
    """
    config = config or ScanConfig()
    path = os.fspath(root_path)
    try:
        st = os.stat(path)
    except OSError as e:
        raise RootUnreadable(path, e) from e
    if not statmod.S_ISDIR(st.st_mode):
        raise RootUnreadable(path, NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path))

    try:
        entries = _list_entries(path, config.follow_symlinks)
    except OSError as e:
        raise RootUnreadable(path, e) from e

    root = DirNode(name=path, path=path, depth=0)
    visited: Visited = {(st.st_dev, st.st_ino)}
    _fill(root, entries, config, visited)
    logger.debug("scanned %s: %d files, %d bytes", path, root.total_files(), root.total_bytes())
    return root
