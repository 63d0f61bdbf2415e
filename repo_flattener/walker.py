"""
Walk an extracted repository and classify every regular file in it.
"""

from __future__ import annotations

import logging
import os
import pathlib
from typing import List

from .classify import FileDescriptor, classify, extension_of
from .config import MAX_DEFAULT_BYTES
from .errors import WalkError

logger = logging.getLogger(__name__)

VCS_DIR = ".git"


def _probe(path: pathlib.Path, max_bytes: int):
    def read() -> bytes:
        with path.open("rb") as f:
            return f.read(max_bytes)
    return read


def _scan(dir_path: pathlib.Path) -> List[os.DirEntry]:
    try:
        with os.scandir(dir_path) as it:
            return list(it)
    except OSError as e:
        raise WalkError(f"Cannot read directory {dir_path}: {e}") from e


def walk(root: pathlib.Path, max_bytes: int = MAX_DEFAULT_BYTES) -> List[FileDescriptor]:
    """Return one descriptor per regular file under ``root``, sorted by path.

    ``.git`` directories are pruned before descending. Symlinks are not
    followed and are not listed.
    """
    root = pathlib.Path(root)
    if not root.is_dir():
        raise WalkError(f"Repository root does not exist or is not a directory: {root}")

    infos: List[FileDescriptor] = []

    def visit(dir_path: pathlib.Path, rel_prefix: str) -> None:
        for entry in _scan(dir_path):
            rel = f"{rel_prefix}{entry.name}"
            if entry.is_dir(follow_symlinks=False):
                if entry.name == VCS_DIR:
                    continue
                visit(pathlib.Path(entry.path), rel + "/")
            elif entry.is_file(follow_symlinks=False):
                path = pathlib.Path(entry.path)
                try:
                    size = entry.stat(follow_symlinks=False).st_size
                except OSError:
                    # The probe will fail too and the file ends up skipped as binary
                    size = 0
                decision = classify(rel, size, _probe(path, max_bytes), max_bytes)
                infos.append(FileDescriptor(rel, size, decision, extension_of(rel), path))

    visit(root, "")
    infos.sort(key=lambda i: i.relative_path)
    logger.debug("Walked %s: %d files", root, len(infos))
    return infos
