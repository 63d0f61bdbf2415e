"""
Plain-text directory tree for the top of the rendered page.
"""

from __future__ import annotations

import os
import pathlib
from typing import List

from .errors import WalkError
from .walker import VCS_DIR


def generate_tree(root: pathlib.Path) -> str:
    """Render ``root`` as a ``tree``-style listing.

    Directories come before files at every level, then names in codepoint
    order. ``.git`` is left out. Symlinked directories are shown but not
    entered.
    """
    root = pathlib.Path(root)
    if not root.is_dir():
        raise WalkError(f"Repository root does not exist or is not a directory: {root}")

    lines: List[str] = [root.name]

    def walk(dir_path: pathlib.Path, prefix: str = "") -> None:
        try:
            with os.scandir(dir_path) as it:
                entries = [e for e in it if e.name != VCS_DIR]
        except OSError as e:
            raise WalkError(f"Cannot read directory {dir_path}: {e}") from e
        entries.sort(key=lambda e: (not e.is_dir(follow_symlinks=False), e.name))
        for i, e in enumerate(entries):
            last = i == len(entries) - 1
            branch = "└── " if last else "├── "
            lines.append(prefix + branch + e.name)
            if e.is_dir(follow_symlinks=False):
                extension = "    " if last else "│   "
                walk(pathlib.Path(e.path), prefix + extension)

    walk(root)
    return "\n".join(lines)
