"""
File descriptors and the size/binary classifier.

A file is skipped when it is larger than the size threshold, when its
extension is a known binary format, or when its bytes contain a NUL.
Everything else is included.
"""

from __future__ import annotations

import enum
import pathlib
import posixpath
from dataclasses import dataclass
from typing import Callable

from .config import MAX_DEFAULT_BYTES

BINARY_EXTENSIONS = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".svg", ".ico",
    ".pdf", ".zip", ".tar", ".gz", ".bz2", ".xz", ".7z", ".rar",
    ".mp3", ".mp4", ".mov", ".avi", ".mkv", ".wav", ".ogg", ".flac",
    ".ttf", ".otf", ".eot", ".woff", ".woff2",
    ".so", ".dll", ".dylib", ".class", ".jar", ".exe", ".bin",
})
MARKDOWN_EXTENSIONS = frozenset({".md", ".markdown", ".mdown", ".mkd", ".mkdn"})


class Decision(enum.Enum):
    INCLUDED = "ok"
    SKIPPED_TOO_LARGE = "too_large"
    SKIPPED_BINARY = "binary"

    @property
    def include(self) -> bool:
        return self is Decision.INCLUDED


@dataclass(frozen=True)
class FileDescriptor:
    relative_path: str        # slash-separated, relative to the repo root
    size_bytes: int
    decision: Decision
    extension: str            # lowercase, with leading dot, or ""
    absolute_path: pathlib.Path

    @property
    def included(self) -> bool:
        return self.decision.include

    @property
    def is_markdown(self) -> bool:
        return self.extension in MARKDOWN_EXTENSIONS


def extension_of(relative_path: str) -> str:
    return posixpath.splitext(relative_path)[1].lower()


def classify(
    relative_path: str,
    size_bytes: int,
    read_probe: Callable[[], bytes],
    max_bytes: int = MAX_DEFAULT_BYTES,
) -> Decision:
    """Decide whether a file is rendered.

    ``read_probe`` is called at most once, and only when the size and
    extension checks have both passed. A probe that raises ``OSError``
    counts as binary.
    """
    if size_bytes > max_bytes:
        return Decision.SKIPPED_TOO_LARGE
    if extension_of(relative_path) in BINARY_EXTENSIONS:
        return Decision.SKIPPED_BINARY
    try:
        data = read_probe()
    except OSError:
        # Unreadable files are treated as binary to be safe
        return Decision.SKIPPED_BINARY
    if b"\x00" in data:
        return Decision.SKIPPED_BINARY
    return Decision.INCLUDED
