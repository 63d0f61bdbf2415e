"""
Assemble the human-readable view: table of contents, rendered file
sections and the skipped-file summaries.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from .classify import Decision, FileDescriptor
from .render import Renderer, bytes_human, slugify

logger = logging.getLogger(__name__)

ContentProvider = Callable[[FileDescriptor], str]


def read_text(info: FileDescriptor) -> str:
    return info.absolute_path.read_text(encoding="utf-8", errors="replace")


@dataclass(frozen=True)
class TocEntry:
    relative_path: str
    anchor: str
    size_label: str


@dataclass(frozen=True)
class FileSection:
    relative_path: str
    anchor: str
    size_label: str
    body_html: str
    error: Optional[str] = None


@dataclass(frozen=True)
class SkippedEntry:
    relative_path: str
    size_label: str


@dataclass
class HumanDocument:
    tree_text: str = ""
    toc: List[TocEntry] = field(default_factory=list)
    sections: List[FileSection] = field(default_factory=list)
    skipped_binary: List[SkippedEntry] = field(default_factory=list)
    skipped_too_large: List[SkippedEntry] = field(default_factory=list)

    @property
    def rendered_count(self) -> int:
        return len(self.sections)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_binary) + len(self.skipped_too_large)

    @property
    def total_files(self) -> int:
        return self.rendered_count + self.skipped_count


def assign_anchors(paths: Iterable[str]) -> List[str]:
    """Slugify each path, appending -2, -3, ... when a slug is already taken."""
    taken = set()
    anchors: List[str] = []
    for rel in paths:
        base = slugify(rel)
        anchor = base
        n = 2
        while anchor in taken:
            anchor = f"{base}-{n}"
            n += 1
        taken.add(anchor)
        anchors.append(anchor)
    return anchors


def assemble_human_view(
    infos: List[FileDescriptor],
    content_provider: ContentProvider = read_text,
    renderer: Renderer | None = None,
    tree_text: str = "",
) -> HumanDocument:
    renderer = renderer or Renderer()
    rendered = [i for i in infos if i.decision is Decision.INCLUDED]
    skipped_binary = [i for i in infos if i.decision is Decision.SKIPPED_BINARY]
    skipped_large = [i for i in infos if i.decision is Decision.SKIPPED_TOO_LARGE]

    doc = HumanDocument(tree_text=tree_text)
    for i, anchor in zip(rendered, assign_anchors(r.relative_path for r in rendered)):
        size_label = bytes_human(i.size_bytes)
        doc.toc.append(TocEntry(i.relative_path, anchor, size_label))
        try:
            text = content_provider(i)
            body_html = renderer.render(text, i.is_markdown, i.relative_path)
            error = None
        except Exception as e:
            logger.warning("Failed to render %s: %s", i.relative_path, e)
            error = str(e)
            body_html = f'<pre class="error">Failed to render: {html.escape(error)}</pre>'
        doc.sections.append(FileSection(i.relative_path, anchor, size_label, body_html, error))

    doc.skipped_binary = [SkippedEntry(i.relative_path, bytes_human(i.size_bytes)) for i in skipped_binary]
    doc.skipped_too_large = [SkippedEntry(i.relative_path, bytes_human(i.size_bytes)) for i in skipped_large]
    return doc
