"""CXML text for LLM consumption."""

from __future__ import annotations

from typing import Callable, List

from .classify import FileDescriptor
from .human_view import read_text


def generate_cxml_text(
    infos: List[FileDescriptor],
    content_provider: Callable[[FileDescriptor], str] = read_text,
) -> str:
    lines = ["<documents>"]

    rendered = [i for i in infos if i.included]
    for index, i in enumerate(rendered, 1):
        lines.append(f'<document index="{index}">')
        lines.append(f"<source>{i.relative_path}</source>")
        lines.append("<document_content>")

        try:
            lines.append(content_provider(i))
        except Exception as e:
            lines.append(f"Failed to read: {e}")

        lines.append("</document_content>")
        lines.append("</document>")

    lines.append("</documents>")
    return "\n".join(lines)
