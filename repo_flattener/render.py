"""
Markdown and syntax-highlighting renderer, plus small display helpers.
"""

from __future__ import annotations

import re

import markdown  # Python-Markdown
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename, guess_lexer
from pygments.util import ClassNotFound

_ANCHOR_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def bytes_human(n: int) -> str:
    """Human-readable bytes: 1 decimal for KiB and above, integer for B."""
    units = ["B", "KiB", "MiB", "GiB", "TiB"]
    f = float(n)
    i = 0
    while f >= 1024.0 and i < len(units) - 1:
        f /= 1024.0
        i += 1
    if i == 0:
        return f"{int(f)} {units[i]}"
    else:
        return f"{f:.1f} {units[i]}"


def slugify(path_str: str) -> str:
    # Keep ASCII alnum, dash, underscore; everything else (including "." and "/") becomes '-'
    return _ANCHOR_UNSAFE.sub("-", path_str)


class Renderer:
    """Turns file text into an HTML fragment.

    Markdown gets structural conversion; everything else is highlighted
    with Pygments, choosing a lexer from the filename when possible and
    guessing from the content otherwise.
    """

    css_class = "highlight"

    def __init__(self, style: str = "default"):
        self.formatter = HtmlFormatter(nowrap=False, style=style, cssclass=self.css_class)

    def stylesheet(self) -> str:
        return self.formatter.get_style_defs(f".{self.css_class}")

    def render_markdown(self, text: str) -> str:
        return markdown.markdown(text, extensions=["fenced_code", "tables"])

    def _lexer_for(self, text: str, filename: str | None):
        if filename:
            try:
                return get_lexer_for_filename(filename, stripall=False)
            except ClassNotFound:
                pass
        try:
            return guess_lexer(text, stripall=False)
        except ClassNotFound:
            return TextLexer(stripall=False)

    def highlight_code(self, text: str, filename: str | None = None) -> str:
        return highlight(text, self._lexer_for(text, filename), self.formatter)

    def render(self, text: str, is_markdown: bool, filename: str | None = None) -> str:
        if is_markdown:
            return f'<div class="markdown-content">{self.render_markdown(text)}</div>'
        return self.highlight_code(text, filename)
