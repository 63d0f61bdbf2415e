#!/usr/bin/env python3
"""
Flatten a GitHub repo into a single static HTML page for fast skimming and Ctrl+F.

Usage
    repo-flattener https://github.com/user/repo -o out.html --text out.txt
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib
import sys
import tempfile
import webbrowser
from typing import List

from .config import Settings
from .errors import FlattenError, InvalidReference
from .pipeline import flatten_repo, parse_reference
from .render import bytes_human


def derive_temp_output_path(repo_name: str) -> pathlib.Path:
    return pathlib.Path(tempfile.gettempdir()) / f"{repo_name}.html"


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Flatten a GitHub repo to a single HTML page")
    ap.add_argument("repo_url", help="GitHub repo URL (https://github.com/owner/repo[.git])")
    ap.add_argument("-o", "--out", help="Output HTML file path (default: temporary file derived from repo name)")
    ap.add_argument("--text", help="Also write the CXML text view to this path")
    ap.add_argument("--max-bytes", type=int, default=settings.max_bytes, help="Max file size to render (bytes); larger files are listed but skipped")
    ap.add_argument("--branch", default=settings.branch, help="Branch whose archive is downloaded")
    ap.add_argument("--no-open", action="store_true", help="Don't open the HTML file in browser after generation")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log pipeline progress")
    return ap


def main(argv: List[str] | None = None) -> int:
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level, stream=sys.stderr)
    settings = dataclasses.replace(settings, max_bytes=args.max_bytes, branch=args.branch)

    try:
        ref = parse_reference(args.repo_url)
    except InvalidReference as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    out_path = pathlib.Path(args.out) if args.out else derive_temp_output_path(ref.repo)

    print(f"Fetching {ref.url} ({settings.branch})", file=sys.stderr)
    try:
        result = flatten_repo(args.repo_url, settings)
    except FlattenError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    doc = result.document
    print(f"Found {doc.total_files} files total ({doc.rendered_count} rendered, {doc.skipped_count} skipped)", file=sys.stderr)

    out_path.write_text(result.to_html(), encoding="utf-8")
    print(f"Wrote {bytes_human(out_path.stat().st_size)} to {out_path}", file=sys.stderr)

    if args.text:
        text_path = pathlib.Path(args.text)
        text_path.write_text(result.cxml_text, encoding="utf-8")
        print(f"Wrote CXML text to {text_path}", file=sys.stderr)

    if not args.no_open:
        webbrowser.open(f"file://{out_path.resolve()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
