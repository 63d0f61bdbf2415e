import pathlib
import zipfile
from typing import Dict, List, Union

import pytest

from repo_flattener import pipeline
from repo_flattener.config import Settings

Content = Union[str, bytes]

SAMPLE_REPO: Dict[str, Content] = {
    "repo-main/README.md": "# Hello\n\nSome *text*.\n",
    "repo-main/src/main.py": "def main():\n    return 1\n",
    "repo-main/src/big.c": "x" * 60000,
    "repo-main/logo.png": b"not really a png",
    "repo-main/data.bin2": b"abc\x00def",
}


def write_tree(root: pathlib.Path, files: Dict[str, Content]) -> pathlib.Path:
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content, encoding="utf-8")
    return root


def write_zip(dest: pathlib.Path, files: Dict[str, Content]) -> None:
    with zipfile.ZipFile(dest, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)


class FakeFetcher:
    """Stands in for download_archive; writes a zip built from ``files``."""

    def __init__(self, files: Dict[str, Content] | None = None, error: Exception | None = None):
        self.files = SAMPLE_REPO if files is None else files
        self.error = error
        self.calls: List[str] = []
        self.staging_dirs: List[pathlib.Path] = []

    def __call__(self, url: str, dest: pathlib.Path, timeout: float) -> None:
        self.calls.append(url)
        self.staging_dirs.append(dest.parent)
        if self.error is not None:
            raise self.error
        write_zip(dest, self.files)


@pytest.fixture
def make_tree(tmp_path):
    def make(files: Dict[str, Content], name: str = "repo") -> pathlib.Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_tree(root, files)
    return make


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def offline_flatten(fake_fetcher):
    """flatten_repo bound to the fake fetcher, same call signature as used by the entry points."""
    def run(repo_url, settings=None):
        return pipeline.flatten_repo(repo_url, settings or Settings(), fetch=fake_fetcher)
    return run
