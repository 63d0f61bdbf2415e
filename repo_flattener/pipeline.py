"""
Download a GitHub repository archive, extract it into a temporary staging
directory, and build both views of its contents.

The staging directory lives exactly as long as one call to ``flatten_repo``
and is removed on every exit path.
"""

from __future__ import annotations

import contextlib
import logging
import pathlib
import re
import shutil
import tempfile
import zipfile
from dataclasses import dataclass
from typing import Callable, Iterator, List

import requests

from .classify import FileDescriptor
from .config import Settings
from .errors import ExtractionError, InvalidReference, RetrievalError
from .flat_text import generate_cxml_text
from .human_view import HumanDocument, assemble_human_view, read_text
from .page import build_html
from .render import Renderer
from .tree import generate_tree
from .walker import walk

logger = logging.getLogger(__name__)

ARCHIVE_NAME = "repo.zip"
CHUNK_SIZE = 64 * 1024

_GITHUB_URL = re.compile(
    r"^(?:https?://)?github\.com/"
    r"(?P<owner>[A-Za-z0-9_.-]+)/(?P<repo>[A-Za-z0-9_.-]+?)(?:\.git)?(?:/.*)?$"
)

Fetcher = Callable[[str, pathlib.Path, float], None]


@dataclass(frozen=True)
class RepoReference:
    owner: str
    repo: str

    @property
    def url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"

    def archive_url(self, branch: str) -> str:
        return f"{self.url}/archive/refs/heads/{branch}.zip"


@dataclass
class FlattenResult:
    reference: RepoReference
    document: HumanDocument
    cxml_text: str
    descriptors: List[FileDescriptor]

    def to_html(self, renderer: Renderer | None = None) -> str:
        return build_html(self.reference.url, self.document, self.cxml_text, renderer)


def parse_reference(repo_url: str) -> RepoReference:
    """Validate a GitHub URL and split it into owner and repository name."""
    if not isinstance(repo_url, str) or not repo_url.strip():
        raise InvalidReference(str(repo_url), "empty repository URL")
    m = _GITHUB_URL.match(repo_url.strip())
    if not m:
        raise InvalidReference(repo_url)
    owner, repo = m.group("owner"), m.group("repo")
    if repo.endswith(".git"):
        repo = repo[:-4]
    if not repo or set(owner) == {"."} or set(repo) == {"."}:
        raise InvalidReference(repo_url, "owner and repository must be real names")
    return RepoReference(owner, repo)


def download_archive(url: str, dest: pathlib.Path, timeout: float) -> None:
    try:
        with requests.get(url, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            with dest.open("wb") as f:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise RetrievalError(url, f"Download of {url} failed with HTTP {status}", status) from e
    except requests.RequestException as e:
        raise RetrievalError(url, f"Download of {url} failed: {e}") from e


def extract_archive(archive: pathlib.Path, dest: pathlib.Path) -> pathlib.Path:
    """Extract ``archive`` into ``dest`` and return its single top-level directory."""
    dest_resolved = dest.resolve()
    try:
        with zipfile.ZipFile(archive) as zf:
            for name in zf.namelist():
                target = (dest_resolved / name).resolve()
                if target != dest_resolved and dest_resolved not in target.parents:
                    raise ExtractionError(f"Archive entry escapes the staging area: {name}")
            zf.extractall(dest)
    except zipfile.BadZipFile as e:
        raise ExtractionError(f"Corrupt archive: {e}") from e
    except OSError as e:
        raise ExtractionError(f"Cannot extract archive: {e}") from e

    dirs = sorted(p for p in dest.iterdir() if p.is_dir())
    if not dirs:
        raise ExtractionError("No extracted directory found.")
    if len(dirs) > 1:
        names = ", ".join(p.name for p in dirs)
        raise ExtractionError(f"Expected one top-level directory in the archive, found: {names}")
    return dirs[0]


@contextlib.contextmanager
def staging_area() -> Iterator[pathlib.Path]:
    tmpdir = tempfile.mkdtemp(prefix="flatten_repo_")
    logger.info("Staging in %s", tmpdir)
    try:
        yield pathlib.Path(tmpdir)
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)
        logger.debug("Removed staging directory %s", tmpdir)


def flatten_repo(
    repo_url: str,
    settings: Settings | None = None,
    fetch: Fetcher = download_archive,
    renderer: Renderer | None = None,
) -> FlattenResult:
    settings = settings or Settings()
    ref = parse_reference(repo_url)
    zip_url = ref.archive_url(settings.branch)

    with staging_area() as tmpdir:
        archive = tmpdir / ARCHIVE_NAME
        logger.info("Downloading %s", zip_url)
        fetch(zip_url, archive, settings.timeout)

        repo_dir = extract_archive(archive, tmpdir)
        logger.info("Extracted %s", repo_dir.name)

        infos = walk(repo_dir, settings.max_bytes)
        rendered_count = sum(1 for i in infos if i.included)
        logger.info(
            "Found %d files total (%d will be rendered, %d skipped)",
            len(infos), rendered_count, len(infos) - rendered_count,
        )

        tree_text = generate_tree(repo_dir)
        document = assemble_human_view(infos, read_text, renderer, tree_text)
        cxml_text = generate_cxml_text(infos, read_text)

    return FlattenResult(ref, document, cxml_text, infos)
