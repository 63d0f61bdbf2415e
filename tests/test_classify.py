import pytest

from repo_flattener.classify import (
    BINARY_EXTENSIONS,
    Decision,
    FileDescriptor,
    classify,
    extension_of,
)


def probe_returning(data: bytes):
    calls = []

    def probe() -> bytes:
        calls.append(1)
        return data
    probe.calls = calls
    return probe


def must_not_probe() -> bytes:
    raise AssertionError("probe should not be called")


def test_too_large_never_probes():
    assert classify("src/main.c", 51201, must_not_probe) is Decision.SKIPPED_TOO_LARGE


def test_threshold_is_inclusive():
    probe = probe_returning(b"ok")
    assert classify("a.txt", 51200, probe) is Decision.INCLUDED
    assert len(probe.calls) == 1


@pytest.mark.parametrize("name", ["logo.png", "LOGO.PNG", "fonts/x.Woff2", "lib/a.so"])
def test_binary_extension_skips_without_probe(name):
    assert classify(name, 10, must_not_probe) is Decision.SKIPPED_BINARY


def test_nul_byte_is_binary():
    assert classify("data.dat", 7, probe_returning(b"abc\x00def")) is Decision.SKIPPED_BINARY


def test_probe_failure_is_binary():
    def broken() -> bytes:
        raise PermissionError("denied")
    assert classify("secret.txt", 3, broken) is Decision.SKIPPED_BINARY


def test_empty_file_is_included():
    assert classify("empty.py", 0, probe_returning(b"")) is Decision.INCLUDED


def test_custom_threshold():
    assert classify("a.txt", 11, must_not_probe, max_bytes=10) is Decision.SKIPPED_TOO_LARGE


def test_extension_of():
    assert extension_of("a/b.TXT") == ".txt"
    assert extension_of("dir.d/Makefile") == ""
    assert extension_of(".gitignore") == ""
    assert extension_of("archive.tar.gz") == ".gz"


def test_decision_flags(tmp_path):
    d = FileDescriptor("README.md", 1, Decision.INCLUDED, ".md", tmp_path / "README.md")
    assert d.included and d.is_markdown
    assert not Decision.SKIPPED_BINARY.include
    assert ".png" in BINARY_EXTENSIONS
