import pathlib

from repo_flattener.classify import Decision, FileDescriptor, extension_of
from repo_flattener.flat_text import generate_cxml_text


def fd(rel, decision=Decision.INCLUDED):
    return FileDescriptor(rel, 1, decision, extension_of(rel), pathlib.Path("/nonexistent") / rel)


def provide(contents):
    def read(info):
        value = contents[info.relative_path]
        if isinstance(value, Exception):
            raise value
        return value
    return read


def test_exact_format():
    infos = [
        fd("README.md"),
        fd("logo.png", Decision.SKIPPED_BINARY),
        fd("src/a <b>.py"),
        fd("big.c", Decision.SKIPPED_TOO_LARGE),
    ]
    text = generate_cxml_text(infos, provide({"README.md": "# hi", "src/a <b>.py": "x = 1\n"}))
    assert text == "\n".join([
        "<documents>",
        '<document index="1">',
        "<source>README.md</source>",
        "<document_content>",
        "# hi",
        "</document_content>",
        "</document>",
        '<document index="2">',
        "<source>src/a <b>.py</source>",
        "<document_content>",
        "x = 1\n",
        "</document_content>",
        "</document>",
        "</documents>",
    ])


def test_empty_input():
    assert generate_cxml_text([], provide({})) == "<documents>\n</documents>"


def test_read_failure_uses_placeholder():
    infos = [fd("a.txt"), fd("b.txt")]
    text = generate_cxml_text(infos, provide({"a.txt": OSError("no such file"), "b.txt": "ok"}))
    assert "<source>a.txt</source>\n<document_content>\nFailed to read: no such file\n</document_content>" in text
    assert '<document index="2">\n<source>b.txt</source>' in text


def test_indices_have_no_gaps_and_output_is_deterministic():
    infos = [fd(f"f{n}.txt", Decision.SKIPPED_BINARY if n % 3 == 0 else Decision.INCLUDED) for n in range(10)]
    contents = {i.relative_path: i.relative_path.upper() for i in infos}
    first = generate_cxml_text(infos, provide(contents))
    second = generate_cxml_text(infos, provide(contents))
    assert first == second
    included = [i.relative_path for i in infos if i.included]
    for index, rel in enumerate(included, 1):
        assert f'<document index="{index}">\n<source>{rel}</source>' in first
    assert f'<document index="{len(included) + 1}">' not in first
    assert "<source>f0.txt</source>" not in first


def test_reads_from_disk_by_default(tmp_path):
    p = tmp_path / "a.txt"
    p.write_text("café", encoding="utf-8")
    info = FileDescriptor("a.txt", p.stat().st_size, Decision.INCLUDED, ".txt", p)
    assert "\ncafé\n" in generate_cxml_text([info])
