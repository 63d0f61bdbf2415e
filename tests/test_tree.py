import pytest

from repo_flattener.errors import WalkError
from repo_flattener.tree import generate_tree


def test_directories_first_then_names(make_tree):
    root = make_tree({
        "README.md": "r",
        "a.txt": "a",
        "src/main.py": "m",
        "src/util/x.py": "x",
        ".git/HEAD": "h",
    })
    (root / "docs").mkdir()

    assert generate_tree(root) == "\n".join([
        "repo",
        "├── docs",
        "├── src",
        "│   ├── util",
        "│   │   └── x.py",
        "│   └── main.py",
        "├── README.md",
        "└── a.txt",
    ])


def test_shows_files_the_classifier_skips(make_tree):
    root = make_tree({"logo.png": b"\x89PNG", "big.txt": "x" * 60000})
    assert generate_tree(root).splitlines()[1:] == ["├── big.txt", "└── logo.png"]


def test_nested_git_excluded(make_tree):
    root = make_tree({"a/.git/config": "c", "a/b.txt": "b"})
    assert ".git" not in generate_tree(root)


def test_empty_root(make_tree):
    root = make_tree({})
    assert generate_tree(root) == "repo"


def test_missing_root(tmp_path):
    with pytest.raises(WalkError):
        generate_tree(tmp_path / "missing")
