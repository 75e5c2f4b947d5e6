import os

import pytest


def build(root, layout):
    """Create files and dirs under `root`.

    `layout` maps relative paths to a byte count (a file) or None (a directory).
    """
    for rel, size in layout.items():
        p = root / rel
        if size is None:
            p.mkdir(parents=True, exist_ok=True)
        else:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(b"x" * size)
    return root


@pytest.fixture
def make_tree(tmp_path):
    def _make(layout):
        return build(tmp_path, layout)
    return _make


@pytest.fixture
def scenario_tree(make_tree):
    return make_tree({
        "a.txt": 10,
        "b.txt": 20,
        "README": 5,
        "sub": None,
    })


@pytest.fixture
def can_symlink(tmp_path):
    probe = tmp_path / ".probe"
    try:
        os.symlink(tmp_path, probe)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")
    probe.unlink()
