import pytest


@pytest.fixture
def workspace(tmp_path):
    """
    A small project:
        README.md
        src/app.py
        src/util/helpers.py
        assets/logo.bin      (contains NUL bytes)
        node_modules/lib/index.js
        .hidden/secret.txt
    """
    root = tmp_path / "project"
    files = {
        "README.md": "# Project\n",
        "src/app.py": "print('app')\n",
        "src/util/helpers.py": "def helper():\n    return 1\n",
        "node_modules/lib/index.js": "module.exports = {};\n",
        ".hidden/secret.txt": "secret\n",
    }
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    logo = root / "assets" / "logo.bin"
    logo.parent.mkdir(parents=True, exist_ok=True)
    logo.write_bytes(b"\x89PNG\x00\x00\x01\x02")
    return root
