import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hashref.models import FileEntry  # noqa: E402

SAMPLE_TEXT = (
    "Here is a var #600 and another #601.\n"
    "  This one is #500.\n"
    "  Mistakes: #12 (too short), #1234 (too long), #abc (not digits).\n"
    "  Duplicate #600."
)


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT


@pytest.fixture
def write_file(tmp_path):
    def _write(name, content, encoding="utf-8"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode(encoding))
        return path

    return _write


@pytest.fixture
def entry_for():
    def _entry(path, content_type=""):
        return FileEntry(name=path.name, path=path, relative_path=path.name, content_type=content_type)

    return _entry
