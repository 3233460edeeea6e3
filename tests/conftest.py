import pytest


@pytest.fixture
def write_file(tmp_path):
    """Create `tmp_path/<name>` holding `content` (str or bytes), return its path."""

    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_bytes(content)
        return str(path)

    return _write
