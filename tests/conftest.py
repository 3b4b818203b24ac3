import pytest


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def src_dir(tmp_path):
    src = tmp_path / "srcDir"
    src.mkdir()
    return src


@pytest.fixture
def src_with_file(src_dir):
    (src_dir / "file.txt").write_text("contents")
    return src_dir


@pytest.fixture
def dest_dir(tmp_path):
    dest = tmp_path / "destDir"
    dest.mkdir()
    return dest
