from pathlib import Path, PurePosixPath

import pytest

from jar_hasher.core.io import ProjectFilesystem, require_relative


def test_require_relative_accepts_str_and_paths():
    assert require_relative("a/b.jar") == PurePosixPath("a/b.jar")
    assert require_relative(Path("a/b.jar")) == Path("a/b.jar")


@pytest.mark.parametrize("p", ["/abs/lib.jar", Path("/abs/lib.jar")])
def test_require_relative_rejects_absolute(p):
    with pytest.raises(ValueError, match="relative"):
        require_relative(p)


def test_open_reads_under_root(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "f.bin").write_bytes(b"abc")
    fs = ProjectFilesystem(tmp_path)
    assert fs.resolve("sub/f.bin") == tmp_path / "sub" / "f.bin"
    assert fs.exists("sub/f.bin")
    assert not fs.exists("sub")
    with fs.new_file_input_stream("sub/f.bin") as f:
        assert f.read() == b"abc"


def test_open_missing_raises_oserror(project):
    with pytest.raises(FileNotFoundError):
        project.new_file_input_stream("nope.jar")
