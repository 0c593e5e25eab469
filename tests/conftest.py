import pytest

from jar_hasher.core.io import ProjectFilesystem

from jar_builder import SAMPLE_MEMBERS, digest_manifest, write_jar


@pytest.fixture
def project(tmp_path):
    """ProjectFilesystem rooted at a fresh tmp dir."""
    return ProjectFilesystem(tmp_path)


@pytest.fixture
def sample_jar(tmp_path):
    """out/lib.jar with digests for every file member; returns its relative path."""
    write_jar(tmp_path / "out" / "lib.jar", SAMPLE_MEMBERS, digest_manifest(SAMPLE_MEMBERS))
    return "out/lib.jar"
