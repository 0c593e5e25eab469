from __future__ import annotations
import logging
from pathlib import PurePath
from types import MappingProxyType
from typing import BinaryIO

import xxhash

from .paths import READ_CHUNK_SIZE
from .core.archive import ArchiveReader
from .core.errors import UnsupportedArchiveError
from .core.hashcode import HashCode, HashCodeAndFileType
from .core.io import ProjectFilesystem
from .jar_content_hasher import ContentHashes, JarContentHasher

log = logging.getLogger(__name__)


def _hstream(f: BinaryIO) -> HashCode:
    h = xxhash.xxh3_128()
    for chunk in iter(lambda: f.read(READ_CHUNK_SIZE), b""):
        h.update(chunk)
    return HashCode.from_bytes(h.digest())


def hash_archive_members(filesystem: ProjectFilesystem, jar_relative_path: str | PurePath) -> ContentHashes:
    """Hash every file member's bytes (xxh3-128), in stored order. Directories are skipped."""
    hashes: dict[str, HashCodeAndFileType] = {}
    with filesystem.new_file_input_stream(jar_relative_path) as f, ArchiveReader(f) as arc:
        for entry in arc.entries():
            if entry.is_dir:
                continue
            with arc.open(entry) as body:
                hashes[entry.name] = HashCodeAndFileType.of_file(_hstream(body))
    log.debug("%s: hashed %d members", jar_relative_path, len(hashes))
    return MappingProxyType(hashes)


def content_hashes_with_fallback(hasher: JarContentHasher, filesystem: ProjectFilesystem) -> ContentHashes:
    """
    Manifest digests when the archive has them; otherwise hash member bytes.
    Only the unsupported case falls back. Every other failure propagates.
    """
    try:
        return hasher.get_content_hashes()
    except UnsupportedArchiveError as e:
        log.warning("%s: %s Hashing member contents instead.", hasher.get_jar_relative_path(), e)
    return hash_archive_members(filesystem, hasher.get_jar_relative_path())
