# jar_hasher/jar_content_hasher.py
from __future__ import annotations
import abc, logging
from dataclasses import dataclass
from pathlib import PurePath
from types import MappingProxyType
from typing import Mapping

from .paths import MANIFEST_NAME, DIGEST_ATTRIBUTE_NAME
from .core.archive import ArchiveReader
from .core.errors import MalformedHashError, UnsupportedArchiveError
from .core.hashcode import HashCode, HashCodeAndFileType
from .core.io import ProjectFilesystem, require_relative
from .core.manifest import Manifest

log = logging.getLogger(__name__)

ContentHashes = Mapping[str, HashCodeAndFileType]


class JarContentHasher(abc.ABC):
    """Source of per-member hashes for one archive."""

    @abc.abstractmethod
    def get_jar_relative_path(self) -> str | PurePath: ...

    @abc.abstractmethod
    def get_content_hashes(self) -> ContentHashes: ...


@dataclass(frozen=True)
class ContentHashResult:
    """Either the member hashes, or the reason the archive cannot provide them."""
    hashes: ContentHashes | None = None
    unsupported_reason: str | None = None

    @property
    def supported(self) -> bool:
        return self.hashes is not None


class DefaultJarContentHasher(JarContentHasher):
    """
    Reads member hashes that the jar writer recorded in META-INF/MANIFEST.MF,
    one digest attribute per member section:

        Name: com/example/Foo.class
        Murmur3-128-Digest: 5f3c0a...

    Nothing is cached; every call re-reads the archive.
    """

    def __init__(
        self,
        filesystem: ProjectFilesystem,
        jar_relative_path: str | PurePath,
        manifest_name: str = MANIFEST_NAME,
        digest_attribute: str = DIGEST_ATTRIBUTE_NAME,
    ):
        self.filesystem = filesystem
        require_relative(jar_relative_path)
        self.jar_relative_path = jar_relative_path
        self.manifest_name = manifest_name
        self.digest_attribute = digest_attribute

    def get_jar_relative_path(self) -> str | PurePath:
        return self.jar_relative_path

    def _read_manifest(self) -> Manifest | None:
        with self.filesystem.new_file_input_stream(self.jar_relative_path) as f, ArchiveReader(f) as arc:
            for entry in arc.entries():
                if entry.name.lower() == self.manifest_name.lower():
                    with arc.open(entry) as body:
                        return Manifest.read(body)
        return None

    def _unsupported_message(self) -> str:
        return (
            "Cache does not know how to return hash codes for archive members except "
            f"when the archive contains a {self.manifest_name} with "
            f"{self.digest_attribute} attributes for each file."
        )

    def _project(self, manifest: Manifest) -> ContentHashes:
        hashes: dict[str, HashCodeAndFileType] = {}
        for name, attrs in manifest.entries.items():
            text = attrs.get_value(self.digest_attribute)
            if text is None:
                continue
            try:
                code = HashCode.from_string(text)
            except ValueError as e:
                raise MalformedHashError(str(e), entry=name) from e
            hashes[name] = HashCodeAndFileType.of_file(code)
        log.debug("%s: %d member hashes from manifest", self.jar_relative_path, len(hashes))
        return MappingProxyType(hashes)

    def lookup_content_hashes(self) -> ContentHashResult:
        """Like get_content_hashes, but a missing manifest is a result instead of an exception."""
        manifest = self._read_manifest()
        if manifest is None:
            return ContentHashResult(unsupported_reason=self._unsupported_message())
        return ContentHashResult(hashes=self._project(manifest))

    def get_content_hashes(self) -> ContentHashes:
        """
        Raises UnsupportedArchiveError when the archive has no manifest,
        ManifestFormatError / MalformedHashError on bad manifest text,
        and OSError / zipfile.BadZipFile unchanged.
        """
        res = self.lookup_content_hashes()
        if not res.supported:
            raise UnsupportedArchiveError(res.unsupported_reason)
        return res.hashes

    def __repr__(self) -> str:
        return f"DefaultJarContentHasher({self.filesystem!r}, {str(self.jar_relative_path)!r})"
