from .core import (
    HashCode, FileType, HashCodeAndFileType, ProjectFilesystem,
    JarHasherError, UnsupportedArchiveError, ManifestFormatError, MalformedHashError,
)
from .jar_content_hasher import ContentHashes, ContentHashResult, JarContentHasher, DefaultJarContentHasher
from .fallback import hash_archive_members, content_hashes_with_fallback

__version__ = "0.1.0"
