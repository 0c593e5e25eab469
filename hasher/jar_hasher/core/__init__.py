from .errors import JarHasherError, UnsupportedArchiveError, ManifestFormatError, MalformedHashError
from .hashcode import HashCode, FileType, HashCodeAndFileType
from .io import ProjectFilesystem
from .manifest import Attributes, Manifest
from .archive import ArchiveEntry, ArchiveReader
