from __future__ import annotations
import enum
from dataclasses import dataclass

_HEX_DIGITS = "0123456789abcdef"


class HashCode:
    """
    Immutable hash value of at least one byte.
    Canonical text form is lowercase hex, two characters per byte.
    """

    __slots__ = ("_bytes",)

    def __init__(self, raw: bytes):
        if not raw:
            raise ValueError("a HashCode must contain at least one byte")
        self._bytes = bytes(raw)

    @staticmethod
    def from_string(text: str) -> "HashCode":
        """Parse canonical hex text. Uppercase digits are not canonical and are rejected."""
        if len(text) < 2:
            raise ValueError(f"input string ({text!r}) must have at least 2 characters")
        if len(text) % 2 != 0:
            raise ValueError(f"input string ({text!r}) must have an even number of characters")
        for ch in text:
            if ch not in _HEX_DIGITS:
                raise ValueError(f"illegal hexadecimal character: {ch!r}")
        return HashCode(bytes.fromhex(text))

    @staticmethod
    def from_bytes(raw: bytes) -> "HashCode":
        return HashCode(raw)

    def as_bytes(self) -> bytes:
        return self._bytes

    def bits(self) -> int:
        return len(self._bytes) * 8

    def __str__(self) -> str:
        return self._bytes.hex()

    def __repr__(self) -> str:
        return f"HashCode({self._bytes.hex()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashCode):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)


class FileType(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"
    ARCHIVE = "archive"


@dataclass(frozen=True)
class HashCodeAndFileType:
    """Unit of content identity in the build cache: a hash plus what kind of path it describes."""
    hash_code: HashCode
    file_type: FileType

    @staticmethod
    def of_file(hash_code: HashCode) -> "HashCodeAndFileType":
        return HashCodeAndFileType(hash_code, FileType.FILE)

    @staticmethod
    def of_directory(hash_code: HashCode) -> "HashCodeAndFileType":
        return HashCodeAndFileType(hash_code, FileType.DIRECTORY)

    @staticmethod
    def of_archive(hash_code: HashCode) -> "HashCodeAndFileType":
        return HashCodeAndFileType(hash_code, FileType.ARCHIVE)
