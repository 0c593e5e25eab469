from __future__ import annotations
import logging, re
from collections.abc import Iterator, MutableMapping
from typing import BinaryIO

from ..paths import MANIFEST_LINE_WIDTH, MANIFEST_MAX_LINE, MANIFEST_VERSION
from .errors import ManifestFormatError

log = logging.getLogger(__name__)

MANIFEST_VERSION_KEY = "Manifest-Version"
_NAME_KEY = "Name"
_NAME_PREFIX = b"name: "
_NAME_RE = re.compile(r"[A-Za-z0-9_-]{1,70}")
_LINE_RE = re.compile(rb"\r\n|\n|\r")


class Attributes(MutableMapping):
    """
    Header name -> value for one manifest section.
    Names compare case-insensitively; the spelling used first is kept for output.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, tuple[str, str]] = {}
        if initial:
            self.update(initial)

    @staticmethod
    def _key(name: str) -> str:
        if not isinstance(name, str) or not _NAME_RE.fullmatch(name):
            raise ValueError(f"invalid header field name: {name!r}")
        return name.lower()

    def get_value(self, name: str) -> str | None:
        return self.get(name)

    def __getitem__(self, name: str) -> str:
        return self._data[self._key(name)][1]

    def __setitem__(self, name: str, value: str) -> None:
        k = self._key(name)
        prev = self._data.get(k)
        self._data[k] = (prev[0] if prev else name, value)

    def __delitem__(self, name: str) -> None:
        del self._data[self._key(name)]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str) or not _NAME_RE.fullmatch(name):
            return False
        return name.lower() in self._data

    def __iter__(self) -> Iterator[str]:
        return (orig for orig, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Attributes({dict(self.items())!r})"


# ---- reading ----

def _split_lines(data: bytes) -> list[bytes]:
    # Every line, the last included, must end in CR, LF or CRLF.
    lines: list[bytes] = []
    pos = 0
    for m in _LINE_RE.finditer(data):
        if m.end() - pos > MANIFEST_MAX_LINE:
            raise ManifestFormatError(f"manifest line too long (line {len(lines) + 1})")
        lines.append(data[pos:m.start()])
        pos = m.end()
    if pos < len(data):
        if len(data) - pos > MANIFEST_MAX_LINE:
            raise ManifestFormatError(f"manifest line too long (line {len(lines) + 1})")
        raise ManifestFormatError(f"manifest line {len(lines) + 1} has no line terminator")
    return lines


def _logical_lines(lines: list[bytes], start: int) -> tuple[list[bytes], int]:
    """
    Collect the header lines of one section beginning at start, folding
    continuation lines into the header they continue. Returns (headers, index
    of the line after the terminating blank line).
    """
    out: list[bytes] = []
    i = start
    while i < len(lines):
        line = lines[i]
        i += 1
        if not line:
            break
        if line[:1] == b" ":
            if not out:
                raise ManifestFormatError(f"misplaced continuation line (line {i})")
            out[-1] += line[1:]
            continue
        out.append(line)
    return out, i


def _parse_header(raw: bytes, section: str | None) -> tuple[str, str]:
    sep = raw.find(b": ")
    if sep <= 0:
        raise ManifestFormatError(f"invalid header field: {raw[:40]!r}", section)
    try:
        name = raw[:sep].decode("ascii")
        value = raw[sep + 2:].decode("utf-8")
    except UnicodeDecodeError as e:
        raise ManifestFormatError(f"invalid header encoding: {e}", section) from e
    if not _NAME_RE.fullmatch(name):
        raise ManifestFormatError(f"invalid header field name: {name!r}", section)
    return name, value


def _read_into(attrs: Attributes, headers: list[bytes], section: str | None) -> None:
    for raw in headers:
        name, value = _parse_header(raw, section)
        if name in attrs:
            log.debug("duplicate attribute %s in section %s; keeping the later value", name, section)
        attrs[name] = value


class Manifest:
    """
    Jar manifest: a main section followed by named per-entry sections.

        Manifest-Version: 1.0

        Name: com/example/Foo.class
        Murmur3-128-Digest: 0f1e...

    Sections are separated by blank lines. A line starting with one space
    continues the previous line.
    """

    def __init__(self):
        self.main_attributes = Attributes()
        self.entries: dict[str, Attributes] = {}

    def get_attributes(self, name: str) -> Attributes | None:
        return self.entries.get(name)

    # ---- reading ----

    @staticmethod
    def read(stream: BinaryIO) -> "Manifest":
        return Manifest.parse(stream.read())

    @staticmethod
    def parse(data: bytes) -> "Manifest":
        man = Manifest()
        lines = _split_lines(data)

        headers, i = _logical_lines(lines, 0)
        _read_into(man.main_attributes, headers, None)

        while i < len(lines):
            if not lines[i]:
                i += 1  # extra blank lines between sections
                continue
            headers, i = _logical_lines(lines, i)
            first = headers[0]
            if first[:len(_NAME_PREFIX)].lower() != _NAME_PREFIX:
                raise ManifestFormatError(f"section does not start with 'Name:' ({first[:40]!r})")
            try:
                name = first[len(_NAME_PREFIX):].decode("utf-8")
            except UnicodeDecodeError as e:
                raise ManifestFormatError(f"invalid section name encoding: {e}") from e

            attrs = man.entries.get(name)
            if attrs is None:
                attrs = man.entries[name] = Attributes()
            else:
                # later section merges over the earlier one
                log.debug("duplicate manifest section %s", name)
            _read_into(attrs, headers[1:], name)
        return man

    # ---- writing ----

    def write(self, stream: BinaryIO) -> None:
        stream.write(self.to_bytes())

    def to_bytes(self) -> bytes:
        out: list[bytes] = []
        main = self.main_attributes
        # the version header always leads the main section
        version = main.get(MANIFEST_VERSION_KEY, MANIFEST_VERSION)
        out.append(_fold(f"{MANIFEST_VERSION_KEY}: {version}"))
        for k, v in main.items():
            if k.lower() != MANIFEST_VERSION_KEY.lower():
                out.append(_fold(f"{k}: {v}"))
        out.append(b"\r\n")
        for name, attrs in self.entries.items():
            out.append(_fold(f"{_NAME_KEY}: {name}"))
            for k, v in attrs.items():
                out.append(_fold(f"{k}: {v}"))
            out.append(b"\r\n")
        return b"".join(out)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Manifest):
            return NotImplemented
        return (dict(self.main_attributes) == dict(other.main_attributes)
                and {n: dict(a) for n, a in self.entries.items()}
                == {n: dict(a) for n, a in other.entries.items()})


def _fold(line: str) -> bytes:
    """Encode one header and break it into lines of at most MANIFEST_LINE_WIDTH bytes."""
    raw = line.encode("utf-8")
    width = MANIFEST_LINE_WIDTH
    parts: list[bytes] = []
    while len(raw) > width:
        cut = width
        # never split a multi-byte UTF-8 sequence
        while cut > 0 and (raw[cut] & 0xC0) == 0x80:
            cut -= 1
        parts.append(raw[:cut])
        raw = raw[cut:]
        width = MANIFEST_LINE_WIDTH - 1
    parts.append(raw)
    return b"\r\n ".join(parts) + b"\r\n"
