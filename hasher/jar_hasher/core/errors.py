from __future__ import annotations


class JarHasherError(Exception):
    """Base class for conditions raised by jar_hasher itself."""
    pass


class UnsupportedArchiveError(JarHasherError):
    """The archive carries no manifest, so member hashes cannot be read from it."""
    pass


class ManifestFormatError(JarHasherError, ValueError):
    """Manifest text is not well-formed."""

    def __init__(self, message: str, section: str | None = None):
        if section is not None:
            message = f"{message} (section {section!r})"
        super().__init__(message)
        self.section = section


class MalformedHashError(JarHasherError, ValueError):
    """A digest attribute value is not valid hash text."""

    def __init__(self, message: str, entry: str | None = None):
        if entry is not None:
            message = f"{entry}: {message}"
        super().__init__(message)
        self.entry = entry
