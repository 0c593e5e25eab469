from __future__ import annotations
import logging
from pathlib import Path, PurePath
from typing import BinaryIO

log = logging.getLogger(__name__)


def require_relative(p: str | PurePath) -> PurePath:
    """Reject absolute paths; callers pass paths scoped to a project root."""
    path = p if isinstance(p, PurePath) else PurePath(p)
    if path.is_absolute():
        raise ValueError(f"expected a path relative to the project root, got {str(path)!r}")
    return path


class ProjectFilesystem:
    """Read-only view of the files under one project root."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def resolve(self, rel: str | PurePath) -> Path:
        return self.root / require_relative(rel)

    def exists(self, rel: str | PurePath) -> bool:
        return self.resolve(rel).is_file()

    def new_file_input_stream(self, rel: str | PurePath) -> BinaryIO:
        """Open rel for sequential binary reads. Use as a context manager.
        OSError (missing file, permissions) propagates to the caller.
        """
        p = self.resolve(rel)
        log.debug("opening %s", p)
        return p.open("rb")

    def __repr__(self) -> str:
        return f"ProjectFilesystem({str(self.root)!r})"
