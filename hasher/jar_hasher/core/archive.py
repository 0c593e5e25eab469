from __future__ import annotations
import shutil, tempfile, zipfile
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator

from ..paths import READ_CHUNK_SIZE

# non-seekable input is buffered in memory up to this size, then on disk
_SPOOL_MAX = 16 * READ_CHUNK_SIZE


@dataclass(frozen=True)
class ArchiveEntry:
    name: str
    size: int
    is_dir: bool
    _info: zipfile.ZipInfo = field(repr=False, compare=False)


class ArchiveReader:
    """
    Sequential cursor over the members of a zip/jar stream, in the order they
    are stored (local header offset), not name order.

        with fs.new_file_input_stream(rel) as f, ArchiveReader(f) as arc:
            for entry in arc.entries():
                with arc.open(entry) as body:
                    ...

    The zip directory sits at the end of the archive, so a stream that cannot
    seek is first copied into a spooled temporary file.
    """

    def __init__(self, stream: BinaryIO):
        self._spool = None
        if not stream.seekable():
            self._spool = tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX)
            shutil.copyfileobj(stream, self._spool, READ_CHUNK_SIZE)
            self._spool.seek(0)
            stream = self._spool
        try:
            # BadZipFile propagates: the bytes are not an archive
            self._zip = zipfile.ZipFile(stream)
        except Exception:
            self._close_spool()
            raise

    def entries(self) -> Iterator[ArchiveEntry]:
        infos = sorted(self._zip.infolist(), key=lambda i: i.header_offset)
        for info in infos:
            yield ArchiveEntry(info.filename, info.file_size, info.is_dir(), info)

    def open(self, entry: ArchiveEntry) -> BinaryIO:
        """Stream positioned at the start of entry's content, inflated if stored compressed."""
        return self._zip.open(entry._info)

    def _close_spool(self) -> None:
        if self._spool is not None:
            self._spool.close()
            self._spool = None

    def close(self) -> None:
        try:
            self._zip.close()
        finally:
            self._close_spool()

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
