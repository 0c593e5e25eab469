# jar_hasher/paths.py
from __future__ import annotations
from pathlib import PurePosixPath

# ---- Archive layout (fixed by the jar format) ----
META_INF_DIR: str  = "META-INF/"
MANIFEST_NAME: str = str(PurePosixPath(META_INF_DIR) / "MANIFEST.MF")

# ---- Digest attribute written by the jar producer, one per member section ----
DIGEST_ATTRIBUTE_NAME: str = "Murmur3-128-Digest"

# ---- Manifest text limits ----
MANIFEST_VERSION: str      = "1.0"
MANIFEST_LINE_WIDTH: int   = 72     # bytes per written line, including the leading space of continuations
MANIFEST_MAX_LINE: int     = 512    # longest line accepted on read

# ---- Streaming ----
READ_CHUNK_SIZE: int = 1024 * 1024

__all__ = [
    "META_INF_DIR", "MANIFEST_NAME",
    "DIGEST_ATTRIBUTE_NAME",
    "MANIFEST_VERSION", "MANIFEST_LINE_WIDTH", "MANIFEST_MAX_LINE",
    "READ_CHUNK_SIZE",
]
