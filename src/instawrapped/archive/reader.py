"""
Read-only access to an export archive held in memory.

Only three things are needed from the ZIP container: open it, read one entry
as text, and list entries under a prefix. A missing entry is reported as
``None`` and never raises; only bytes that are not a ZIP container are an
error.
"""

from __future__ import annotations

import asyncio
import io
import logging
import threading
import zipfile
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


class ArchiveError(ValueError):
    """Raised when the input is not a readable archive container."""

    pass


class Archive:
    """An opened export archive."""

    def __init__(self, zip_file: zipfile.ZipFile) -> None:
        self._zip = zip_file
        # One underlying file object is shared by every entry read.
        self._lock = threading.Lock()
        self._names = [info.filename for info in zip_file.infolist() if not info.is_dir()]
        self._name_set = frozenset(self._names)

    def __enter__(self) -> "Archive":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._zip.close()

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def exists(self, path: str) -> bool:
        return path in self._name_set

    def list_files(self, prefix: str = "") -> Iterator[str]:
        """Yield file paths starting with prefix, in archive order."""
        return (name for name in self._names if name.startswith(prefix))

    def resolve_root(self, roots: Iterable[str]) -> Optional[str]:
        """Return the first root prefix that holds at least one file."""
        for root in roots:
            if next(self.list_files(root), None) is not None:
                return root
        return None

    def _read_sync(self, path: str) -> Optional[str]:
        if path not in self._name_set:
            return None
        try:
            with self._lock:
                data = self._zip.read(path)
        except (KeyError, OSError, zipfile.BadZipFile, RuntimeError, EOFError) as e:
            logger.warning("Could not read archive entry %s: %s", path, e)
            return None
        return data.decode("utf-8", errors="replace")

    async def read_text(self, path: str) -> Optional[str]:
        """Read an entry as text, or None when it is missing or unreadable."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_sync, path)

    async def read_first(self, paths: Iterable[str]) -> Optional[tuple[str, str]]:
        """Read the first existing path of several alternates."""
        for path in paths:
            text = await self.read_text(path)
            if text is not None:
                return path, text
        return None


class ArchiveReader:
    """Opens archive bytes."""

    @staticmethod
    def open(data: bytes) -> Archive:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise ArchiveError(f"Expected archive bytes, got {type(data).__name__}")
        try:
            zip_file = zipfile.ZipFile(io.BytesIO(bytes(data)))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError, EOFError) as e:
            raise ArchiveError(f"Not a valid archive: {e}") from e
        logger.debug("Opened archive with %d entries", len(zip_file.namelist()))
        return Archive(zip_file)
