"""Storage abstraction for wiki pages."""

import asyncio
import logging
import os
import tempfile
import weakref
from abc import ABC, abstractmethod
from pathlib import Path

from plainwiki.core.errors import PersistenceError
from plainwiki.core.models import Page

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def load(self, title: str) -> Page | None:
        """Load a page by title. Returns None if it cannot be read."""
        ...

    @abstractmethod
    async def save(self, page: Page) -> None:
        """Save a page, replacing any previous content.

        Raises PersistenceError if the page could not be written.
        """
        ...


class PageStore(Storage):
    """Flat-file storage implementation.

    Each page is one file named ``Title.txt`` holding the raw body bytes.
    Writes go to a temporary file that is renamed over the target, and
    saves to the same title are serialized.
    """

    SUFFIX = ".txt"
    # Owner read/write only
    FILE_MODE = 0o600

    def __init__(self, base_path: Path):
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _title_to_filename(self, title: str) -> str:
        """Convert page title to filename."""
        return title + self.SUFFIX

    def path_for(self, title: str) -> Path:
        """Get full path for a page."""
        return self.base_path / self._title_to_filename(title)

    def _lock_for(self, title: str) -> asyncio.Lock:
        """Get the write lock for a title, alive only while someone holds it."""
        lock = self._locks.get(title)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[title] = lock
        return lock

    def _write_file(self, path: Path, body: bytes) -> None:
        """Replace ``path`` with ``body`` in one rename."""
        fd, tmp_name = tempfile.mkstemp(
            dir=self.base_path, prefix=f".{path.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                os.fchmod(fh.fileno(), self.FILE_MODE)
                fh.write(body)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def load(self, title: str) -> Page | None:
        """Load a page by title."""
        path = self.path_for(title)
        try:
            body = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            # Missing and unreadable pages are both treated as absent
            logger.debug("Page %s not loaded: %s", title, exc)
            return None
        return Page(title=title, body=body)

    async def save(self, page: Page) -> None:
        """Save a page."""
        path = self.path_for(page.title)
        async with self._lock_for(page.title):
            try:
                await asyncio.to_thread(self._write_file, path, page.body)
            except OSError as exc:
                raise PersistenceError(str(exc)) from exc
        logger.info("Saved page %s (%d bytes)", page.title, len(page.body))
