from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

try:
    import fcntl

    _HAS_FLOCK = True
except ImportError:
    _HAS_FLOCK = False

__all__ = ("FileStore", "LineTransform", "split_lines")

logger = logging.getLogger(__name__)

LineTransform = Callable[[list[str]], list[str]]

_LOCK_POLL_INTERVAL = 0.05
_NEWLINE = "\n"
_ERRORS = "surrogateescape"


class FileStore:
    """Line oriented file access used by the history store.

    Records are separated by "\\n" only. Bytes that are not valid in the
    encoding are carried through unchanged (surrogateescape).

    Appends are unlocked. Rewrites hold an exclusive advisory lock for the
    whole read-modify-write: `flock` where the platform has it, otherwise a
    sibling `<name>.lock` file created exclusively. The new content is written
    to a sibling temporary file and moved over the original while the lock is
    held.
    """

    def __init__(self, encoding: str = "utf-8", use_flock: bool = _HAS_FLOCK):
        self.encoding = encoding
        self.use_flock = use_flock and _HAS_FLOCK

    def _open(self, path: Path, mode: str) -> IO[str]:
        return path.open(mode, encoding=self.encoding, errors=_ERRORS, newline=_NEWLINE)

    def append(self, path: Path, line: str) -> None:
        """Append `line` followed by a newline. Raises `OSError` on failure."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._open(path, "a") as f:
            f.write(line + _NEWLINE)

    def read_lines(self, path: Path) -> list[str]:
        """Return the lines of `path` without their line endings."""
        with self._open(path, "r") as f:
            return split_lines(f.read())

    @contextmanager
    def locked(self, path: Path) -> Iterator[IO[str]]:
        """Open `path` for reading and writing and hold an exclusive lock on it.

        Blocks until the lock is available. The lock is released on every exit
        path. Raises `OSError` if the file cannot be opened.
        """
        if not self.use_flock:
            with self._lock_file(path), self._open(path, "r+") as f:
                yield f
            return

        while True:
            f = self._open(path, "r+")
            try:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                # a concurrent rewrite may have replaced the file while we waited
                if os.path.samestat(os.fstat(f.fileno()), os.stat(path)):
                    break
            except BaseException:
                f.close()
                raise
            f.close()
        try:
            yield f
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            f.close()

    @contextmanager
    def _lock_file(self, path: Path) -> Iterator[None]:
        lock_path = path.with_name(path.name + ".lock")
        while True:
            try:
                fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
                break
            except FileExistsError:
                time.sleep(_LOCK_POLL_INTERVAL)
        try:
            yield
        finally:
            os.close(fd)
            lock_path.unlink(missing_ok=True)

    def rewrite(self, path: Path, transform: LineTransform) -> bool:
        """Replace the content of `path` with `transform(current_lines)` under the lock.

        Returns False, leaving the file untouched, when it cannot be opened or
        the new content cannot be written.
        """
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            with self.locked(path) as f:
                lines = transform(split_lines(f.read()))
                try:
                    with self._open(tmp_path, "w") as tmp:
                        tmp.writelines(line + _NEWLINE for line in lines)
                    os.chmod(tmp_path, os.fstat(f.fileno()).st_mode & 0o7777)
                    os.replace(tmp_path, path)
                except BaseException:
                    tmp_path.unlink(missing_ok=True)
                    raise
        except OSError as e:
            logger.debug("Skipping rewrite of %s: %s", path, e)
            return False
        return True


def split_lines(text: str) -> list[str]:
    """Split on "\\n" only, without the empty item after a final newline."""
    lines = text.split(_NEWLINE)
    if lines and lines[-1] == "":
        lines.pop()
    return lines
