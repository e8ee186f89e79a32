"""Base text-file persistence store."""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

from ..log import logger


class TextStore:
    """Text file store with atomic write.

    Reads are forgiving (a missing or unreadable file yields ``None``);
    writes are not, since a failed save must never look like a success.
    """

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding

    # -- core I/O -------------------------------------------------------------

    def load_bytes(self) -> bytes | None:
        """Return the raw file contents, or ``None`` if it cannot be read."""
        try:
            return self.path.read_bytes()
        except OSError:
            logger.debug("cannot read %s", self.path, exc_info=True)
            return None

    def save_text(self, text: str, encoding: str | None = None) -> None:
        """Replace the file with *text*, creating parents as needed.

        The text goes to a temporary file in the same directory which is then
        renamed over the target, so readers see either the old or the new
        contents.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding=encoding or self.encoding, newline="\n") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise
