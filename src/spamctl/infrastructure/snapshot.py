"""Snapshot store: the persisted domain list on disk.

Format: plain text, one domain name per line, terminated by the configured
line terminator.  No header, no comment syntax.

INVARIANT: Writes replace the file wholesale (temp file + ``os.replace``),
so a reader never observes a half-written list.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from spamctl.domain.domains import parse_domain_lines
from spamctl.domain.errors import NoDomainsError, SnapshotMissingError, StorageError

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and atomically rewrites one domain snapshot file."""

    def __init__(self, path: Path, *, line_terminator: str = os.linesep) -> None:
        self.path = path
        self.line_terminator = line_terminator

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> list[str]:
        """Return the stored domain names in file order.

        Raises:
            SnapshotMissingError: The file is missing or unreadable.
            NoDomainsError: The file holds no non-blank lines.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read domain snapshot {self.path}: {exc}"
            raise SnapshotMissingError(msg, path=str(self.path)) from exc

        domains = parse_domain_lines(text)
        if not domains:
            msg = f"No domains found in {str(self.path)!r}"
            raise NoDomainsError(msg, path=str(self.path))
        return domains

    def write(self, domain_names: Iterable[str]) -> None:
        """Replace the snapshot with *domain_names*.

        Creates parent directories if they don't exist.

        Raises:
            StorageError: The directory or file could not be written; the
                previous snapshot, if any, is left in place.
        """
        content = "".join(f"{name}{self.line_terminator}" for name in domain_names)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            msg = f"Cannot write domain snapshot {self.path}: {exc}"
            raise StorageError(msg, path=str(self.path)) from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            msg = f"Cannot write domain snapshot {self.path}: {exc}"
            raise StorageError(msg, path=str(self.path)) from exc
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote domain snapshot %s", self.path)
