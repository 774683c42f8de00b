"""Domain sources: every source implements ``fetch() -> list[str]``.

* :class:`RemoteDomainProvider` reads newline-delimited text from a URL.
* :class:`LocalFileDomainProvider` reads it from a local file.
* :class:`CompositeDomainProvider` fans out to child providers and merges.

Lines are trimmed and blank lines dropped.  Failures raise
:class:`~spamctl.domain.errors.ProviderError`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

import requests

from spamctl.domain.domains import normalize_domains, parse_domain_lines
from spamctl.domain.errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@runtime_checkable
class DomainProvider(Protocol):
    """Anything that yields referrer-spam domain names."""

    def fetch(self) -> list[str]: ...


class RemoteDomainProvider:
    """Fetch a domain list over HTTP(S).

    Non-success responses are errors; no retry is attempted.
    """

    def __init__(
        self,
        url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.url = url
        self._session = session
        self.timeout = timeout

    def fetch(self) -> list[str]:
        session = self._session or requests.Session()
        try:
            response = session.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"Failed to get URL {self.url!r}: {exc}"
            raise ProviderError(msg, url=self.url) from exc
        finally:
            if self._session is None:
                session.close()

        if not response.ok:
            msg = f"Failed to get URL {self.url!r}. Received HTTP status code {response.status_code}."
            raise ProviderError(msg, url=self.url, status_code=response.status_code)

        # Block-lists are UTF-8 even when served as text/plain without a charset.
        domains = parse_domain_lines(response.content.decode("utf-8", errors="replace"))
        logger.debug("Fetched %d domains from %s", len(domains), self.url)
        return domains

    def __repr__(self) -> str:
        return f"RemoteDomainProvider({self.url!r})"


class LocalFileDomainProvider:
    """Read a domain list from a local text file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def fetch(self) -> list[str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Failed to read domain file {str(self.path)!r}: {exc}"
            raise ProviderError(msg, path=str(self.path)) from exc
        return parse_domain_lines(text)

    def __repr__(self) -> str:
        return f"LocalFileDomainProvider({str(self.path)!r})"


class CompositeDomainProvider:
    """Merge the output of several providers.

    The first failing child aborts the whole fetch.  The merged result is
    deduplicated and sorted.
    """

    def __init__(self, providers: Sequence[DomainProvider]) -> None:
        self.providers = list(providers)

    def fetch(self) -> list[str]:
        merged: list[str] = []
        for provider in self.providers:
            merged.extend(provider.fetch())
        return normalize_domains(merged)

    def __repr__(self) -> str:
        return f"CompositeDomainProvider({self.providers!r})"


def provider_for_source(source: str, *, base_dir: Path, timeout: float) -> DomainProvider:
    """Build a provider from a configured source string (URL or file path)."""
    if source.startswith(("http://", "https://")):
        return RemoteDomainProvider(source, timeout=timeout)
    path = Path(source).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return LocalFileDomainProvider(path)
