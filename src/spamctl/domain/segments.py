"""Filter generator: pack domain names into bounded filter expressions.

Each domain name is regex-escaped and appended to the current segment,
joined by ``|``.  A new segment starts whenever appending would bring the
segment to *max_length* characters, so every emitted expression is strictly
shorter than the limit.

Sharding groups names by their leading character first (``A``-``Z`` and
``0``-``9``, uppercased; anything else lands in :data:`OTHER_SHARD`) and
packs each shard independently.  Adding a domain then only re-packs the
filters of its own shard.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from spamctl.domain.errors import DomainNameError, SegmentError

SEPARATOR = "|"
OTHER_SHARD = "Other"

# Characters escaped by the filter platform's regex dialect.
_META_CHARS = r"\.+*?()|[]{}^$"
_ESCAPE_TABLE = str.maketrans({ch: "\\" + ch for ch in _META_CHARS})
_UNESCAPE_RE = re.compile(r"\\([" + re.escape(_META_CHARS) + r"])")
_SHARD_CHAR_RE = re.compile(r"[A-Za-z0-9]")
# One packed name: escaped pairs, or characters other than a backslash or "|".
_PART_RE = re.compile(r"(?:\\.|[^\\|])+", re.DOTALL)


class Shard(BaseModel):
    """Packed expressions for all domain names sharing one leading character."""

    model_config = {"frozen": True}

    key: str
    segments: tuple[str, ...]


def escape(domain_name: str) -> str:
    """Escape regex metacharacters in *domain_name*.

    Only the metacharacters themselves are escaped; ``-`` and non-ASCII
    characters stay literal.

    Examples:
        >>> escape("referrer-spam.co.uk")
        'referrer-spam\\\\.co\\\\.uk'
    """
    return domain_name.translate(_ESCAPE_TABLE)


def unescape(value: str) -> str:
    """Reverse :func:`escape`."""
    return _UNESCAPE_RE.sub(r"\1", value)


def split_expression(expression: str) -> list[str]:
    """Split a packed expression back into the domain names it matches."""
    return [unescape(part) for part in _PART_RE.findall(expression)]


def validate_domain_name(domain_name: str) -> None:
    """Raise :class:`DomainNameError` for an empty or whitespace-only name."""
    if not domain_name or not domain_name.strip():
        msg = "Domain names cannot be empty"
        raise DomainNameError(msg, value=domain_name)


def generate_segments(domain_names: Sequence[str], max_length: int) -> list[str]:
    """Greedily pack *domain_names* (pre-sorted) into expressions.

    Raises:
        DomainNameError: A name is empty or blank.
        SegmentError: An escaped name alone does not fit below *max_length*.
    """
    if max_length < 1:
        msg = f"Max expression length must be positive, got {max_length}"
        raise ValueError(msg)

    segments: list[str] = []
    current = ""
    for domain_name in domain_names:
        validate_domain_name(domain_name)
        escaped = escape(domain_name)

        if len(escaped) >= max_length:
            msg = (
                f"The domain name {domain_name!r} is too long to fit into a segment "
                f"(max length: {max_length})"
            )
            raise SegmentError(msg, value=domain_name, limit=max_length)

        if current and len(current) + len(SEPARATOR) + len(escaped) >= max_length:
            segments.append(current)
            current = ""

        current = f"{current}{SEPARATOR}{escaped}" if current else escaped

    if current:
        segments.append(current)
    return segments


def shard_key(domain_name: str) -> str:
    """Return the shard bucket for *domain_name*."""
    first = domain_name[:1]
    if _SHARD_CHAR_RE.fullmatch(first):
        return first.upper()
    return OTHER_SHARD


def generate_shards(domain_names: Iterable[str], max_length: int) -> list[Shard]:
    """Group *domain_names* by leading character and pack each group.

    Shards are returned ordered by key, with :data:`OTHER_SHARD` last.
    """
    buckets: dict[str, list[str]] = {}
    for domain_name in domain_names:
        validate_domain_name(domain_name)
        buckets.setdefault(shard_key(domain_name), []).append(domain_name)

    shards: list[Shard] = []
    for key in sorted(buckets, key=lambda k: (k == OTHER_SHARD, k)):
        names = sorted(set(buckets[key]))
        shards.append(Shard(key=key, segments=tuple(generate_segments(names, max_length))))
    return shards
