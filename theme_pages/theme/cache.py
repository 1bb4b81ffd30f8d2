"""Memoise parsed section schemas by source identity and content hash."""

from __future__ import annotations

import dataclasses as dc
import hashlib
import logging
import typing as typ

from theme_pages.schema import extract_schema

if typ.TYPE_CHECKING:
    from theme_pages.schema import SectionSchema

log = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class _Entry:
    digest: str
    schema: SectionSchema | None


class SchemaCache:
    """Cache of parsed schemas, including the "no schema" outcome.

    Entries are keyed by an identity string (usually the section file path)
    and remember the SHA-256 of the source they were parsed from. Asking for
    the same identity with different content re-parses and replaces the entry.

    Examples
    --------
    >>> cache = SchemaCache()
    >>> cache.get_or_parse("hero", '{% schema %}{"name": "Hero"}{% endschema %}').name
    'Hero'
    >>> len(cache)
    1
    """

    __slots__ = ("_entries", "hits", "misses")

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def get_or_parse(self, identity: str, source: str) -> SectionSchema | None:
        """Return the schema for ``source``, parsing only when it changed."""
        digest = hashlib.sha256(source.encode("utf-8")).hexdigest()
        entry = self._entries.get(identity)
        if entry is not None and entry.digest == digest:
            self.hits += 1
            return entry.schema
        if entry is not None:
            log.debug("Schema source for %s changed; re-parsing", identity)
        self.misses += 1
        schema = extract_schema(source, source_name=identity)
        self._entries[identity] = _Entry(digest=digest, schema=schema)
        return schema


__all__ = ["SchemaCache"]
