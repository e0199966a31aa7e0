"""Ordered storage of named entries and the rules that keep them immutable."""

import logging
from typing import Any, Iterator, Mapping, Optional

from assembler.domain import Entry
from assembler.errors import InvalidEntryName, UnknownDependency
from assembler.producer import Producer

__all__ = ["Registry"]

logger = logging.getLogger(__name__)


class Registry:
    """Ordered mapping from entry name to :class:`~assembler.domain.Entry`.

    Insertion order decides the order in which unresolved entries are first
    visited during assembly; dependency lookup is always by name.

    Literal entries and resolved entries are immutable: a later registration
    under the same name is ignored.
    """

    def __init__(self, literals: Optional[Mapping[str, Any]] = None):
        self._entries: dict[str, Entry] = {}
        for name, value in (literals or {}).items():
            _validate_name(name)
            self._entries[name] = Entry.literal(name, value)

    @classmethod
    def from_entries(cls, entries: Mapping[str, Entry]) -> "Registry":
        registry = cls()
        registry._entries = dict(entries)
        return registry

    def register(self, name: str, producer: Producer) -> bool:
        """Register a deferred entry.

        Args:
            name: The entry name.
            producer: The producer computing the entry's value.

        Returns:
            True if the entry was stored, False if an immutable entry of the
            same name was kept instead.
        """
        _validate_name(name)
        existing = self._entries.get(name)
        if existing is not None and existing.immutable:
            logger.debug("Ignoring registration of immutable entry %r", name)
            return False

        self._entries[name] = Entry.deferred(name, producer)
        return True

    def store(self, entry: Entry):
        """Replace an unresolved entry with its resolved counterpart."""
        existing = self._entries.get(entry.name)
        if existing is not None and existing.resolved:
            return
        self._entries[entry.name] = entry

    def unresolved_names(self) -> list[str]:
        return [name for name, entry in self._entries.items() if not entry.resolved]

    def entries(self) -> dict[str, Entry]:
        return dict(self._entries)

    def merged(self, other: "Registry") -> "Registry":
        """Return a new registry holding this registry's entries and ``other``'s.

        On a name collision this registry's entry wins, whether or not it has
        been resolved; the colliding entry from ``other`` is discarded.
        """
        entries = dict(self._entries)
        for name, entry in other._entries.items():
            entries.setdefault(name, entry)
        return Registry.from_entries(entries)

    def __getitem__(self, name: str) -> Entry:
        if name not in self._entries:
            raise UnknownDependency(name)
        return self._entries[name]

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return list(self._entries.items()) == list(other._entries.items())

    def __repr__(self) -> str:
        return f"Registry({list(self._entries)})"


def _validate_name(name):
    if not isinstance(name, str) or not name:
        raise InvalidEntryName(f"Entry names must be non-empty strings, got {name!r}")
