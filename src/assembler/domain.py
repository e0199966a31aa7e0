"""Domain models used throughout the assembler."""

import inspect
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

__all__ = ["Origin", "Dependency", "Entry", "NO_DEFAULT"]


NO_DEFAULT = inspect.Parameter.empty
"""Marker for a dependency whose parameter declares no default value."""


class Origin(Enum):
    """Where an entry's value comes from."""

    LITERAL = "literal"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class Dependency:
    """Represents a dependency required by a producer.

    Attributes:
        parameter_name: The parameter name in the producer's signature.
        entry_name: The name of the entry that fulfils this dependency.
        keyword_only: Whether the value must be passed by keyword.
        default: The parameter's default value, or ``NO_DEFAULT``.
    """

    parameter_name: str
    entry_name: str
    keyword_only: bool = False
    default: Any = NO_DEFAULT

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class Entry:
    """
    A single named binding held by a :class:`~assembler.registry.Registry`.

    Entries are frozen: resolving a deferred entry yields a new resolved entry
    rather than mutating the existing one, so registries can share entries
    without sharing state.

    Attributes:
        name: The entry name.
        origin: Whether the entry was supplied as a literal or registered as a producer.
        producer: The producer that computes the value (deferred entries only).
        value: The final value, once resolved.
        resolved: Whether ``value`` holds the final value.
    """

    name: str
    origin: Origin
    producer: Optional[Any] = None
    value: Any = None
    resolved: bool = False

    @staticmethod
    def literal(name: str, value: Any) -> "Entry":
        return Entry(name, Origin.LITERAL, None, value, True)

    @staticmethod
    def deferred(name: str, producer: Any) -> "Entry":
        return Entry(name, Origin.DEFERRED, producer)

    @property
    def immutable(self) -> bool:
        return self.origin is Origin.LITERAL or self.resolved

    def resolve(self, value: Any) -> "Entry":
        """Return the resolved counterpart of this entry.

        Args:
            value: The value computed by the entry's producer.

        Returns:
            A resolved copy of this entry holding ``value``.
        """
        if self.resolved:
            return self
        return replace(self, value=value, resolved=True)
