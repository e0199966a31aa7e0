"""Fluent builder for lazily evaluated, mutually dependent values."""

import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from assembler.errors import UnresolvedEntry
from assembler.producer import inferred_name, make_producer
from assembler.registry import Registry
from assembler.resolver import Resolver
from assembler.singleton import shared_instances

__all__ = ["Assembler"]

logger = logging.getLogger(__name__)


class Assembler:
    """
    Declare named values as producers, assemble them, then release the results.

    A producer's parameter names are the names of the entries it depends on.
    Values supplied when the assembler is created are literals: they are
    resolved from the start and can never be replaced.

    Example:
        >>> v1, v3 = (
        ...     Assembler.create()
        ...     .register("var1", lambda: 1)
        ...     .register("var2", lambda var1: 2 + var1)
        ...     .register("var3", lambda var1, var2: var1 * 10 + var2)
        ...     .assemble()
        ...     .release("var1", "var3")
        ... )
        >>> (v1, v3)
        (1, 13)
    """

    def __init__(self, registry: Optional[Registry] = None):
        self._registry = registry if registry is not None else Registry()

    @classmethod
    def create(cls, params: Optional[Mapping[str, Any]] = None) -> "Assembler":
        """Create a new assembler whose ``params`` are immutable literal entries."""
        return cls(Registry(params))

    @classmethod
    def get(cls, params: Optional[Mapping[str, Any]] = None) -> "Assembler":
        """Return the process-wide assembler, creating it on first use.

        Only the first call's ``params`` are used; later calls return the same
        instance and ignore theirs.
        """
        return shared_instances.get_or_create(cls, lambda: cls.create(params))

    @property
    def registry(self) -> Registry:
        return self._registry

    def register(
        self,
        name: str,
        producer: Callable,
        depends_on: Optional[Iterable[str]] = None,
    ) -> "Assembler":
        """Register a producer under ``name``.

        The registration is ignored if ``name`` is a literal or has already
        been assembled.

        Args:
            name: The entry name.
            producer: Callable whose parameter names name its dependencies.
            depends_on: Optional explicit dependency names, passed positionally
                in place of the producer's own parameter names.

        Returns:
            This assembler.

        Raises:
            InvalidProducerKind: If ``producer`` is not callable.
            InvalidEntryName: If ``name`` is not a non-empty string.
        """
        self._registry.register(name, make_producer(producer, depends_on))
        return self

    def provides(
        self, name: Optional[str] = None, depends_on: Optional[Iterable[str]] = None
    ) -> Callable:
        """Decorator to register a function as a producer.

        Args:
            name: Optional entry name; defaults to function name with 'make_'
                prefix removed.
            depends_on: Optional explicit dependency names.

        Example:
            @assembler.provides()
            def make_greeting(name):
                return f"Hello {name}"
        """
        def decorator(func):
            self.register(name or inferred_name(func), func, depends_on)
            return func

        return decorator

    def assemble(self) -> "Assembler":
        """Resolve every pending entry in dependency order.

        Entries resolved by an earlier call are never evaluated again.

        Raises:
            UnknownDependency: If a producer depends on an undeclared entry.
            CyclicDependency: If producers depend on each other.
        """
        invoked = Resolver(self._registry).resolve_all()
        logger.debug("Assembled %d entries (%d produced)", len(self._registry), invoked)
        return self

    def release(self, name: str, *names: str) -> Any:
        """Read assembled values.

        Returns:
            The value of ``name`` when a single name is given, otherwise a
            tuple of values in the order the names were requested.

        Raises:
            UnknownDependency: If a name was never declared.
            UnresolvedEntry: If a name has not been assembled yet.
        """
        if not names:
            return self._value_of(name)
        return tuple(self._value_of(n) for n in (name, *names))

    def merge(self, other: "Assembler") -> "Assembler":
        """Combine this assembler with ``other`` into a new assembler.

        Entries of this assembler win over entries of ``other`` with the same
        name. Neither source is modified, and later changes to either source
        do not affect the result.
        """
        return type(self)(self._registry.merged(other._registry))

    def _value_of(self, name: str) -> Any:
        entry = self._registry[name]
        if not entry.resolved:
            raise UnresolvedEntry(name)
        return entry.value

    def __contains__(self, name: str) -> bool:
        return name in self._registry

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._registry)})"
