"""
Resolution of deferred entries into values.

The resolver walks a :class:`~assembler.registry.Registry` depth first: before
a producer runs, every entry it names is resolved in turn, whatever order the
entries were registered in. Each resolved value is stored back into the
registry, so a producer runs at most once however many dependents it has and
however many times assembly is repeated.

A dependency cycle is reported as soon as a name is revisited while it is
still being resolved.
"""

import logging
from typing import Any

from assembler.errors import CyclicDependency, UnknownDependency
from assembler.registry import Registry

__all__ = ["Resolver"]

logger = logging.getLogger(__name__)


class Resolver:
    """Resolve every unresolved entry of a registry in dependency order."""

    def __init__(self, registry: Registry):
        self._registry = registry

    def resolve_all(self) -> int:
        """Resolve all entries that are still pending.

        Returns:
            The number of producers invoked.

        Raises:
            UnknownDependency: If a producer names an entry that does not exist
                and declares no default for it.
            CyclicDependency: If producers depend on each other.
        """
        invoked = 0
        for name in self._registry.unresolved_names():
            if not self._registry[name].resolved:
                invoked += self._resolve(name, ())
        return invoked

    def _resolve(self, name: str, resolving: tuple[str, ...]) -> int:
        """Resolve ``name`` and, before it, whatever it depends on.

        Args:
            name: The entry to resolve.
            resolving: Names currently being resolved, outermost first.

        Returns:
            The number of producers invoked.
        """
        entry = self._registry[name]
        if entry.resolved:
            return 0
        if name in resolving:
            start = resolving.index(name)
            raise CyclicDependency(resolving[start:] + (name,))

        resolving = resolving + (name,)
        invoked = 0
        values: dict[str, Any] = {}
        for dependency in entry.producer.dependencies:
            dependency_name = dependency.entry_name
            if dependency_name not in self._registry:
                if dependency.has_default:
                    continue
                raise UnknownDependency(dependency_name, required_by=name)
            invoked += self._resolve(dependency_name, resolving)
            values[dependency_name] = self._registry[dependency_name].value

        value = entry.producer(values)
        self._registry.store(entry.resolve(value))
        logger.debug("Resolved entry %r", name)
        return invoked + 1
