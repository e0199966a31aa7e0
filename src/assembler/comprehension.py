"""A for-comprehension built on the assembler.

``FFor`` chains bindings exactly like :class:`~assembler.assembler.Assembler`,
but it is one-shot: it cannot be shared through the process-wide instance and
cannot be merged. ``fyield`` runs the comprehension and yields its result.

Example:
    >>> FFor.create().register("a", lambda: 2).register("b", lambda a: a * 3).fyield("b")
    6
"""

from typing import Any, Mapping, Optional

from assembler.assembler import Assembler
from assembler.errors import UnsupportedOperation

__all__ = ["FFor"]


class FFor(Assembler):
    """Assembler variant expressing a functional for-comprehension."""

    def fyield(self, name: str, *names: str) -> Any:
        """Assemble, then release ``name`` (and ``names``).

        Returns:
            A single value for one name, otherwise a tuple in requested order.
        """
        return self.assemble().release(name, *names)

    @classmethod
    def get(cls, params: Optional[Mapping[str, Any]] = None) -> Assembler:
        raise UnsupportedOperation("Cannot create a shared FFor comprehension")

    def merge(self, other: Assembler) -> Assembler:
        raise UnsupportedOperation("Cannot merge a FFor comprehension")
