"""Fluent assembly of lazily evaluated, mutually dependent values.

An assembler holds named entries. Each entry is either a literal supplied when
the assembler is created, or a producer: a function whose parameter names are
the names of the entries it depends on. Assembling resolves every producer
once, in dependency order; releasing reads the results back out.

Basic Usage:
    >>> from assembler import Assembler
    >>>
    >>> greeting = (
    ...     Assembler.create({"name": "Arthur"})
    ...     .register("greeting", lambda name: f"Hello {name}")
    ...     .assemble()
    ...     .release("greeting")
    ... )

The package consists of several modules:
    - assembler: The fluent ``Assembler`` builder
    - comprehension: ``FFor``, a one-shot for-comprehension variant
    - registry: Ordered entry storage and immutability rules
    - resolver: Memoised depth-first resolution with cycle detection
    - producer: Producer signature introspection
    - domain: Core domain models (Entry, Dependency)
    - singleton: Process-wide instance storage
    - errors: Package-specific exceptions
"""

from assembler.assembler import Assembler
from assembler.comprehension import FFor
from assembler.errors import (
    AssemblyError,
    CyclicDependency,
    InvalidEntryName,
    InvalidProducerKind,
    UnknownDependency,
    UnresolvedEntry,
    UnsupportedOperation,
)

__all__ = [
    "Assembler",
    "FFor",
    "AssemblyError",
    "CyclicDependency",
    "InvalidEntryName",
    "InvalidProducerKind",
    "UnknownDependency",
    "UnresolvedEntry",
    "UnsupportedOperation",
]
