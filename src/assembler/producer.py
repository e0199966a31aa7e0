"""Introspection utilities for producer functions.

A producer declares the entries it depends on through its own parameter names.
This module reads those names from the producer's signature, honouring
``Annotated`` qualifiers that point a parameter at a differently named entry.
"""

import functools
import inspect
import logging
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Callable,
    Iterable,
    Optional,
    get_args,
    get_origin,
    get_type_hints,
)

from assembler.domain import Dependency
from assembler.errors import InvalidProducerKind

__all__ = ["Producer", "make_producer", "inferred_name"]


logger = logging.getLogger(__name__)

_IGNORED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class Producer:
    """A callable together with the ordered dependencies it declares.

    Attributes:
        func: The callable computing the entry's value.
        dependencies: Dependencies in the order the callable declares its parameters.

    Example:
        >>> def var3(var1, var2):
        ...     return var1 * 10 + var2
        >>> make_producer(var3).dependency_names
        ['var1', 'var2']
    """

    func: Callable
    dependencies: tuple[Dependency, ...]

    @property
    def dependency_names(self) -> list[str]:
        return [dependency.entry_name for dependency in self.dependencies]

    def __call__(self, values: dict[str, Any]) -> Any:
        """Invoke the producer with the resolved values of its dependencies.

        Positional parameters are passed positionally in declaration order and
        keyword-only parameters by keyword. A dependency missing from ``values``
        falls back to its parameter default.

        Args:
            values: Mapping of entry names to resolved values.

        Returns:
            Whatever the underlying callable returns.
        """
        args = []
        kwargs = {}
        for dependency in self.dependencies:
            if dependency.entry_name in values:
                value = values[dependency.entry_name]
            else:
                value = dependency.default
            if dependency.keyword_only:
                kwargs[dependency.parameter_name] = value
            else:
                args.append(value)
        return self.func(*args, **kwargs)


def make_producer(
    func: Any, depends_on: Optional[Iterable[str]] = None
) -> Producer:
    """Build a :class:`Producer` from a callable.

    Args:
        func: The callable computing the entry's value.
        depends_on: Optional explicit list of entry names. When given, the
            callable's signature is not inspected and the named values are
            passed positionally in this order.

    Returns:
        The producer with its dependencies.

    Raises:
        InvalidProducerKind: If ``func`` is not callable, or its signature
            cannot be inspected and no ``depends_on`` was supplied.
    """
    if not callable(func):
        raise InvalidProducerKind(
            f"Producer must be callable, got {type(func).__name__}: {func!r}"
        )

    if depends_on is not None:
        if isinstance(depends_on, str):
            raise InvalidProducerKind(
                f"depends_on must be a list of entry names, got the string {depends_on!r}"
            )
        return Producer(func, tuple(Dependency(name, name) for name in depends_on))

    return Producer(func, tuple(_get_dependencies(func)))


def inferred_name(target: Any) -> str:
    """Derive an entry name from a function name, removing 'make_' prefix if present.

    Example:
        >>> inferred_name(make_database)  # Returns "database"
        >>> inferred_name(var1)           # Returns "var1"
    """
    if target.__name__.startswith("make_"):
        return target.__name__[5:]
    return target.__name__


def _get_dependencies(func: Callable) -> list[Dependency]:
    """Extract dependency information from a callable's signature.

    Example:
        >>> def service(db, cache: Annotated[Cache, "redis"], *, retries=3):
        ...     pass
        >>> _get_dependencies(service)
        [Dependency("db", "db"),
         Dependency("cache", "redis"),
         Dependency("retries", "retries", True, 3)]
    """
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError) as exc:
        raise InvalidProducerKind(
            f"Cannot read the signature of producer {func!r}; "
            "declare its dependencies with depends_on"
        ) from exc

    hints = _evaluated_annotations(func)
    return [
        _make_dependency(parameter, hints.get(name, parameter.annotation))
        for name, parameter in sig.parameters.items()
        if parameter.kind not in _IGNORED_KINDS
    ]


def _evaluated_annotations(func: Callable) -> dict[str, Any]:
    """Evaluate string annotations of the callable underlying ``func``.

    Only needed to find ``Annotated`` qualifiers written as strings. When the
    annotations cannot be evaluated, the raw annotations from the signature
    are used instead and parameters bind by their own names.
    """
    target = func
    while isinstance(target, functools.partial):
        target = target.func
    if inspect.isclass(target):
        target = target.__init__
    elif not (inspect.isfunction(target) or inspect.ismethod(target)):
        target = type(target).__call__
    try:
        return get_type_hints(target, include_extras=True)
    except (NameError, TypeError):
        logger.debug("Using unevaluated annotations of producer %r", func)
        return {}


def _make_dependency(parameter: inspect.Parameter, annotation) -> Dependency:
    entry_name = parameter.name
    if get_origin(annotation) is Annotated:
        _, *metadata = get_args(annotation)
        entry_name = next((m for m in metadata if isinstance(m, str)), parameter.name)

    return Dependency(
        parameter.name,
        entry_name,
        parameter.kind is inspect.Parameter.KEYWORD_ONLY,
        parameter.default,
    )
