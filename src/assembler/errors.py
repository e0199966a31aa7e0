__all__ = [
    "AssemblyError",
    "InvalidEntryName",
    "InvalidProducerKind",
    "UnknownDependency",
    "UnresolvedEntry",
    "CyclicDependency",
    "UnsupportedOperation",
]


class AssemblyError(Exception):
    """Base class for every error raised while building or reading an assembly."""

    pass


class InvalidEntryName(AssemblyError):
    """Raised when an entry is registered under an empty or non-string name."""

    pass


class InvalidProducerKind(AssemblyError):
    """Raised when a producer is not callable or its signature cannot be read."""

    pass


class UnknownDependency(AssemblyError):
    """Raised when a producer or a release names an entry that was never declared."""

    def __init__(self, name: str, required_by: str = None):
        self.name = name
        self.required_by = required_by
        if required_by is None:
            super().__init__(f"Unknown entry '{name}'")
        else:
            super().__init__(f"Unknown entry '{name}' required by '{required_by}'")


class UnresolvedEntry(AssemblyError):
    """Raised when an entry is released before it has been assembled."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Entry '{name}' has not been assembled yet")


class CyclicDependency(AssemblyError):
    """Raised when producers depend on each other, directly or transitively."""

    def __init__(self, path: tuple[str, ...]):
        self.path = path
        super().__init__(f"Dependency cycle: {' -> '.join(path)}")


class UnsupportedOperation(AssemblyError):
    """Raised when an operation is disabled for a restricted assembler."""

    pass
