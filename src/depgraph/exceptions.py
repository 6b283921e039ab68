"""Common exceptions for depgraph."""


class DepgraphError(Exception):
    """Base exception for all depgraph errors."""
    pass


class ConfigurationError(DepgraphError):
    """Raised when a generator is unknown or the configuration is invalid."""

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class UnresolvableCoordinateError(DepgraphError):
    """Raised when a coordinate lacks the fields needed to identify it."""
    pass


class SnapshotError(DepgraphError):
    """Raised when a resolved dependency snapshot cannot be read."""
    pass


class RenderEngineError(DepgraphError):
    """Raised when the external rendering engine fails for one output format."""

    def __init__(self, format: str, message: str):
        super().__init__(f"Rendering {format} failed: {message}")
        self.format = format
