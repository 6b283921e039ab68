"""Interfaces between the graph builders and their collaborators."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from ..models.coordinates import Coordinate, Dependency, ModuleCoordinate, RelationKind
from .models import Graph


class DependencyView(ABC):
    """Already resolved dependency data of a build.

    Conflict resolution happens in the host build; a view only reports the
    outcome. Implementations must be safe to read from several builders at
    once, none of them mutates it.
    """

    @property
    @abstractmethod
    def build_name(self) -> str:
        """Display name of the enclosing build."""
        pass

    @abstractmethod
    def all_modules(self) -> list[ModuleCoordinate]:
        """Every module participating in the build, in build order."""
        pass

    @abstractmethod
    def module(self, path: str) -> ModuleCoordinate:
        """Module with the given path.

        Raises:
            UnresolvableCoordinateError: If no module has that path
        """
        pass

    @abstractmethod
    def children(self, coordinate: Coordinate,
                 include: Callable[[RelationKind], bool]) -> list[Dependency]:
        """Direct resolved children of a coordinate.

        ``include`` filters the declarations of modules; children of a library
        belong to the resolution of an already included declaration and are
        always returned.
        """
        pass


class GraphRenderer(ABC):
    """Abstract base class for graph renderers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, graph: Graph) -> str:
        """Render a graph to its textual description."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass
