"""Generator policies: named, immutable settings for one generation run.

A policy decides which relation kinds are traversed and how the resulting
graph is styled. Variants are plain values looked up by name, the builders
contain no per-variant logic.
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from slugify import slugify

from ..exceptions import ConfigurationError
from ..models.coordinates import ModuleCoordinate, RelationKind

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_FORMATS = ("png", "svg")
DEFAULT_MODULE_COLOR = "#ff8a65"

# module kind -> fill colour
MODULE_KIND_COLORS = {
    "android": "#66bb6a",
    "js": "#ffe082",
}


def all_kinds(kind: RelationKind) -> bool:
    return True


@dataclass(frozen=True)
class IncludeKinds:
    """Predicate accepting only the listed relation kinds."""
    kinds: frozenset[RelationKind]

    def __call__(self, kind: RelationKind) -> bool:
        return kind in self.kinds


def exposed_kinds(kind: RelationKind) -> bool:
    return kind.exposed


@dataclass(frozen=True)
class ModuleColors:
    """Fill colour assignment for project graph nodes."""
    overrides: Mapping[str, str] = field(default_factory=dict)  # module path -> colour
    default: str | None = None

    def __call__(self, module: ModuleCoordinate) -> str:
        if module.path in self.overrides:
            return self.overrides[module.path]
        if self.default:
            return self.default
        return MODULE_KIND_COLORS.get(module.kind, DEFAULT_MODULE_COLOR)

    def __hash__(self) -> int:
        return hash((tuple(sorted(self.overrides.items())), self.default))


def _output_name(base: str, name: str) -> str:
    if name == "ALL":
        return base
    return f"{base}-{slugify(name)}"


@dataclass(frozen=True)
class Generator:
    """Policy for module graphs (a module and all of its libraries)."""
    name: str
    include: Callable[[RelationKind], bool] = all_kinds
    include_version: bool = False  # Distinguish library versions in node ids
    output_formats: tuple[str, ...] = DEFAULT_OUTPUT_FORMATS

    @property
    def output_name(self) -> str:
        """Directory and file base name, e.g. ``dependency-graph-api``."""
        return _output_name("dependency-graph", self.name)


@dataclass(frozen=True)
class ProjectGenerator:
    """Policy for project graphs (modules of a build and their relations)."""
    name: str
    include: Callable[[RelationKind], bool] = all_kinds
    include_external_dependencies: bool = False
    color: Callable[[ModuleCoordinate], str] = field(default_factory=ModuleColors)
    output_formats: tuple[str, ...] = DEFAULT_OUTPUT_FORMATS

    @property
    def output_name(self) -> str:
        return _output_name("project-dependency-graph", self.name)


ALL = Generator("ALL")
API = Generator("API", include=exposed_kinds)
TEST = Generator("TEST", include=IncludeKinds(frozenset({RelationKind.TEST})))

PROJECT_ALL = ProjectGenerator("ALL")

T = TypeVar("T", Generator, ProjectGenerator)


class GeneratorRegistry(Generic[T]):
    """Generators of one kind, looked up by name."""

    def __init__(self, generators: Iterable[T] = ()):
        self._generators: dict[str, T] = {}
        for generator in generators:
            self.register(generator)

    def register(self, generator: T) -> None:
        if generator.name in self._generators:
            raise ConfigurationError(f"Generator '{generator.name}' is defined twice", name=generator.name)
        self._generators[generator.name] = generator

    def get(self, name: str) -> T:
        """Look up a generator by name.

        Raises:
            ConfigurationError: If no generator has that name
        """
        try:
            return self._generators[name]
        except KeyError:
            available = list(self._generators)
            raise ConfigurationError(f"Unknown generator '{name}'. Available: {available}", name=name) from None

    def select(self, names: Iterable[str] | None = None) -> list[T]:
        """Resolve all names up front; no names selects every generator."""
        if names is None:
            return list(self._generators.values())
        return [self.get(name) for name in names]

    @property
    def names(self) -> list[str]:
        return list(self._generators)

    def __iter__(self) -> Iterator[T]:
        return iter(self._generators.values())

    def __len__(self) -> int:
        return len(self._generators)
