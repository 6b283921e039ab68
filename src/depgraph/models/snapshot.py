"""Resolved dependency snapshot exported by the host build.

A snapshot lists every module of the build with its declared dependencies
(already conflict resolved) and the resolved dependencies of each library:

    {
      "build": "shop",
      "modules": [
        {"path": ":app", "dependencies": [{"module": ":lib", "kind": "implementation"}]},
        {"path": ":lib", "dependencies": [{"library": "io.reactivex.rxjava2:rxjava:2.1.10", "kind": "api"}]}
      ],
      "libraries": [
        {"coordinate": "io.reactivex.rxjava2:rxjava:2.1.10",
         "dependencies": [{"library": "org.reactivestreams:reactive-streams:1.0.2"}]}
      ]
    }
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..exceptions import SnapshotError, UnresolvableCoordinateError
from ..graph.framework import DependencyView
from .coordinates import Coordinate, Dependency, LibraryCoordinate, ModuleCoordinate, RelationKind

logger = logging.getLogger(__name__)

ROOT_PATH = ":"


class DependencyEntry(BaseModel):
    """One resolved dependency: either a module path or a library notation."""
    module: str | None = None
    library: str | None = None
    kind: RelationKind = RelationKind.IMPLEMENTATION

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_target(self):
        if (self.module is None) == (self.library is None):
            raise ValueError("dependency must name exactly one of 'module' or 'library'")
        return self


class ModuleEntry(BaseModel):
    """A module of the build and its declared dependencies."""
    path: str
    name: str | None = None  # Defaults to the last path segment
    group: str | None = None  # Defaults to the build name for subprojects
    kind: str = "java"
    dependencies: list[DependencyEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class LibraryEntry(BaseModel):
    """Resolved dependencies of one library."""
    coordinate: str
    dependencies: list[DependencyEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class BuildSnapshot(BaseModel):
    """Complete resolved dependency data of one build."""
    build: str
    modules: list[ModuleEntry] = Field(default_factory=list)
    libraries: list[LibraryEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class SnapshotView(DependencyView):
    """Dependency view backed by a :class:`BuildSnapshot`."""

    def __init__(self, snapshot: BuildSnapshot):
        self.snapshot = snapshot
        self._modules: dict[str, ModuleCoordinate] = {}
        self._module_dependencies: dict[str, list[DependencyEntry]] = {}
        self._library_dependencies: dict[LibraryCoordinate, list[DependencyEntry]] = {}

        for entry in snapshot.modules:
            module = self._to_module(entry)
            self._modules[module.path] = module
            self._module_dependencies[module.path] = entry.dependencies

        for entry in snapshot.libraries:
            library = LibraryCoordinate.parse(entry.coordinate)
            self._library_dependencies.setdefault(library, []).extend(entry.dependencies)

        logger.debug(f"Loaded snapshot of {snapshot.build} with {len(self._modules)} modules "
                     f"and {len(self._library_dependencies)} libraries")

    @classmethod
    def from_file(cls, path: str | Path) -> "SnapshotView":
        """Load a snapshot from a JSON file.

        Raises:
            SnapshotError: If the file cannot be read or is not a valid snapshot
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return cls(BuildSnapshot(**data))
        except FileNotFoundError:
            raise SnapshotError(f"Snapshot not found: {path}")
        except OSError as e:
            raise SnapshotError(f"Cannot read snapshot {path}: {e}")
        except UnicodeDecodeError as e:
            raise SnapshotError(f"Snapshot {path} is not valid UTF-8: {e}")
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid JSON in snapshot {path}: {e}")
        except (ValidationError, TypeError) as e:
            raise SnapshotError(f"Invalid snapshot {path}: {e}")

    @property
    def build_name(self) -> str:
        return self.snapshot.build

    def all_modules(self) -> list[ModuleCoordinate]:
        return list(self._modules.values())

    def module(self, path: str) -> ModuleCoordinate:
        try:
            return self._modules[path]
        except KeyError:
            raise UnresolvableCoordinateError(
                f"Module '{path}' is not part of {self.build_name}"
            ) from None

    def children(self, coordinate: Coordinate,
                 include: Callable[[RelationKind], bool]) -> list[Dependency]:
        if isinstance(coordinate, ModuleCoordinate):
            if coordinate.path not in self._module_dependencies:
                raise UnresolvableCoordinateError(
                    f"Module '{coordinate.path}' is not part of {self.build_name}"
                )
            entries = [e for e in self._module_dependencies[coordinate.path] if include(e.kind)]
        else:
            entries = self._library_dependencies.get(coordinate, [])

        return [Dependency(self._resolve(entry), entry.kind) for entry in entries]

    def _resolve(self, entry: DependencyEntry) -> Coordinate:
        if entry.module is not None:
            return self.module(entry.module)
        return LibraryCoordinate.parse(entry.library)

    def _to_module(self, entry: ModuleEntry) -> ModuleCoordinate:
        is_root = entry.path == ROOT_PATH
        name = entry.name or (self.snapshot.build if is_root else entry.path.rsplit(":", 1)[-1])
        group = entry.group if entry.group is not None else ("" if is_root else self.snapshot.build)
        return ModuleCoordinate(path=entry.path, name=name, group=group, kind=entry.kind)
