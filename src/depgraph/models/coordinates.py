"""Dependency coordinates and the node identities derived from them."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from ..exceptions import UnresolvableCoordinateError

_UNSAFE_ID_CHARS = re.compile(r"[^a-zA-Z0-9]")


class RelationKind(str, Enum):
    """Kinds of dependency declarations a module can make."""
    API = "api"
    COMPILE = "compile"
    IMPLEMENTATION = "implementation"
    COMPILE_ONLY = "compileOnly"
    RUNTIME_ONLY = "runtimeOnly"
    ANNOTATION_PROCESSOR = "annotationProcessor"
    TEST = "test"

    @property
    def exposed(self) -> bool:
        """Whether the relation propagates to dependents (rendered solid)."""
        return self in (RelationKind.API, RelationKind.COMPILE)


@dataclass(frozen=True)
class LibraryCoordinate:
    """External library identified by group, artifact and version."""
    group: str
    artifact: str
    version: str = ""

    @classmethod
    def parse(cls, notation: str) -> "LibraryCoordinate":
        """Parse ``group:artifact[:version]`` notation.

        Missing parts are left empty so graph builders can report them.
        """
        parts = notation.split(":")
        parts += [""] * (3 - len(parts))
        group, artifact, version = parts[0], parts[1], ":".join(parts[2:])
        return cls(group=group.strip(), artifact=artifact.strip(), version=version.strip())

    @property
    def notation(self) -> str:
        return ":".join(p for p in (self.group, self.artifact, self.version) if p)

    def __str__(self) -> str:
        return self.notation


@dataclass(frozen=True)
class ModuleCoordinate:
    """Module of the build, identified by its build-relative path."""
    path: str  # e.g. ":app"
    name: str
    group: str = ""  # Subprojects default to the build name
    kind: str = "java"

    def __str__(self) -> str:
        return self.path


Coordinate = LibraryCoordinate | ModuleCoordinate


class Dependency(NamedTuple):
    """A resolved child of a coordinate together with its relation kind."""
    coordinate: Coordinate
    kind: RelationKind

    @property
    def exposed(self) -> bool:
        return self.kind.exposed


def sanitize_id(*parts: str) -> str:
    """Concatenate parts and strip every character outside ``[a-zA-Z0-9]``."""
    return _UNSAFE_ID_CHARS.sub("", "".join(parts))


def node_id(coordinate: Coordinate, include_version: bool = False) -> str:
    """Stable node identity used to deduplicate nodes in a module graph.

    Raises:
        UnresolvableCoordinateError: If an identity field is empty
    """
    if isinstance(coordinate, LibraryCoordinate):
        if not coordinate.group or not coordinate.artifact:
            raise UnresolvableCoordinateError(
                f"Library coordinate '{coordinate.notation}' is missing its group or artifact"
            )
        parts = [coordinate.group, coordinate.artifact]
        if include_version:
            parts.append(coordinate.version)
    else:
        if not coordinate.name:
            raise UnresolvableCoordinateError(f"Module '{coordinate.path}' has no name")
        parts = [coordinate.group, coordinate.name]

    identity = sanitize_id(*parts)
    if not identity:
        raise UnresolvableCoordinateError(f"Coordinate '{coordinate}' has no safe identity")
    return identity


def module_path_id(module: ModuleCoordinate) -> str:
    """Node identity of a module in a project graph: its path verbatim."""
    if not module.path:
        raise UnresolvableCoordinateError(f"Module '{module.name}' has no path")
    return module.path


# group -> prefix added to the artifact name when it is too generic on its own
_GROUP_PREFIXES = {
    "com.squareup.sqldelight": "sqldelight",
    "com.google.firebase": "firebase",
    "com.google.android.gms": "play-services",
    "io.ktor": "ktor",
}

_ARTIFACT_LABELS = {
    ("org.jetbrains", "annotations"): "jetbrains-annotations",
    ("com.google.code.findbugs", "jsr305"): "findbugs-jsr305",
}


def display_name(coordinate: Coordinate) -> str:
    """Short human readable label for a coordinate."""
    if isinstance(coordinate, ModuleCoordinate):
        return coordinate.name

    group, artifact = coordinate.group, coordinate.artifact
    if (group, artifact) in _ARTIFACT_LABELS:
        return _ARTIFACT_LABELS[(group, artifact)]

    prefix = _GROUP_PREFIXES.get(group)
    if prefix is None and group.startswith("android.arch."):
        prefix = group.removeprefix("android.arch.").replace(".", "-")

    if prefix and not artifact.startswith(prefix):
        return f"{prefix}-{artifact}"
    return artifact
