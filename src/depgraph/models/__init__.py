"""Coordinates and resolved dependency snapshots."""

from .coordinates import (
    Coordinate,
    Dependency,
    LibraryCoordinate,
    ModuleCoordinate,
    RelationKind,
    display_name,
    module_path_id,
    node_id,
)

__all__ = [
    "Coordinate",
    "Dependency",
    "LibraryCoordinate",
    "ModuleCoordinate",
    "RelationKind",
    "display_name",
    "module_path_id",
    "node_id",
]
