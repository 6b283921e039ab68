"""Project graph builder: how the modules of a build depend on one another."""

import logging

from ..exceptions import UnresolvableCoordinateError
from ..models.coordinates import (
    Coordinate,
    LibraryCoordinate,
    ModuleCoordinate,
    display_name,
    module_path_id,
    node_id,
)
from .framework import DependencyView
from .models import Graph
from .module_builder import FONT_NAME
from .policy import ProjectGenerator

logger = logging.getLogger(__name__)

TITLE_FONT_SIZE = "35"


class ProjectGraphBuilder:
    """Builds the project graph of a build.

    Relations are read per module without recursion; transitivity shows up
    in the graph structure only. Module-to-module cycles are therefore plain
    graph cycles.
    """

    def __init__(self, view: DependencyView, generator: ProjectGenerator):
        self.view = view
        self.generator = generator

    def build(self, root: ModuleCoordinate | None = None) -> Graph:
        """Build the graph of the whole build, or of the modules reachable from ``root``.

        Raises:
            UnresolvableCoordinateError: If a relation references an unknown module
        """
        modules = self.view.all_modules()
        title = root.name if root is not None else self.view.build_name
        logger.info(f"Building project graph '{self.generator.name}' for {title}")

        coordinates: dict[str, Coordinate] = {}
        relations: dict[str, dict[str, bool]] = {}  # source -> {target: exposed}

        for module in modules:
            source = module_path_id(module)
            coordinates[source] = module
            targets = relations.setdefault(source, {})

            for dependency in self.view.children(module, self.generator.include):
                target_coordinate = dependency.coordinate
                if isinstance(target_coordinate, LibraryCoordinate):
                    if not self.generator.include_external_dependencies:
                        continue
                    target = node_id(target_coordinate)
                else:
                    target = module_path_id(target_coordinate)
                coordinates.setdefault(target, target_coordinate)
                targets[target] = targets.get(target, False) or dependency.exposed

        if root is not None:
            if module_path_id(root) not in relations:
                raise UnresolvableCoordinateError(f"Module '{root.path}' is not part of {self.view.build_name}")
            starts = [module_path_id(root)]
        else:
            incoming = {target for targets in relations.values() for target in targets}
            module_ids = [module_path_id(module) for module in modules]
            starts = ([m for m in module_ids if m not in incoming] +
                      [m for m in module_ids if m in incoming])

        order = self._preorder(starts, relations)
        graph = Graph(
            graph_attributes={"fontsize": TITLE_FONT_SIZE, "label": title, "labelloc": "t"},
            node_defaults={"fontname": FONT_NAME, "style": "filled"},
        )

        for identity in order:
            coordinate = coordinates[identity]
            if isinstance(coordinate, ModuleCoordinate):
                attributes = {"fillcolor": self.generator.color(coordinate)}
                if not graph.nodes:
                    attributes["shape"] = "rectangle"
            else:
                attributes = {"label": display_name(coordinate)}
            graph.add_node(identity, attributes)

        for source in order:
            for target, exposed in relations.get(source, {}).items():
                graph.add_edge(source, target, None if exposed else {"style": "dotted"})

        graph.add_rank_group(graph.root_ids())

        logger.info(f"Generated project graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges")
        return graph.seal()

    def _preorder(self, starts: list[str], relations: dict[str, dict[str, bool]]) -> list[str]:
        """Depth-first pre-order of every node reachable from ``starts``."""
        order: list[str] = []
        seen: set[str] = set()

        for start in starts:
            stack = [start]
            while stack:
                identity = stack.pop()
                if identity in seen:
                    continue
                seen.add(identity)
                order.append(identity)
                stack.extend(reversed(list(relations.get(identity, {}))))
        return order
