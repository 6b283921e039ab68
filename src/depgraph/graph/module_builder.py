"""Module graph builder: a module together with every library it depends on."""

import logging

from ..models.coordinates import Coordinate, ModuleCoordinate, display_name, node_id
from .framework import DependencyView
from .models import Graph
from .policy import Generator

logger = logging.getLogger(__name__)

FONT_NAME = "Times New Roman"


class ModuleGraphBuilder:
    """Builds the module graph of one or more root modules.

    Traversal is depth first from each root. A coordinate already on the
    current path is not descended into again, but the edge to it is kept, so
    cyclic data terminates without losing relations. Nodes are created in
    pre-order; edges are written grouped by source node in node order.
    """

    def __init__(self, view: DependencyView, generator: Generator):
        self.view = view
        self.generator = generator

    def build(self, roots: list[ModuleCoordinate] | None = None) -> Graph:
        """Build the graph for the given modules (default: every module of the build).

        Raises:
            UnresolvableCoordinateError: If a coordinate cannot be identified
        """
        roots = list(roots) if roots is not None else self.view.all_modules()
        logger.info(f"Building module graph '{self.generator.name}' for {len(roots)} module(s)")

        graph = Graph(name="G", node_defaults={"fontname": FONT_NAME})
        links: dict[str, list[str]] = {}
        expanded: set[Coordinate] = set()

        for root in self._roots_first(roots):
            self._walk(root, graph, links, expanded)

        for source in list(graph.nodes):
            for target in links.get(source, []):
                graph.add_edge(source, target)

        root_ids = [node_id(root, self.generator.include_version) for root in roots]
        if len(root_ids) == 1:
            graph.add_rank_group(root_ids)
        else:
            unreferenced = set(graph.root_ids())
            graph.add_rank_group([root_id for root_id in graph.nodes
                                  if root_id in root_ids and root_id in unreferenced])

        logger.info(f"Generated module graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges")
        return graph.seal()

    def _roots_first(self, roots: list[ModuleCoordinate]) -> list[ModuleCoordinate]:
        """Order modules so those no other module depends on are walked first."""
        if len(roots) < 2:
            return roots

        referenced = set()
        for module in roots:
            for dependency in self.view.children(module, self.generator.include):
                if isinstance(dependency.coordinate, ModuleCoordinate):
                    referenced.add(dependency.coordinate.path)

        return ([module for module in roots if module.path not in referenced] +
                [module for module in roots if module.path in referenced])

    def _walk(self, root: ModuleCoordinate, graph: Graph, links: dict[str, list[str]],
              expanded: set[Coordinate]) -> None:
        # Frames: (coordinate, node id, ids on the path, remaining children)
        stack: list = []
        self._enter(root, graph, links, expanded, frozenset(), stack)

        while stack:
            coordinate, current, path, children = stack[-1]
            dependency = next(children, None)
            if dependency is None:
                expanded.add(coordinate)
                stack.pop()
                continue

            child_id = node_id(dependency.coordinate, self.generator.include_version)
            targets = links[current]
            if child_id not in targets:
                targets.append(child_id)

            if child_id in path:
                logger.debug(f"Cycle: {current} -> {child_id} leads back onto the current path")
            else:
                self._enter(dependency.coordinate, graph, links, expanded, path, stack)

    def _enter(self, coordinate: Coordinate, graph: Graph, links: dict[str, list[str]],
               expanded: set[Coordinate], ancestors: frozenset[str], stack: list) -> None:
        current = self._add_node(coordinate, graph)
        links.setdefault(current, [])
        # Versions sharing a node id are expanded separately
        if coordinate in expanded:
            return
        children = iter(self.view.children(coordinate, self.generator.include))
        stack.append((coordinate, current, ancestors | {current}, children))

    def _add_node(self, coordinate: Coordinate, graph: Graph) -> str:
        identity = node_id(coordinate, self.generator.include_version)
        if identity not in graph.nodes:
            graph.add_node(identity, {"shape": "rectangle", "label": display_name(coordinate)})
        return identity
