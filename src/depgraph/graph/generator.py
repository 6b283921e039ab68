"""Graph generation entry point tying views, policies and builders together."""

import logging
from dataclasses import dataclass

from ..exceptions import UnresolvableCoordinateError
from .framework import DependencyView, GraphRenderer
from .models import Graph
from .module_builder import ModuleGraphBuilder
from .policy import Generator, ProjectGenerator
from .project_builder import ProjectGraphBuilder

logger = logging.getLogger(__name__)


@dataclass
class GeneratedGraph:
    """Outcome of one generator: a graph, or the reason it could not be built."""
    generator: Generator | ProjectGenerator
    graph: Graph | None = None
    error: str | None = None

    @property
    def is_project(self) -> bool:
        return isinstance(self.generator, ProjectGenerator)


class GraphGenerator:
    """Builds module and project graphs from a dependency view.

    Every call builds a fresh graph; nothing is shared between generators, so
    calls for different generators may run concurrently.
    """

    def __init__(self, view: DependencyView):
        self.view = view
        self.renderers: dict[str, GraphRenderer] = {}

    def add_renderer(self, renderer: GraphRenderer) -> None:
        """Add a graph renderer."""
        self.renderers[renderer.format_name] = renderer

    def module_graph(self, generator: Generator, root: str | None = None) -> Graph:
        """Module graph of ``root``, or of the whole build when no root is given."""
        roots = [self.view.module(root)] if root else None
        return ModuleGraphBuilder(self.view, generator).build(roots)

    def project_graph(self, generator: ProjectGenerator, root: str | None = None) -> Graph:
        """Project graph of the whole build, or of the modules reachable from ``root``."""
        module = self.view.module(root) if root else None
        return ProjectGraphBuilder(self.view, generator).build(module)

    def generate_all(self, generators: list[Generator], project_generators: list[ProjectGenerator],
                     root: str | None = None) -> list[GeneratedGraph]:
        """Build one graph per generator.

        A coordinate error only fails the graph it occurred in; the remaining
        generators still run.
        """
        results = []
        for generator in [*generators, *project_generators]:
            try:
                if isinstance(generator, ProjectGenerator):
                    graph = self.project_graph(generator, root)
                else:
                    graph = self.module_graph(generator, root)
                results.append(GeneratedGraph(generator=generator, graph=graph))
            except UnresolvableCoordinateError as e:
                logger.error(f"Generator '{generator.name}' failed: {e}")
                results.append(GeneratedGraph(generator=generator, error=str(e)))
        return results

    def render_graph(self, graph: Graph, format_name: str = "dot") -> str:
        """Render a graph to string.

        Raises:
            ValueError: If no renderer is registered for the format
        """
        if format_name not in self.renderers:
            available = list(self.renderers.keys())
            raise ValueError(f"Unknown format '{format_name}'. Available: {available}")

        renderer = self.renderers[format_name]
        logger.info(f"Rendering graph with {renderer.format_name} renderer")
        return renderer.render(graph)
