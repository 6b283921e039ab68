"""DOT renderer producing the byte-stable textual graph description."""

import logging

from .framework import GraphRenderer
from .models import Edge, Graph, Node, RankGroup

logger = logging.getLogger(__name__)


class DotRenderer(GraphRenderer):
    """Graphviz DOT renderer.

    Output depends only on the graph value: nodes, rank groups and edges are
    written in insertion order and attributes in their own insertion order.
    Lines are joined with ``\\n`` and there is no trailing newline.
    """

    @property
    def format_name(self) -> str:
        return "dot"

    def get_file_extension(self) -> str:
        return ".dot"

    def render(self, graph: Graph) -> str:
        """Render graph as a DOT digraph."""
        lines = []

        # Header
        if graph.name:
            lines.append(f"digraph {self._quote(graph.name)} {{")
        else:
            lines.append("digraph {")

        if graph.graph_attributes:
            lines.append(f"graph {self._attributes(graph.graph_attributes)}")
        if graph.node_defaults:
            lines.append(f"node {self._attributes(graph.node_defaults)}")

        for node in graph.nodes.values():
            lines.append(self._render_node(node))

        for group in graph.rank_groups:
            lines.extend(self._render_rank_group(group))

        for edge in graph.edges:
            lines.append(self._render_edge(edge))

        lines.append("}")

        logger.debug(f"Rendered {len(graph.nodes)} nodes and {len(graph.edges)} edges as DOT")
        return "\n".join(lines)

    def _render_node(self, node: Node) -> str:
        if node.attributes:
            return f"{self._quote(node.id)} {self._attributes(node.attributes)}"
        return self._quote(node.id)

    def _render_rank_group(self, group: RankGroup) -> list[str]:
        lines = ["{", f"graph {self._attributes({'rank': group.rank})}"]
        lines.extend(self._quote(node_id) for node_id in group.node_ids)
        lines.append("}")
        return lines

    def _render_edge(self, edge: Edge) -> str:
        line = f"{self._quote(edge.source)} -> {self._quote(edge.target)}"
        if edge.attributes:
            line += f" {self._attributes(edge.attributes)}"
        return line

    def _attributes(self, attributes: dict[str, str]) -> str:
        pairs = ",".join(f"{self._quote(key)}={self._quote(value)}" for key, value in attributes.items())
        return f"[{pairs}]"

    def _quote(self, value: str) -> str:
        """Quote an identifier, escaping backslashes and double quotes."""
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
