"""Graph data models shared by the builders and the DOT renderer."""

from dataclasses import dataclass, field


@dataclass
class Node:
    """A graph node. Attributes keep their insertion order."""
    id: str
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.attributes.get("label", self.id)


@dataclass
class Edge:
    """A directed "depends on" relation between two nodes."""
    source: str
    target: str
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> tuple:
        return (self.source, self.target, tuple(self.attributes.items()))


@dataclass
class RankGroup:
    """Nodes hinted to render on the same rank."""
    node_ids: list[str] = field(default_factory=list)
    rank: str = "same"

    def add(self, node_id: str) -> None:
        if node_id not in self.node_ids:
            self.node_ids.append(node_id)


@dataclass
class Graph:
    """Complete graph ready for rendering.

    Nodes are keyed by id and merged on re-insertion, edges are unique and
    must reference nodes already present. Both keep insertion order, which
    the renderer reproduces verbatim.
    """
    name: str | None = None
    graph_attributes: dict[str, str] = field(default_factory=dict)
    node_defaults: dict[str, str] = field(default_factory=dict)
    nodes: dict[str, Node] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)
    rank_groups: list[RankGroup] = field(default_factory=list)
    _edge_keys: set = field(default_factory=set, init=False, repr=False, compare=False)
    _sealed: bool = field(default=False, init=False, repr=False, compare=False)

    def add_node(self, node_id: str, attributes: dict[str, str] | None = None) -> Node:
        """Add a node, or merge attributes into the existing node with that id."""
        self._check_mutable()
        node = self.nodes.get(node_id)
        if node is None:
            node = Node(id=node_id)
            self.nodes[node_id] = node
        if attributes:
            node.attributes.update(attributes)
        return node

    def add_edge(self, source: str, target: str, attributes: dict[str, str] | None = None) -> bool:
        """Add an edge. Returns False if an identical edge already exists.

        Raises:
            ValueError: If either endpoint is not a node of this graph
        """
        self._check_mutable()
        for endpoint in (source, target):
            if endpoint not in self.nodes:
                raise ValueError(f"Edge {source} -> {target} references unknown node '{endpoint}'")

        edge = Edge(source=source, target=target, attributes=dict(attributes or {}))
        if edge.key in self._edge_keys:
            return False
        self._edge_keys.add(edge.key)
        self.edges.append(edge)
        return True

    def add_rank_group(self, node_ids: list[str] | None = None) -> RankGroup:
        """Add a same-rank group containing the given nodes."""
        self._check_mutable()
        group = RankGroup()
        for node_id in node_ids or []:
            if node_id not in self.nodes:
                raise ValueError(f"Rank group references unknown node '{node_id}'")
            group.add(node_id)
        self.rank_groups.append(group)
        return group

    def seal(self) -> "Graph":
        """Mark the graph as complete; further mutation raises RuntimeError."""
        self._sealed = True
        return self

    def _check_mutable(self) -> None:
        if self._sealed:
            raise RuntimeError("Graph is sealed and can no longer be modified")

    def successors(self, node_id: str) -> list[str]:
        return [edge.target for edge in self.edges if edge.source == node_id]

    def root_ids(self) -> list[str]:
        """Node ids with no incoming edge, in node order."""
        targets = {edge.target for edge in self.edges}
        return [node_id for node_id in self.nodes if node_id not in targets]
