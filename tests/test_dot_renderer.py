"""Tests for the DOT renderer."""

from depgraph.graph import DotRenderer, Graph


class TestDotRenderer:
    """Exact text produced for hand-built graphs."""

    def setup_method(self):
        self.renderer = DotRenderer()

    def test_format_metadata(self):
        assert self.renderer.format_name == "dot"
        assert self.renderer.get_file_extension() == ".dot"

    def test_anonymous_empty_graph(self):
        assert self.renderer.render(Graph()) == "digraph {\n}"

    def test_named_graph(self):
        assert self.renderer.render(Graph(name="G")) == 'digraph "G" {\n}'

    def test_full_layout_order(self):
        """Test graph attributes, node defaults, nodes, rank groups, then edges."""
        graph = Graph(
            name="G",
            graph_attributes={"label": "title"},
            node_defaults={"fontname": "Times New Roman"},
        )
        graph.add_node("b", {"label": "B"})
        graph.add_node("a")
        graph.add_edge("b", "a", {"style": "dotted", "color": "red"})
        graph.add_edge("a", "b")
        graph.add_rank_group(["b"])
        graph.add_rank_group(["a", "b"])

        assert self.renderer.render(graph) == "\n".join([
            'digraph "G" {',
            'graph ["label"="title"]',
            'node ["fontname"="Times New Roman"]',
            '"b" ["label"="B"]',
            '"a"',
            "{",
            'graph ["rank"="same"]',
            '"b"',
            "}",
            "{",
            'graph ["rank"="same"]',
            '"a"',
            '"b"',
            "}",
            '"b" -> "a" ["style"="dotted","color"="red"]',
            '"a" -> "b"',
            "}",
        ])

    def test_escapes_quotes_and_backslashes(self):
        graph = Graph()
        graph.add_node('say "hi"', {"label": "back\\slash"})

        assert self.renderer.render(graph) == 'digraph {\n"say \\"hi\\"" ["label"="back\\\\slash"]\n}'

    def test_no_trailing_newline(self):
        graph = Graph(name="G")
        graph.add_node("x")

        assert not self.renderer.render(graph).endswith("\n")

    def test_attribute_insertion_order_is_kept(self):
        graph = Graph()
        graph.add_node("n", {"z": "1", "a": "2"})
        graph.add_node("n", {"m": "3"})

        assert '"n" ["z"="1","a"="2","m"="3"]' in self.renderer.render(graph)
