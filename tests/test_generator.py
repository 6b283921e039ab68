"""Tests for the graph generation entry point."""

import pytest

from depgraph.graph import ALL, API, PROJECT_ALL, DotRenderer, GraphGenerator
from depgraph.models.snapshot import BuildSnapshot, SnapshotView


class TestGraphGenerator:

    def test_module_and_project_graphs(self, multi_view):
        generator = GraphGenerator(multi_view)

        module_graph = generator.module_graph(ALL)
        project_graph = generator.project_graph(PROJECT_ALL)

        assert module_graph.name == "G"
        assert project_graph.name is None
        assert project_graph.graph_attributes["label"] == "multi"

    def test_rooted_graphs(self, multi_view):
        generator = GraphGenerator(multi_view)

        assert list(generator.module_graph(ALL, ":lib").nodes)[0] == "multilib"
        assert generator.project_graph(PROJECT_ALL, ":app").graph_attributes["label"] == "app"

    def test_generate_all_is_independent_per_generator(self, multi_view):
        results = GraphGenerator(multi_view).generate_all([ALL, API], [PROJECT_ALL])

        assert [result.generator.name for result in results] == ["ALL", "API", "ALL"]
        assert [result.is_project for result in results] == [False, False, True]
        assert all(result.graph is not None for result in results)
        assert results[0].graph is not results[1].graph
        assert len(results[0].graph.nodes) > len(results[1].graph.nodes)

    def test_coordinate_error_only_fails_its_graph(self):
        view = SnapshotView(BuildSnapshot(
            build="partly-broken",
            modules=[
                {"path": ":app", "dependencies": [
                    {"module": ":lib", "kind": "api"},
                    {"library": "broken-notation", "kind": "implementation"},
                ]},
                {"path": ":lib"},
            ],
        ))
        results = GraphGenerator(view).generate_all([ALL, API], [PROJECT_ALL])

        assert results[0].graph is None
        assert "broken-notation" in results[0].error
        assert results[1].graph is not None
        assert results[2].graph is not None

    def test_unknown_root_reported(self, multi_view):
        results = GraphGenerator(multi_view).generate_all([ALL], [], root=":ghost")

        assert results[0].graph is None
        assert ":ghost" in results[0].error

    def test_render_graph(self, single_view):
        generator = GraphGenerator(single_view)
        generator.add_renderer(DotRenderer())

        text = generator.render_graph(generator.module_graph(ALL))
        assert text.startswith('digraph "G" {')

    def test_render_graph_unknown_format(self, single_view):
        generator = GraphGenerator(single_view)

        with pytest.raises(ValueError, match="Unknown format 'dot'"):
            generator.render_graph(generator.module_graph(ALL))


class TestConcurrentGeneration:

    def test_parallel_builds_match_sequential(self, multi_view):
        """Test that graphs built concurrently render exactly like sequential ones."""
        from concurrent.futures import ThreadPoolExecutor

        generator = GraphGenerator(multi_view)
        renderer = DotRenderer()
        jobs = [
            lambda: generator.module_graph(ALL),
            lambda: generator.module_graph(API),
            lambda: generator.project_graph(PROJECT_ALL),
            lambda: generator.module_graph(ALL, ":lib1"),
        ]

        sequential = [renderer.render(job()) for job in jobs]
        with ThreadPoolExecutor(max_workers=4) as pool:
            parallel = list(pool.map(lambda job: renderer.render(job()), jobs * 3))

        assert parallel == sequential * 3
