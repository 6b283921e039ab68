"""Unit tests for the snapshot-backed dependency view."""

import json

import pytest

from depgraph.exceptions import SnapshotError, UnresolvableCoordinateError
from depgraph.graph.policy import all_kinds, exposed_kinds
from depgraph.models.coordinates import LibraryCoordinate, ModuleCoordinate, RelationKind
from depgraph.models.snapshot import BuildSnapshot, DependencyEntry, SnapshotView


class TestSnapshotModels:

    def test_dependency_needs_exactly_one_target(self):
        with pytest.raises(ValueError):
            DependencyEntry()
        with pytest.raises(ValueError):
            DependencyEntry(module=":a", library="g:a:1")

    def test_default_kind(self):
        assert DependencyEntry(module=":a").kind == RelationKind.IMPLEMENTATION

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValueError):
            BuildSnapshot(build="b", unexpected=True)


class TestSnapshotView:

    def test_module_defaults(self, multi_view):
        assert multi_view.build_name == "multi"
        assert multi_view.module(":lib1") == ModuleCoordinate(path=":lib1", name="lib1", group="multi")

    def test_root_module_takes_build_name(self, single_view):
        assert single_view.all_modules() == [ModuleCoordinate(path=":", name="single", group="")]

    def test_all_modules_in_build_order(self, multi_view):
        assert [m.path for m in multi_view.all_modules()] == [":lib", ":lib1", ":lib2", ":app", ":empty"]

    def test_module_children_filtered(self, multi_view):
        lib1 = multi_view.module(":lib1")

        assert [d.coordinate for d in multi_view.children(lib1, all_kinds)] == [
            multi_view.module(":lib"),
            LibraryCoordinate("org.jetbrains.kotlin", "kotlin-stdlib", "1.2.30"),
        ]
        assert [d.kind for d in multi_view.children(lib1, exposed_kinds)] == [RelationKind.API]

    def test_library_children_not_filtered(self, single_view):
        kotlin = LibraryCoordinate.parse("org.jetbrains.kotlin:kotlin-stdlib:1.2.30")

        children = single_view.children(kotlin, lambda kind: False)
        assert [d.coordinate for d in children] == [LibraryCoordinate("org.jetbrains", "annotations", "13.0")]

    def test_unknown_library_has_no_children(self, single_view):
        assert single_view.children(LibraryCoordinate("x", "y", "1"), all_kinds) == []

    def test_unknown_module(self, multi_view):
        with pytest.raises(UnresolvableCoordinateError, match=":ghost"):
            multi_view.module(":ghost")
        with pytest.raises(UnresolvableCoordinateError):
            multi_view.children(ModuleCoordinate(path=":ghost", name="ghost"), all_kinds)

    def test_from_file(self, snapshot_file):
        view = SnapshotView.from_file(snapshot_file)
        assert len(view.all_modules()) == 5

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError, match="not found"):
            SnapshotView.from_file(tmp_path / "missing.json")

    def test_from_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[")
        with pytest.raises(SnapshotError, match="Invalid JSON"):
            SnapshotView.from_file(path)

    def test_from_invalid_snapshot(self, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps({"modules": []}))
        with pytest.raises(SnapshotError, match="Invalid snapshot"):
            SnapshotView.from_file(path)

    def test_from_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"build": "\xff\xfe"}')
        with pytest.raises(SnapshotError, match="not valid UTF-8"):
            SnapshotView.from_file(path)

    def test_from_directory(self, tmp_path):
        with pytest.raises(SnapshotError, match="Cannot read snapshot"):
            SnapshotView.from_file(tmp_path)
