"""Pytest configuration and fixtures for depgraph tests."""

import json

import pytest

from depgraph.models.snapshot import BuildSnapshot, SnapshotView

KOTLIN_STDLIB = "org.jetbrains.kotlin:kotlin-stdlib:1.2.30"
RXJAVA = "io.reactivex.rxjava2:rxjava:2.1.10"

LIBRARIES = [
    {"coordinate": KOTLIN_STDLIB,
     "dependencies": [{"library": "org.jetbrains:annotations:13.0", "kind": "api"}]},
    {"coordinate": RXJAVA,
     "dependencies": [{"library": "org.reactivestreams:reactive-streams:1.0.2", "kind": "api"}]},
]


@pytest.fixture
def single_snapshot():
    """Single module build: api kotlin-stdlib, implementation rxjava."""
    return {
        "build": "single",
        "modules": [
            {"path": ":", "dependencies": [
                {"library": KOTLIN_STDLIB, "kind": "api"},
                {"library": RXJAVA, "kind": "implementation"},
            ]},
        ],
        "libraries": LIBRARIES,
    }


@pytest.fixture
def multi_snapshot():
    """Multi module build: app -> {lib1, lib2} -> lib -> rxjava, plus an empty module."""
    return {
        "build": "multi",
        "modules": [
            {"path": ":lib", "dependencies": [
                {"library": RXJAVA, "kind": "api"},
            ]},
            {"path": ":lib1", "dependencies": [
                {"module": ":lib", "kind": "api"},
                {"library": KOTLIN_STDLIB, "kind": "implementation"},
            ]},
            {"path": ":lib2", "dependencies": [
                {"module": ":lib", "kind": "api"},
            ]},
            {"path": ":app", "dependencies": [
                {"module": ":lib1", "kind": "implementation"},
                {"module": ":lib2", "kind": "implementation"},
            ]},
            {"path": ":empty"},
        ],
        "libraries": LIBRARIES,
    }


@pytest.fixture
def cyclic_snapshot():
    """Two modules depending on each other through test relations."""
    return {
        "build": "cyclic",
        "modules": [
            {"path": ":a", "dependencies": [{"module": ":b", "kind": "test"}]},
            {"path": ":b", "dependencies": [{"module": ":a", "kind": "test"}]},
        ],
    }


@pytest.fixture
def single_view(single_snapshot):
    return SnapshotView(BuildSnapshot(**single_snapshot))


@pytest.fixture
def multi_view(multi_snapshot):
    return SnapshotView(BuildSnapshot(**multi_snapshot))


@pytest.fixture
def cyclic_view(cyclic_snapshot):
    return SnapshotView(BuildSnapshot(**cyclic_snapshot))


@pytest.fixture
def snapshot_file(tmp_path, multi_snapshot):
    """Multi module snapshot written to disk."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(multi_snapshot), encoding="utf-8")
    return path
