"""Graph model, builders and DOT rendering for dependency graphs."""

from .dot import DotRenderer
from .framework import DependencyView, GraphRenderer
from .generator import GeneratedGraph, GraphGenerator
from .models import Edge, Graph, Node, RankGroup
from .module_builder import ModuleGraphBuilder
from .policy import (
    ALL,
    API,
    PROJECT_ALL,
    TEST,
    Generator,
    GeneratorRegistry,
    IncludeKinds,
    ModuleColors,
    ProjectGenerator,
)
from .project_builder import ProjectGraphBuilder

__all__ = [
    "ALL",
    "API",
    "PROJECT_ALL",
    "TEST",
    "DependencyView",
    "DotRenderer",
    "Edge",
    "GeneratedGraph",
    "Generator",
    "GeneratorRegistry",
    "Graph",
    "GraphGenerator",
    "GraphRenderer",
    "IncludeKinds",
    "ModuleColors",
    "ModuleGraphBuilder",
    "Node",
    "ProjectGenerator",
    "ProjectGraphBuilder",
    "RankGroup",
]
