"""depgraph - Dependency graphs for multi-module builds.

depgraph turns the resolved dependencies of a build into module graphs
(a module and all of its libraries) and project graphs (how the modules of
a build depend on one another), written as DOT and rendered with Graphviz.
"""

__version__ = "0.1.0"
__author__ = "rpapub"
__email__ = "contact@rpapub.dev"
__description__ = "Dependency graphs for multi-module builds"

from depgraph.config import DepgraphConfig

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "DepgraphConfig",
]
