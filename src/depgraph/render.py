"""Rendering of DOT text to image formats through Graphviz."""

import logging
from abc import ABC, abstractmethod
from enum import Enum

import graphviz

from .exceptions import RenderEngineError

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Image formats rendered next to the DOT file."""
    PNG = "png"
    SVG = "svg"
    PDF = "pdf"
    JPG = "jpg"


class RenderEngine(ABC):
    """Turns DOT text into the bytes of one output format."""

    @abstractmethod
    def render(self, text: str, format: str) -> bytes:
        """Render DOT text.

        Raises:
            RenderEngineError: If the engine is missing or rejects the input
        """
        pass


class GraphvizEngine(RenderEngine):
    """Render engine invoking the Graphviz executables."""

    def __init__(self, layout: str = "dot"):
        self.layout = layout

    def render(self, text: str, format: str) -> bytes:
        logger.debug(f"Rendering {format} with graphviz '{self.layout}'")
        try:
            return graphviz.pipe(self.layout, format, text.encode("utf-8"))
        except graphviz.ExecutableNotFound as e:
            raise RenderEngineError(format, f"Graphviz executable not found: {e}") from e
        except graphviz.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", "replace") if isinstance(e.stderr, bytes) else e.stderr
            raise RenderEngineError(format, (stderr or str(e)).strip()) from e
        except ValueError as e:
            raise RenderEngineError(format, str(e)) from e
