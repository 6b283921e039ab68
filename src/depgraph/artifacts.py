"""Artifact writer: DOT text and rendered images per generator."""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import RenderEngineError
from .graph.dot import DotRenderer
from .graph.framework import GraphRenderer
from .graph.models import Graph
from .graph.policy import Generator, ProjectGenerator
from .render import RenderEngine

logger = logging.getLogger(__name__)


@dataclass
class ArtifactResult:
    """Files written for one generator."""
    generator: str
    dot_file: Path
    dot_changed: bool
    images: dict[str, Path] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)  # format -> error message

    @property
    def success(self) -> bool:
        return not self.failures


class ArtifactWriter:
    """Writes the artifacts of each generator into its own output directory.

    The DOT file is written first and atomically, so a failing image format
    never leaves it missing or truncated.
    """

    def __init__(self, output_dir: Path, engine: RenderEngine, renderer: GraphRenderer | None = None):
        self.output_dir = Path(output_dir)
        self.engine = engine
        self.renderer = renderer or DotRenderer()

    def directory_for(self, generator: Generator | ProjectGenerator) -> Path:
        return self.output_dir / generator.output_name

    def write(self, graph: Graph, generator: Generator | ProjectGenerator,
              formats: list[str] | None = None) -> ArtifactResult:
        """Serialize the graph and render every requested format."""
        directory = self.directory_for(generator)
        base = directory / generator.output_name

        text = self.renderer.render(graph)
        dot_file = base.with_suffix(self.renderer.get_file_extension())
        changed = write_atomic(dot_file, text.encode("utf-8"))
        result = ArtifactResult(generator=generator.name, dot_file=dot_file, dot_changed=changed)

        for format in formats if formats is not None else generator.output_formats:
            image_file = base.with_suffix(f".{format}")
            try:
                data = self.engine.render(text, format)
            except RenderEngineError as e:
                logger.warning(f"{generator.output_name}: {e}")
                result.failures[format] = str(e)
                continue
            write_atomic(image_file, data)
            result.images[format] = image_file

        logger.info(f"Wrote {generator.output_name} to {directory}")
        return result


def write_atomic(path: Path, data: bytes) -> bool:
    """Write bytes through a temporary file and rename it into place.

    Returns False without touching the file when its content is already equal.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists() and path.read_bytes() == data:
        return False

    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    return True
