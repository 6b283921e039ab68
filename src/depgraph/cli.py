"""CLI interface for depgraph using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from depgraph import __description__, __version__
from depgraph.artifacts import ArtifactWriter
from depgraph.config import load_config
from depgraph.exceptions import DepgraphError
from depgraph.graph import DotRenderer, GraphGenerator
from depgraph.models.snapshot import SnapshotView
from depgraph.render import GraphvizEngine

app = typer.Typer(
    name="depgraph",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"depgraph version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
) -> None:
    """depgraph - Dependency graphs for multi-module builds."""


@app.command()
def generate(
    snapshot: Annotated[
        Path,
        typer.Argument(help="Resolved dependency snapshot (JSON) exported by the build")
    ],
    generator: Annotated[
        Optional[list[str]],
        typer.Option("--generator", "-g", help="Module graph generator to run (repeatable)")
    ] = None,
    project_generator: Annotated[
        Optional[list[str]],
        typer.Option("--project-generator", "-P", help="Project graph generator to run (repeatable)")
    ] = None,
    root: Annotated[
        Optional[str],
        typer.Option("--root", "-r", help="Limit graphs to one module, e.g. ':app'")
    ] = None,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output directory (default: output.dir from config)")
    ] = None,
    format: Annotated[
        Optional[list[str]],
        typer.Option("--format", "-f", help="Image format overriding the generator's formats (repeatable)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .depgraph.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Generate dependency graphs and render them."""
    try:
        depgraph_config = load_config(config)
        _configure_logging("debug" if verbose else depgraph_config.logging.level)

        # Unknown names fail the whole request before anything is built
        if not generator and not project_generator:
            generators = depgraph_config.generator_registry().select()
            project_generators = depgraph_config.project_generator_registry().select()
        else:
            generators = depgraph_config.generator_registry().select(generator or [])
            project_generators = depgraph_config.project_generator_registry().select(project_generator or [])

        view = SnapshotView.from_file(snapshot)
        console.print(f"[green]Generating graphs for:[/green] {view.build_name}")

        graph_generator = GraphGenerator(view)
        results = graph_generator.generate_all(generators, project_generators, root)

        output_dir = out or Path(depgraph_config.output.dir)
        writer = ArtifactWriter(output_dir, GraphvizEngine(), DotRenderer())
        failed = False

        for result in results:
            if result.graph is None:
                console.print(f"[red]Error:[/red] {result.generator.output_name}: {result.error}")
                failed = True
                continue

            artifacts = writer.write(result.graph, result.generator, format or None)
            state = "written" if artifacts.dot_changed else "unchanged"
            console.print(
                f"[green]OK[/green] {result.generator.output_name}: "
                f"{len(result.graph.nodes)} nodes, {len(result.graph.edges)} edges ({artifacts.dot_file}, {state})"
            )
            for image_format, message in artifacts.failures.items():
                console.print(f"[yellow]Warning:[/yellow] {image_format} not rendered: {message}")

        if failed:
            raise typer.Exit(1)

    except DepgraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def show(
    snapshot: Annotated[
        Path,
        typer.Argument(help="Resolved dependency snapshot (JSON) exported by the build")
    ],
    generator: Annotated[
        str,
        typer.Option("--generator", "-g", help="Generator name")
    ] = "ALL",
    project: Annotated[
        bool,
        typer.Option("--project", help="Print the project graph instead of the module graph")
    ] = False,
    root: Annotated[
        Optional[str],
        typer.Option("--root", "-r", help="Limit the graph to one module, e.g. ':app'")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .depgraph.json)")
    ] = None,
) -> None:
    """Print the DOT description of one graph to stdout."""
    try:
        depgraph_config = load_config(config)
        view = SnapshotView.from_file(snapshot)
        graph_generator = GraphGenerator(view)
        graph_generator.add_renderer(DotRenderer())

        if project:
            policy = depgraph_config.project_generator_registry().get(generator)
            graph = graph_generator.project_graph(policy, root)
        else:
            policy = depgraph_config.generator_registry().get(generator)
            graph = graph_generator.module_graph(policy, root)

        typer.echo(graph_generator.render_graph(graph, "dot"))

    except DepgraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def generators(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .depgraph.json)")
    ] = None,
) -> None:
    """List the configured generators."""
    try:
        depgraph_config = load_config(config)
    except DepgraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Generators")
    table.add_column("Type", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Relations")
    table.add_column("Output")
    table.add_column("Formats")

    for entry in depgraph_config.generators:
        generator = entry.to_generator()
        relations = ", ".join(kind.value for kind in entry.include) if entry.include is not None else "all"
        table.add_row("module", entry.name, relations, generator.output_name, ", ".join(generator.output_formats))

    for entry in depgraph_config.project_generators:
        generator = entry.to_generator()
        relations = ", ".join(kind.value for kind in entry.include) if entry.include is not None else "all"
        if entry.include_external_dependencies:
            relations += " (+ external)"
        table.add_row("project", entry.name, relations, generator.output_name, ", ".join(generator.output_formats))

    console.print(table)


if __name__ == "__main__":
    app()
