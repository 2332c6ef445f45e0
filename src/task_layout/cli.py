from __future__ import annotations

import sys

import typer
from loguru import logger

from task_layout.errors import LayoutConfigError, TaskLayoutError, TaskLoadError
from task_layout.estimate import EstimateAggregator
from task_layout.graph import build_maps
from task_layout.io.load_tasks import load_tasks
from task_layout.layout.config import DEFAULT_CONFIG, load_layout_config
from task_layout.layout.pipeline import full_layout_with_config
from task_layout.renderers.json import JsonRenderer
from task_layout.renderers.text import TextRenderer

app = typer.Typer(add_completion=False, no_args_is_help=True)

FORMATS = ("json", "text")


@app.callback()
def _callback() -> None:
    """Task relationship layout CLI."""
    return


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "ERROR", format="{level}: {message}")
    logger.enable("task_layout")


def _print_errors(errors: list[TaskLayoutError]) -> None:
    for e in sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code)):
        typer.echo(str(e), err=True)


@app.command("layout")
def layout(
    path: str = typer.Argument(..., help="Path to a task file (.yaml/.yml/.json)"),
    config: str | None = typer.Option(None, "--config", help="Optional YAML file overriding layout geometry"),
    format: str = typer.Option("json", "--format", help="Output format: json|text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log layout diagnostics to stderr"),
) -> None:
    """Lay out a task file and print nodes and edges."""
    if format not in FORMATS:
        _print_errors(
            [
                TaskLayoutError(
                    code="E_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: {', '.join(FORMATS)})",
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)

    _configure_logging(verbose)

    layout_config = DEFAULT_CONFIG
    if config:
        try:
            layout_config = load_layout_config(config)
        except LayoutConfigError as e:
            _print_errors([e])
            raise typer.Exit(code=2)

    try:
        tasks = load_tasks(path)
    except TaskLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    result = full_layout_with_config(tasks, layout_config)
    renderer = JsonRenderer() if format == "json" else TextRenderer()
    typer.echo(renderer.render(result))


@app.command("estimates")
def estimates(
    path: str = typer.Argument(..., help="Path to a task file (.yaml/.yml/.json)"),
) -> None:
    """Print each task's own estimate and its total including subtasks."""
    _configure_logging(False)
    try:
        tasks = load_tasks(path)
    except TaskLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    graph = build_maps(tasks)
    aggregator = EstimateAggregator(graph)
    for tid, total in aggregator.totals().items():
        task = graph.tasks[tid]
        typer.echo(f"{tid}\t{graph.estimates[tid]:g}\t{total:g}\t{task.title}")


def main() -> None:
    app(prog_name="task-layout")
