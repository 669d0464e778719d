"""Command-line interface for the mouse mover."""

from __future__ import annotations

import logging
import random
from typing import Optional

import typer

from .config import MoverSettings
from .paths import get_log_path

app = typer.Typer(help="Keep the workstation awake by moving the mouse when idle.")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@app.callback(no_args_is_help=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also write logs to the per-user log file."
    ),
) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(get_log_path(), encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
    )
    ctx.obj = {"verbose": verbose}


@app.command()
def run(
    ctx: typer.Context,
    idle_seconds: int = typer.Option(
        30,
        "--idle",
        min=1,
        help="Idle threshold before moving the mouse (seconds).",
    ),
    interval_seconds: int = typer.Option(
        5,
        "--interval",
        min=1,
        help="How often to check for idleness (seconds).",
    ),
    jitter: int = typer.Option(
        1,
        "--jitter",
        min=0,
        help="Max pixel jitter per step.",
    ),
    fail_safe: bool = typer.Option(
        False,
        "--fail-safe/--no-fail-safe",
        help="Abort a movement when the pointer is pushed into a screen corner.",
    ),
) -> None:
    """Move the mouse whenever the workstation has been idle too long."""
    from .desktop import PointerError
    from .runner import run_mover

    settings = MoverSettings.from_intervals(
        idle_seconds=idle_seconds,
        interval_seconds=interval_seconds,
        jitter_pixels=jitter,
        verbose=bool(ctx.obj and ctx.obj.get("verbose")),
        fail_safe=fail_safe,
    )
    try:
        run_mover(settings)
    except PointerError as exc:
        logging.getLogger(__name__).error("%s", exc)
        raise typer.Exit(code=1) from exc


@app.command()
def plan(
    x: int = typer.Option(..., "--x", help="Starting X coordinate."),
    y: int = typer.Option(..., "--y", help="Starting Y coordinate."),
    width: int = typer.Option(1920, "--width", min=1, help="Screen width in pixels."),
    height: int = typer.Option(1080, "--height", min=1, help="Screen height in pixels."),
    jitter: int = typer.Option(1, "--jitter", min=0, help="Max pixel jitter per step."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a repeatable path."),
) -> None:
    """Print a synthesized movement without touching the pointer."""
    from .models import Point, ScreenBounds
    from .motion import MotionSynthesizer

    synthesizer = MotionSynthesizer(random.Random(seed))
    motion = synthesizer.plan(Point(x, y), ScreenBounds(width, height), jitter)
    typer.echo(
        f"From ({motion.start.x},{motion.start.y}) towards "
        f"({motion.target.x},{motion.target.y}) in {len(motion)} steps, "
        f"{motion.total_delay_ms} ms"
    )
    for index, step in enumerate(motion, start=1):
        typer.echo(f"  {index:>3} ({step.point.x},{step.point.y}) +{step.delay_ms}ms")


@app.command()
def where() -> None:
    """Print the current pointer position and screen size."""
    from .desktop import PointerError, PyAutoGuiPointer

    try:
        pointer = PyAutoGuiPointer()
        position = pointer.position()
        bounds = pointer.screen_bounds()
    except PointerError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Pointer: ({position.x},{position.y})")
    typer.echo(f"Screen:  {bounds.width}x{bounds.height}")


@app.command("log-path")
def log_path() -> None:
    """Print where --log-file writes."""
    typer.echo(str(get_log_path()))
