"""CLI application entry point for speechbubble.

This module provides the main CLI interface using Typer.
"""

import json
import time
from pathlib import Path
from typing import Annotated

import typer

from speechbubble import __version__
from speechbubble.cli.output import (
    console,
    create_progress,
    print_batch_success,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_header,
    print_measurer_info,
    print_render_summary,
    print_step,
    print_success,
)
from speechbubble.config import (
    BubbleShape,
    BubbleStyle,
    LoggingConfig,
    ProcessingConfig,
    SpeechBubbleSettings,
)
from speechbubble.core import BubbleProcessor, BubbleRenderer, EstimatedTextMeasurer, TextMeasurer
from speechbubble.domain import BubbleSpec, Point, Tail
from speechbubble.exceptions import (
    DegenerateGeometryError,
    FontLoadError,
    RenderSaveError,
    SpeechBubbleError,
)
from speechbubble.io import FontTextMeasurer, SvgWriter
from speechbubble.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="speechbubble",
    help="Render comic speech bubbles with tapered tails and shape-following text.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Speechbubble[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_point(value: str) -> Point:
    """Parse an "X,Y" option value.

    Raises:
        typer.BadParameter: If the value is not two comma-separated numbers
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(f"Expected X,Y but got '{value}'")
    try:
        return Point(float(parts[0]), float(parts[1]))
    except ValueError:
        raise typer.BadParameter(f"Expected X,Y but got '{value}'") from None


def _make_measurer(font: Path | None) -> TextMeasurer:
    if font is None:
        return EstimatedTextMeasurer()
    if not font.is_file():
        raise FontLoadError(str(font), "file not found")
    return FontTextMeasurer(font)


def _check_output_modes(verbose: bool, quiet: bool) -> None:
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render comic speech bubbles."""


@app.command()
def render(
    text: Annotated[
        str,
        typer.Option("--text", "-t", help="Dialogue text"),
    ] = "",
    center: Annotated[
        str,
        typer.Option("--center", help="Bubble center as X,Y"),
    ] = "300,200",
    width: Annotated[
        float,
        typer.Option("--width", help="Nominal bubble width", min=0.0),
    ] = 300.0,
    height: Annotated[
        float,
        typer.Option("--height", help="Nominal bubble height", min=0.0),
    ] = 200.0,
    shape: Annotated[
        BubbleShape,
        typer.Option("--shape", "-s", help="Body shape", case_sensitive=False),
    ] = BubbleShape.ROUNDED_RECT,
    corners: Annotated[
        list[str] | None,
        typer.Option("--corner", help="Tail waypoint as X,Y (repeatable, center to tip order)"),
    ] = None,
    tip: Annotated[
        str,
        typer.Option("--tip", help="Tail tip as X,Y"),
    ] = "420,380",
    seed: Annotated[
        int,
        typer.Option("--seed", help="Seed for sketch and cloud shapes"),
    ] = 12345,
    font_size: Annotated[
        float,
        typer.Option("--font-size", help="Font size", min=1.0),
    ] = 40.0,
    line_height: Annotated[
        float,
        typer.Option("--line-height", help="Distance between baselines", min=1.0),
    ] = 50.0,
    padding: Annotated[
        float,
        typer.Option("--padding", help="Text padding", min=0.0),
    ] = 20.0,
    corner_radius: Annotated[
        float,
        typer.Option("--corner-radius", help="Corner radius for rounded rectangles", min=0.0),
    ] = 20.0,
    tail_width: Annotated[
        float,
        typer.Option("--tail-width", help="Tail half-width per tail segment", min=0.1, max=50.0),
    ] = 4.0,
    font: Annotated[
        Path | None,
        typer.Option("--font", "-f", help="TTF/OTF file used to measure text"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write an SVG document to this path"),
    ] = None,
    page_width: Annotated[
        float,
        typer.Option("--page-width", help="SVG document width", min=1.0),
    ] = 600.0,
    page_height: Annotated[
        float,
        typer.Option("--page-height", help="SVG document height", min=1.0),
    ] = 400.0,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose console output"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Render a single bubble and print its layout.

    Example:
        speechbubble render --text "Hello there" --corner 330,260 --tip 420,380 -o bubble.svg
    """
    _check_output_modes(verbose, quiet)

    start = time.time()
    center_point = parse_point(center)
    tail = Tail(
        corners=tuple(parse_point(c) for c in corners or []),
        tip=parse_point(tip),
    )

    settings = SpeechBubbleSettings(
        style=BubbleStyle(
            corner_radius=corner_radius,
            tail_width_factor=tail_width,
            text_padding=padding,
            font_size=font_size,
            line_height=line_height,
        ),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    try:
        measurer = _make_measurer(font)
        if not quiet:
            print_step("Rendering")
            print_measurer_info(str(font) if font else None)

        spec = BubbleSpec(
            center=center_point,
            width=width,
            height=height,
            tail=tail,
            text=text,
            shape=shape,
            seed=seed,
            style=settings.style,
        )
        result = BubbleRenderer(settings).render(spec, measurer)

        if not quiet:
            print_render_summary(result, spec.bubble_id, verbose=verbose)

        if output is not None:
            SvgWriter(settings.style).save(output, {spec.bubble_id: result}, page_width, page_height)

        if not quiet:
            print_success(str(output) if output else None, time.time() - start)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except DegenerateGeometryError as e:
        print_error("Cannot render bubble", details=e.reason)
        raise typer.Exit(code=1)
    except RenderSaveError as e:
        print_error(f"Could not save SVG: {e.reason}")
        raise typer.Exit(code=1)
    except SpeechBubbleError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _load_specs(path: Path) -> list[BubbleSpec]:
    """Read bubble specs from a JSON list or a {"bubbles": [...]} object."""
    data = json.loads(path.read_text(encoding="utf-8"))
    items = data["bubbles"] if isinstance(data, dict) else data
    specs = []
    for i, item in enumerate(items):
        item = {"id": f"bubble-{i + 1}", **item}
        specs.append(BubbleSpec.from_dict(item))
    return specs


@app.command()
def batch(
    input_file: Annotated[
        Path,
        typer.Argument(help="JSON file with a list of bubbles", show_default=False),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write an SVG document to this path"),
    ] = None,
    page_width: Annotated[
        float,
        typer.Option("--page-width", help="SVG document width", min=1.0),
    ] = 800.0,
    page_height: Annotated[
        float,
        typer.Option("--page-height", help="SVG document height", min=1.0),
    ] = 600.0,
    font: Annotated[
        Path | None,
        typer.Option("--font", "-f", help="TTF/OTF file used to measure text"),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-j", help="Number of parallel workers (default: auto)", min=1),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose console output"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Render a page of bubbles in parallel.

    Each entry uses the serialized bubble format: center, width, height,
    tail {corners, tip}, and optionally text, shape, seed, style and id.
    """
    _check_output_modes(verbose, quiet)

    if not input_file.is_file():
        print_error(
            f"Input file not found: {input_file}",
            details=f"The file '{input_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    try:
        specs = _load_specs(input_file)
    except (ValueError, KeyError, TypeError) as e:
        print_error(f"Invalid bubble file: {input_file}", details=str(e))
        raise typer.Exit(code=1)

    settings = SpeechBubbleSettings(
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )

    if not quiet:
        print_header(__version__)

    processor = BubbleProcessor(settings)
    if quiet:
        configure_logging(log_file=log_file, console_level=log_level, quiet=True)

    try:
        measurer = _make_measurer(font)
        if not quiet:
            print_step(f"Rendering {len(specs)} bubbles")
            print_measurer_info(str(font) if font else None)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task("Rendering", total=len(specs))

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    renders, stats = processor.process(
                        specs, measurer, max_workers=workers, progress_callback=update_progress
                    )
            else:
                renders, stats = processor.process(specs, measurer, max_workers=workers)
        except KeyboardInterrupt:
            if not quiet:
                last = processor.last_stats
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=last.processed_count if last else 0,
                    cancelled=last.cancelled_count if last else 0,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if verbose:
            for spec in specs:
                if spec.bubble_id in renders:
                    print_step(spec.bubble_id)
                    print_render_summary(renders[spec.bubble_id], spec.bubble_id, verbose=True)

        if output is not None:
            ordered = {s.bubble_id: renders[s.bubble_id] for s in specs if s.bubble_id in renders}
            styles = {s.bubble_id: s.style for s in specs}
            SvgWriter(settings.style).save(output, ordered, page_width, page_height, styles=styles)

        if not quiet:
            print_batch_success(
                output_path=str(output) if output else None,
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                truncated=stats.truncated_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_ms if stats.timings_ms else None,
                min_time_ms=stats.min_ms if stats.timings_ms else None,
                max_time_ms=stats.max_ms if stats.timings_ms else None,
            )
            for bubble_id, error in stats.errors:
                print_error(f"Bubble '{bubble_id}' failed", details=error)

        if stats.error_count:
            raise typer.Exit(code=1)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except RenderSaveError as e:
        print_error(f"Could not save SVG: {e.reason}")
        raise typer.Exit(code=1)
    except SpeechBubbleError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
