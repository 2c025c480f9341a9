"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""


from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from speechbubble.domain import BubbleRender

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch rendering.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Speechbubble[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_measurer_info(font_path: str | None) -> None:
    """Print which text measurer is in use."""
    if font_path is None:
        console.print(f"  estimated metrics {SYM_DOT} no font file")
        return
    line = Text("  metrics from ")
    line.append(font_path)
    console.print(line)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_truncation_warning(bubble_id: str) -> None:
    console.print(f"  [yellow]{SYM_WARN} Text did not fit bubble '{bubble_id}'; trailing words dropped[/yellow]")


def print_render_summary(render: BubbleRender, bubble_id: str, verbose: bool = False) -> None:
    """Print the interior rectangle and flowed lines of one bubble.

    Args:
        render: Rendered bubble
        bubble_id: Identifier shown in messages
        verbose: Also print the outline path
    """
    rect = render.interior_rect
    console.print(
        f"  interior {rect.width:.1f}×{rect.height:.1f} at ({rect.x:.1f}, {rect.y:.1f})"
        f" {SYM_DOT} {len(render.lines)} lines"
    )

    if render.lines:
        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("#", justify="right")
        table.add_column("x", justify="right")
        table.add_column("y", justify="right")
        table.add_column("text")
        for i, line in enumerate(render.lines, start=1):
            table.add_row(str(i), f"{line.x:.1f}", f"{line.y:.1f}", Text(line.text))
        console.print(table)

    if verbose:
        console.print(Text(f"  {render.path}", style="dim"))

    if render.truncated:
        print_truncation_warning(bubble_id)


def print_success(output_path: str | None, total_time_s: float) -> None:
    """Print single render completion."""
    time_str = _format_time(total_time_s)
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")
    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)


def print_batch_success(
    output_path: str | None,
    total_time_s: float,
    processed: int,
    truncated: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print batch success message with summary.

    Args:
        output_path: Path to output file, if one was written
        total_time_s: Total processing time in seconds
        processed: Number of bubbles rendered
        truncated: Number of bubbles whose text did not fit
        errors: Number of errors encountered
        avg_time_ms: Average render time per bubble in milliseconds
        min_time_ms: Minimum render time per bubble in milliseconds
        max_time_ms: Maximum render time per bubble in milliseconds
    """
    print_success(output_path, total_time_s)

    error_style = "red" if errors > 0 else "green"
    truncated_style = "yellow" if truncated > 0 else "green"
    console.print(
        f"  {processed} bubbles {SYM_DOT} "
        f"[{truncated_style}]{truncated} truncated[/{truncated_style}] {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}–{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress bubbles")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of bubbles rendered before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} bubbles completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
