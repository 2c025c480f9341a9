"""Parallel batch rendering of independent bubbles.

Each bubble is a pure recomputation, so a page of bubbles can be rendered in
worker processes with ProcessPoolExecutor.

Key components:
- process_bubble: Top-level picklable function for parallel execution
- BubbleProcessor: Orchestrates a batch and collects statistics
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

from speechbubble.config import SpeechBubbleSettings
from speechbubble.core.renderer import BubbleRenderer
from speechbubble.core.text_flow import TextMeasurer
from speechbubble.domain import BubbleRender, BubbleSpec
from speechbubble.exceptions import BubbleRenderError
from speechbubble.utils import RenderLogger, RenderStats, configure_logging


def process_bubble(
    spec_dict: dict[str, Any],
    settings_dict: dict[str, Any],
    measurer: TextMeasurer,
) -> dict[str, Any]:
    """Render a single bubble.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the spec, renders it and returns the serialized result.

    Args:
        spec_dict: Serialized bubble (from BubbleSpec.to_dict())
        settings_dict: Serialized settings (from SpeechBubbleSettings.model_dump())
        measurer: Picklable text measurer

    Returns:
        Dictionary containing either:
        - Success: {"render": render_dict, "duration_ms": float}
        - Error: {"error": str, "bubble_id": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        spec = BubbleSpec.from_dict(spec_dict)
        settings = SpeechBubbleSettings.model_validate(settings_dict)

        render = BubbleRenderer(settings).render(spec, measurer)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "render": render.to_dict(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "bubble_id": spec_dict.get("id", "unknown"),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class BubbleProcessor:
    """Orchestrates parallel rendering of a batch of bubbles.

    Failures are isolated per bubble: a degenerate bubble is logged and
    counted, and the rest of the batch still renders.

    Example:
        processor = BubbleProcessor(SpeechBubbleSettings())
        renders, stats = processor.process(specs, EstimatedTextMeasurer(), max_workers=4)
    """

    def __init__(self, settings: SpeechBubbleSettings) -> None:
        """Initialize processor with settings.

        Args:
            settings: Settings shared by every bubble in a batch
        """
        self.settings = settings
        self.logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=False,
        )
        self.last_stats: RenderStats | None = None

    def process(
        self,
        specs: Sequence[BubbleSpec],
        measurer: TextMeasurer,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> tuple[dict[str, BubbleRender], RenderStats]:
        """Render bubbles in parallel.

        Args:
            specs: Bubbles to render; ids must be unique
            measurer: Picklable text measurer passed to every worker
            max_workers: Maximum worker processes (None = settings default)
            progress_callback: Optional callback(completed, total, bubble_id, success)

        Returns:
            Tuple of (renders keyed by bubble id, RenderStats)

        Raises:
            BubbleRenderError: If two specs share an id
            KeyboardInterrupt: If processing is cancelled by user
        """
        render_logger = RenderLogger(self.logger)
        stats = render_logger.stats
        stats.start_time = time.time()
        self.last_stats = stats

        if max_workers is None:
            max_workers = self.settings.processing.max_workers

        tasks: dict[str, dict[str, Any]] = {}
        for spec in specs:
            if spec.bubble_id in tasks:
                raise BubbleRenderError(spec.bubble_id, "duplicate bubble id")
            tasks[spec.bubble_id] = spec.to_dict()

        self.logger.info(
            "Starting batch render",
            bubble_count=len(tasks),
            max_workers=max_workers,
        )

        renders: dict[str, BubbleRender] = {}
        if tasks:
            renders = self._process_parallel(
                tasks=tasks,
                measurer=measurer,
                max_workers=max_workers,
                render_logger=render_logger,
                progress_callback=progress_callback,
            )

        stats.end_time = time.time()

        self.logger.info(
            "Batch render complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            truncated=stats.truncated_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return renders, stats

    def _process_parallel(
        self,
        tasks: dict[str, dict[str, Any]],
        measurer: TextMeasurer,
        max_workers: int | None,
        render_logger: RenderLogger,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, BubbleRender]:
        """Render serialized specs with a ProcessPoolExecutor."""
        renders: dict[str, BubbleRender] = {}
        stats = render_logger.stats
        settings_dict = self.settings.model_dump()

        total = len(tasks)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for bubble_id, spec_dict in tasks.items():
                render_logger.log_bubble_start(bubble_id)
                future = executor.submit(process_bubble, spec_dict, settings_dict, measurer)
                pending_futures[future] = bubble_id

            try:
                for future in as_completed(list(pending_futures)):
                    bubble_id = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            render_logger.log_bubble_error(
                                bubble_id=result["bubble_id"],
                                error=BubbleRenderError(bubble_id, result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            render = BubbleRender.from_dict(result["render"])
                            renders[bubble_id] = render
                            render_logger.log_bubble_complete(
                                bubble_id=bubble_id,
                                line_count=len(render.lines),
                                truncated=render.truncated,
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        # Executor-level error
                        render_logger.log_bubble_error(
                            bubble_id=bubble_id,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, bubble_id, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return renders
