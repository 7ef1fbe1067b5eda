"""Concurrent fan-out of per-file reviews and repository-level aggregation."""

import asyncio
import contextlib
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from scanner.models import SourceFile
from reviewer.models import (
    AggregatedReview,
    CriticalFile,
    FileReviewOutcome,
    ReviewContext,
)

logger = logging.getLogger(__name__)

ReviewFn = Callable[[SourceFile], Awaitable[FileReviewOutcome]]


class AggregationError(ValueError):
    """Raised when there is nothing to aggregate."""


async def _run_isolated(
    source_file: SourceFile,
    review_fn: ReviewFn,
    semaphore: Optional[asyncio.Semaphore],
    timeout: Optional[float],
) -> FileReviewOutcome:
    # Never raises for ordinary failures; cancellation still propagates.
    guard = semaphore if semaphore is not None else contextlib.nullcontext()
    async with guard:
        task = asyncio.ensure_future(review_fn(source_file))
        try:
            # Only an expired deadline counts as a timeout; a TimeoutError
            # raised by the review itself is an ordinary failure.
            done, _ = await asyncio.wait({task}, timeout=timeout or None)
            if task in done:
                return task.result()
            error = f"Review timed out after {timeout}s"
        except Exception as e:
            error = str(e) or type(e).__name__
        finally:
            if not task.done():
                task.cancel()

    logger.warning("❌ Failed to review %s: %s", source_file.path, error)
    return FileReviewOutcome.failed(source_file.path, error)


async def aggregate(
    files: Sequence[SourceFile],
    context: ReviewContext,
    review_fn: ReviewFn,
    max_concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
) -> AggregatedReview:
    """Review every file concurrently and fold the outcomes into one summary.

    ``max_concurrency`` caps in-flight reviews and ``timeout`` is a per-file
    deadline in seconds; ``None`` (or 0) leaves either unbounded. Outcomes are
    returned in the order of ``files``, not in completion order.
    """
    if not files:
        raise AggregationError("No source files to review")

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
    outcomes: List[FileReviewOutcome] = list(await asyncio.gather(*(
        _run_isolated(f, review_fn, semaphore, timeout) for f in files
    )))

    successes = [o for o in outcomes if o.success]
    total_issues = sum(o.metrics.static_issues for o in successes if o.metrics)
    total_errors = sum(o.metrics.static_errors for o in successes if o.metrics)
    critical_files = [
        CriticalFile(file_name=o.file_name, errors=o.metrics.static_errors)
        for o in successes
        if o.metrics and o.metrics.static_errors > 0
    ]

    failed = len(outcomes) - len(successes)
    logger.info(
        "✅ Reviewed %d/%d files for %s@%s (%d issues, %d errors)",
        len(successes), len(outcomes), context.repository, context.branch,
        total_issues, total_errors,
    )
    if failed:
        logger.warning("⚠️ %d file(s) failed review and are excluded from metrics", failed)

    return AggregatedReview(
        repository=context.repository,
        branch=context.branch,
        event_type=context.event_type,
        total_files=len(files),
        total_issues=total_issues,
        total_errors=total_errors,
        critical_files=critical_files,
        per_file_outcomes=outcomes,
    )
