"""End-to-end review of one repository branch."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from scanner.repository import fetch_source_files
from reviewer.aggregator import aggregate
from reviewer.models import AggregatedReview, ReviewContext
from reviewer.pipeline import AiReviewFn, make_review_fn
from reviewer.report import compose

logger = logging.getLogger(__name__)


@dataclass
class ReviewRun:
    review: AggregatedReview
    report: str
    timestamp: str


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


async def review_repository(
    gh_repo,
    context: ReviewContext,
    ai_review: AiReviewFn,
    max_concurrency: Optional[int] = None,
    file_timeout: Optional[float] = None,
    timestamp: Optional[str] = None,
) -> ReviewRun:
    logger.info("📦 Scanning repository: %s@%s", context.repository, context.branch)
    files = await asyncio.to_thread(fetch_source_files, gh_repo, context.branch)
    logger.info("✅ Found %d files to review", len(files))

    review = await aggregate(
        files,
        context,
        make_review_fn(ai_review),
        max_concurrency=max_concurrency,
        timeout=file_timeout,
    )

    timestamp = timestamp or utc_timestamp()
    return ReviewRun(review=review, report=compose(review, timestamp), timestamp=timestamp)
