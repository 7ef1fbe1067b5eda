"""Post review reports back to GitHub as issues or PR comments."""

import logging
from typing import Optional

from github import GithubException

from reviewer.models import AggregatedReview, EventType
from reviewer.report import issue_title

logger = logging.getLogger(__name__)

REVIEW_LABELS = {
    "code-review": "1d76db",
    "automated": "ededed",
}


def publish_report(
    gh_repo,
    review: AggregatedReview,
    body: str,
    pull_number: Optional[int] = None,
) -> Optional[str]:
    """Route the composed report to the right GitHub surface.

    Pushes open an issue only when issues were found; pull requests always get
    a comment. Returns ``"issue"``, ``"comment"`` or ``None`` if nothing was posted.
    """
    if review.event_type == EventType.PUSH:
        if review.total_issues > 0:
            create_review_issue(gh_repo, issue_title(review), body)
            logger.info("✅ Created GitHub Issue for %s", review.repository)
            return "issue"
        logger.info("No issues found on %s@%s, no issue created.", review.repository, review.branch)
        return None

    if review.event_type == EventType.PULL_REQUEST and pull_number:
        create_pr_comment(gh_repo, pull_number, body)
        logger.info("✅ Created PR comment for %s#%d", review.repository, pull_number)
        return "comment"

    return None


def create_review_issue(gh_repo, title: str, body: str):
    _ensure_labels(gh_repo)
    return gh_repo.create_issue(title=title, body=body, labels=list(REVIEW_LABELS))


def create_pr_comment(gh_repo, pull_number: int, body: str):
    pr = gh_repo.get_pull(pull_number)
    return pr.create_issue_comment(body)


def _ensure_labels(gh_repo) -> None:
    """Ensure the review labels exist."""
    existing = {label.name for label in gh_repo.get_labels()}
    for name, color in REVIEW_LABELS.items():
        if name not in existing:
            try:
                gh_repo.create_label(name=name, color=color)
            except GithubException as e:
                # Another delivery may have created it concurrently.
                logger.debug("Could not create label %s: %s", name, e)
