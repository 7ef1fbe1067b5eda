"""Code Review Bot: one-shot repository review for CI, and the server launcher."""

import asyncio
import logging
import os
import sys

from github import Auth, Github, GithubException

from reviewer.config import ConfigError, ReviewerConfig
from reviewer.gemini import GeminiReviewer
from reviewer.models import AggregatedReview, ReviewContext
from reviewer.publish import publish_report
from reviewer.service import review_repository

logger = logging.getLogger(__name__)


def main() -> None:
    config = ReviewerConfig()
    logging.basicConfig(level=config.log_level, format="%(asctime)s - %(levelname)s - %(message)s")

    repo_name = os.environ.get("REPO_FULL_NAME", "")
    branch = os.environ.get("BRANCH", "main")
    event_type = os.environ.get("EVENT_TYPE", "push")
    pr_number = os.environ.get("PR_NUMBER", "")
    post_results = os.environ.get("POST_RESULTS", "true").lower() == "true"

    try:
        github_token = config.require("GITHUB_TOKEN")
        api_key = config.require("GEMINI_API_KEY")
        context = ReviewContext(repo_name, branch, event_type)
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"🔍 Starting code review for {context.repository}@{context.branch} ({context.event_type.value})")

    gh = Github(auth=Auth.Token(github_token))
    try:
        gh_repo = gh.get_repo(context.repository)
    except GithubException as e:
        print(f"Error accessing repo {context.repository}: {e}")
        sys.exit(1)

    ai_review = GeminiReviewer(
        api_key,
        model_name=config.gemini_model,
        max_output_tokens=config.max_output_tokens,
    )
    run = asyncio.run(review_repository(
        gh_repo,
        context,
        ai_review,
        max_concurrency=config.max_concurrency or None,
        file_timeout=config.file_timeout or None,
    ))

    _print_summary(run.review)

    if post_results:
        posted = publish_report(gh_repo, run.review, run.report, int(pr_number) if pr_number else None)
        print(f"\n📝 Posted: {posted or 'nothing'}")
    else:
        print("\n" + run.report)

    print("\n✅ Code review complete.")


def _print_summary(review: AggregatedReview) -> None:
    print(f"\n{'='*50}")
    print(f"📊 Review Summary for {review.repository}@{review.branch}")
    print(f"{'='*50}")
    print(f"  Files:          {review.total_files}")
    print(f"  Issues:         {review.total_issues}")
    print(f"  🔴 Errors:      {review.total_errors}")
    print(f"  Critical files: {len(review.critical_files)}")
    failed = review.failed_outcomes
    if failed:
        print(f"  ⚠️  Failed:      {len(failed)}")
        for outcome in failed:
            print(f"    - {outcome.file_name}: {outcome.error}")
    print(f"{'='*50}")


def serve() -> None:
    import uvicorn

    config = ReviewerConfig()
    uvicorn.run("reviewer.webhook:app", host=config.host, port=config.port)


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"⚠️ Code review failed (non-blocking): {e}")
        sys.exit(0)
