"""FastAPI application receiving GitHub webhooks."""

import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, Header, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from github import Auth, Github
from starlette.exceptions import HTTPException as StarletteHTTPException

from reviewer.aggregator import AggregationError
from reviewer.config import ConfigError, ReviewerConfig
from reviewer.gemini import GeminiReviewer
from reviewer.models import EventType, ReviewContext
from reviewer.publish import publish_report
from reviewer.report import response_summary
from reviewer.service import review_repository, utc_timestamp

logging.basicConfig(
    level=ReviewerConfig().log_level,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "GitHub Auto Code Review"
VERSION = "2.0.0"
SUPPORTED_EVENTS = {e.value for e in EventType}
AVAILABLE_ENDPOINTS = ["/health", "/webhook/github"]

app = FastAPI(
    title=SERVICE_NAME,
    description="Reviews a repository on push / pull_request and reports back to GitHub",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _parse_payload(event_type: str, payload: dict):
    """Extract (repository, branch, pull_number) from a webhook payload."""
    repository = (payload.get("repository") or {}).get("full_name") or ""
    pull_number = None

    if event_type == EventType.PUSH.value:
        branch = (payload.get("ref") or "").removeprefix("refs/heads/") or "main"
    else:
        pull_request = payload.get("pull_request") or {}
        branch = (pull_request.get("head") or {}).get("ref") or "main"
        pull_number = pull_request.get("number")

    return repository, branch, pull_number


@app.get("/health")
async def health() -> dict:
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": VERSION,
        "timestamp": utc_timestamp(),
    }


@app.post("/webhook/github")
async def github_webhook(
    request: Request,
    x_github_event: Optional[str] = Header(default=None),
):
    if x_github_event not in SUPPORTED_EVENTS:
        return {
            "success": False,
            "message": (
                f"Event type '{x_github_event}' is not supported. "
                "Only 'push' and 'pull_request' events are processed."
            ),
        }

    try:
        payload = await request.json()
        repository, branch, pull_number = _parse_payload(x_github_event, payload)
        if "/" not in repository:
            return _error(400, "Invalid webhook payload: missing repository information")
        try:
            context = ReviewContext(repository, branch, EventType(x_github_event))
        except ValueError as e:
            return _error(400, f"Invalid webhook payload: {e}")

        config = ReviewerConfig()
        github_token = config.require("GITHUB_TOKEN")
        api_key = config.require("GEMINI_API_KEY")

        gh = Github(auth=Auth.Token(github_token))
        try:
            gh_repo = await asyncio.to_thread(gh.get_repo, context.repository)
            ai_review = GeminiReviewer(
                api_key,
                model_name=config.gemini_model,
                max_output_tokens=config.max_output_tokens,
            )

            run = await review_repository(
                gh_repo,
                context,
                ai_review,
                max_concurrency=config.max_concurrency or None,
                file_timeout=config.file_timeout or None,
            )

            await asyncio.to_thread(publish_report, gh_repo, run.review, run.report, pull_number)
        finally:
            gh.close()
        return response_summary(run.review, run.timestamp)

    except ConfigError as e:
        logger.error("Webhook configuration error: %s", e)
        return _error(500, str(e))
    except AggregationError as e:
        logger.warning("⚠️ Nothing to review: %s", e)
        return _error(422, str(e))
    except Exception as e:
        logger.exception("Webhook processing error")
        return _error(500, str(e) or "Internal server error")


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code != 404:
        return await http_exception_handler(request, exc)
    return JSONResponse(
        status_code=404,
        content={
            "success": False,
            "error": "Endpoint not found",
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        },
    )
