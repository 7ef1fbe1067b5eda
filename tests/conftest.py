"""Shared fixtures for the Code Review Bot test suite."""

import base64
from unittest.mock import MagicMock

import pytest

from scanner.checks.static_rules import analyze
from scanner.models import SourceFile
from reviewer.models import EventType, FileReviewOutcome, ReviewContext, ReviewMetrics


# ---------------------------------------------------------------------------
# Sample source code
# ---------------------------------------------------------------------------

CLEAN_CODE = """\
export function add(a, b) {
  return a + b;
}
"""

SECRET_CODE = 'password = "secret123"'

DEBUG_AND_TODO_CODE = """\
console.log("x")
// TODO: fix
"""

NOISY_CODE = """\
const apiKey = "abc123"; console.log(apiKey); // TODO rotate
const token = 'tok';
console.debug("a");
console.info("b");
// todo: lower-case marker
"""


@pytest.fixture
def clean_code():
    return CLEAN_CODE


@pytest.fixture
def secret_code():
    return SECRET_CODE


@pytest.fixture
def debug_and_todo_code():
    return DEBUG_AND_TODO_CODE


@pytest.fixture
def noisy_code():
    return NOISY_CODE


# ---------------------------------------------------------------------------
# Review context and outcomes
# ---------------------------------------------------------------------------

@pytest.fixture
def push_context():
    return ReviewContext("octo/demo", "main", EventType.PUSH)


@pytest.fixture
def pr_context():
    return ReviewContext("octo/demo", "feature/login", EventType.PULL_REQUEST)


def make_outcome(file_name: str, code: str) -> FileReviewOutcome:
    """Build a successful outcome straight from the static analyzer."""
    static_result = analyze(code, file_name)
    return FileReviewOutcome(
        file_name=file_name,
        success=True,
        report=f"# Code Review: {file_name}",
        metrics=ReviewMetrics(
            static_issues=static_result.summary.total,
            static_errors=static_result.summary.errors,
        ),
        static_result=static_result,
    )


# ---------------------------------------------------------------------------
# Collaborator stubs
# ---------------------------------------------------------------------------

AI_REVIEW_TEXT = "📍 Line: 1\n⚠️ Issue: hardcoded credential\n💡 Suggestion: read it from the environment"


@pytest.fixture
def ai_review_text():
    return AI_REVIEW_TEXT


@pytest.fixture
def stub_ai_review():
    """Deterministic async AI reviewer that records its calls."""
    calls = []

    async def _review(code, file_name, static_result):
        calls.append((code, file_name, static_result))
        return AI_REVIEW_TEXT

    _review.calls = calls
    return _review


def make_gh_repo(files: dict, full_name: str = "octo/demo") -> MagicMock:
    """Mock a PyGithub Repository whose tree holds ``files`` (path -> text)."""
    gh_repo = MagicMock()
    gh_repo.full_name = full_name

    elements = []
    for path, text in files.items():
        element = MagicMock()
        element.type = "blob"
        element.path = path
        element.size = len(text.encode("utf-8"))
        elements.append(element)
    gh_repo.get_git_tree.return_value = MagicMock(tree=elements)

    def _get_contents(path, ref=None):
        contents = MagicMock()
        contents.decoded_content = files[path].encode("utf-8")
        contents.content = base64.b64encode(contents.decoded_content).decode()
        return contents

    gh_repo.get_contents.side_effect = _get_contents
    gh_repo.get_labels.return_value = []
    return gh_repo


@pytest.fixture
def sample_source_files():
    return [
        SourceFile("src/app.js", DEBUG_AND_TODO_CODE, 30),
        SourceFile("src/config.py", SECRET_CODE, 22),
        SourceFile("src/math.js", CLEAN_CODE, 40),
    ]


@pytest.fixture
def outcome_factory():
    return make_outcome


@pytest.fixture
def gh_repo_factory():
    return make_gh_repo
