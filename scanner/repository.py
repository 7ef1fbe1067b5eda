"""Fetch reviewable source files from a GitHub repository."""

import logging
from typing import List

from github import GithubException

from scanner.models import SourceFile

logger = logging.getLogger(__name__)

CODE_EXTENSIONS = (
    ".js", ".jsx", ".ts", ".tsx",
    ".py", ".java", ".go", ".rs",
    ".c", ".cpp", ".h", ".hpp",
    ".rb", ".php", ".swift", ".kt",
    ".sh", ".bash", ".sql",
)

IGNORED_DIRS = {
    "node_modules", ".git", "dist", "build", ".next",
    "coverage", ".vscode", ".idea", "vendor", "__pycache__",
}


class RepositoryError(Exception):
    """Raised when the repository tree cannot be listed."""


def should_scan_file(path: str) -> bool:
    parts = path.split("/")
    if any(part in IGNORED_DIRS for part in parts[:-1]):
        return False
    return path.endswith(CODE_EXTENSIONS)


def fetch_source_files(gh_repo, branch: str) -> List[SourceFile]:
    """Return every code file on ``branch`` that passes ``should_scan_file``.

    Files whose content cannot be fetched are logged and skipped so that one
    bad blob does not fail the whole review.
    """
    logger.info("Fetching repository tree for %s@%s...", gh_repo.full_name, branch)
    try:
        tree = gh_repo.get_git_tree(branch, recursive=True)
    except GithubException as e:
        raise RepositoryError(f"Failed to fetch repository tree: {e}") from e

    candidates = [
        item for item in tree.tree
        if item.type == "blob" and should_scan_file(item.path)
    ]
    logger.info("Found %d code files to scan", len(candidates))

    files: List[SourceFile] = []
    for item in candidates:
        try:
            contents = gh_repo.get_contents(item.path, ref=branch)
        except GithubException as e:
            logger.error("❌ Error fetching file %s: %s", item.path, e)
            continue

        raw = contents.decoded_content or b""
        files.append(SourceFile(
            path=item.path,
            content=raw.decode("utf-8", errors="replace"),
            size=item.size or 0,
        ))

    return files
