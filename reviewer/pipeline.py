"""Per-file review pipeline: static analysis, AI review, Markdown report."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from scanner.checks.static_rules import analyze
from scanner.models import SourceFile, StaticResult
from reviewer.models import FileReviewOutcome, ReviewMetrics

NO_REVIEW_FALLBACK = "No review generated"
FILE_REPORT_FOOTER = "*Generated by Code Review Bot*"

AiReviewFn = Callable[[str, str, StaticResult], Awaitable[Optional[str]]]
AnalyzerFn = Callable[[str, str], StaticResult]


@dataclass(frozen=True)
class FileReport:
    file_name: str
    report: str
    metrics: ReviewMetrics
    static_result: StaticResult


def format_file_report(file_name: str, static_result: StaticResult, review_text: str) -> str:
    summary = static_result.summary
    lines = [
        f"# Code Review: {file_name}",
        "",
        "## 📊 Static Analysis",
        f"- Total Issues: {summary.total}",
        f"- Errors: {summary.errors}",
        f"- Warnings: {summary.warnings}",
        "",
    ]
    if static_result.issues:
        for f in static_result.issues:
            lines.append(f"**Line {f.line}** [{f.severity.value}]: {f.message} ({f.rule})")
        lines.append("")

    lines.extend([
        "## 🤖 AI Review",
        review_text,
        "",
        "---",
        FILE_REPORT_FOOTER,
    ])
    return "\n".join(lines)


async def review_file(
    code: str,
    file_name: str,
    ai_review: AiReviewFn,
    analyzer: AnalyzerFn = analyze,
) -> FileReport:
    """Run the three review stages for one file.

    An exception from ``ai_review`` propagates unchanged; no partial report is
    produced for that file.
    """
    static_result = analyzer(code, file_name)

    review_text = await ai_review(code, file_name, static_result)
    if not review_text:
        review_text = NO_REVIEW_FALLBACK

    return FileReport(
        file_name=file_name,
        report=format_file_report(file_name, static_result, review_text),
        metrics=ReviewMetrics(
            static_issues=static_result.summary.total,
            static_errors=static_result.summary.errors,
        ),
        static_result=static_result,
    )


def make_review_fn(
    ai_review: AiReviewFn,
    analyzer: AnalyzerFn = analyze,
) -> Callable[[SourceFile], Awaitable[FileReviewOutcome]]:
    """Bind the pipeline's collaborators into a ``SourceFile -> outcome`` coroutine."""

    async def review_source_file(source_file: SourceFile) -> FileReviewOutcome:
        result = await review_file(source_file.content, source_file.path, ai_review, analyzer)
        return FileReviewOutcome(
            file_name=result.file_name,
            success=True,
            report=result.report,
            metrics=result.metrics,
            static_result=result.static_result,
        )

    return review_source_file
