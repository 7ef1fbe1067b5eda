"""Repository-level Markdown report, issue title and JSON response summary."""

from typing import List

from scanner.models import Severity
from reviewer.models import AggregatedReview, FileReviewOutcome

MAX_DETAILED_FILES = 10
MAX_FINDINGS_PER_FILE = 5

SEVERITY_ICONS = {
    Severity.ERROR: "🔴",
    Severity.WARNING: "🟡",
    Severity.INFO: "ℹ️",
}

REPORT_FOOTER = "🤖 _此报告由 Code Review Bot 自动生成_"


def issue_title(review: AggregatedReview) -> str:
    return f"🤖 代码审查报告 - {review.branch} (发现 {review.total_errors} 个错误)"


def compose(review: AggregatedReview, timestamp: str) -> str:
    """Render ``review`` as a single Markdown document.

    The output is bounded: at most ``MAX_DETAILED_FILES`` file blocks with at
    most ``MAX_FINDINGS_PER_FILE`` findings each, plus notes for what was
    omitted. ``timestamp`` is embedded verbatim so the result is reproducible.
    """
    lines = [
        "# 🤖 AI 代码审查报告",
        "",
        f"**仓库**: {review.repository}",
        f"**分支**: {review.branch}",
        f"**事件**: {review.event_type.value}",
        f"**时间**: {timestamp}",
        "",
        "## 📊 审查摘要",
        "",
        "| 指标 | 数量 |",
        "|------|------|",
        f"| 扫描文件 | {review.total_files} |",
        f"| 发现问题 | {review.total_issues} |",
        f"| 错误数量 | {review.total_errors} |",
        f"| 关键文件 | {len(review.critical_files)} |",
        "",
    ]

    if review.total_errors > 0:
        lines.extend(["## ⚠️ 需要优先修复的文件", ""])
        for critical in review.critical_files:
            lines.append(f"- **{critical.file_name}** - {critical.errors} 个错误")
        lines.append("")

    if review.total_issues > 0:
        lines.extend(_detailed_issues(review))
    else:
        lines.extend([
            "## ✅ 太棒了！",
            "",
            "没有发现任何问题，代码质量良好！",
            "",
        ])

    lines.extend(["---", "", REPORT_FOOTER, ""])
    return "\n".join(lines)


def _detailed_issues(review: AggregatedReview) -> List[str]:
    files_with_issues = [
        o for o in review.successful_outcomes
        if o.metrics and o.metrics.static_issues > 0
    ]

    lines = ["## 📋 详细问题列表", ""]
    for outcome in files_with_issues[:MAX_DETAILED_FILES]:
        lines.extend(_file_block(outcome))

    omitted = len(files_with_issues) - MAX_DETAILED_FILES
    if omitted > 0:
        lines.extend([f"_... 还有 {omitted} 个文件包含问题_", ""])
    return lines


def _file_block(outcome: FileReviewOutcome) -> List[str]:
    lines = [
        f"### {outcome.file_name}",
        "",
        f"**问题数**: {outcome.metrics.static_issues} | **错误数**: {outcome.metrics.static_errors}",
        "",
    ]

    issues = outcome.static_result.issues if outcome.static_result else []
    for f in issues[:MAX_FINDINGS_PER_FILE]:
        icon = SEVERITY_ICONS.get(f.severity, "ℹ️")
        lines.append(f"{icon} **Line {f.line}**: {f.message} (`{f.rule}`)")

    if len(issues) > MAX_FINDINGS_PER_FILE:
        lines.extend(["", f"_... 还有 {len(issues) - MAX_FINDINGS_PER_FILE} 个问题_"])
    lines.append("")
    return lines


def response_summary(review: AggregatedReview, timestamp: str) -> dict:
    return {
        "success": True,
        "message": "Code review completed",
        "repository": review.repository,
        "branch": review.branch,
        "eventType": review.event_type.value,
        "summary": {
            "totalFiles": review.total_files,
            "totalIssues": review.total_issues,
            "totalErrors": review.total_errors,
            "criticalFilesCount": len(review.critical_files),
        },
        "timestamp": timestamp,
    }
