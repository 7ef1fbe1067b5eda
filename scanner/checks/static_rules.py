"""Line-oriented static checks: debug statements, hardcoded secrets, TODOs."""

import re
from typing import List

from scanner.models import Finding, Severity, StaticResult, StaticSummary

# (rule_id, regex, severity, message) in per-line evaluation order
RULES = [
    (
        "no-console",
        re.compile(r"console\.(log|debug|info)"),
        Severity.WARNING,
        "Debug statement found",
    ),
    (
        "no-hardcoded-secrets",
        re.compile(r"""(password|api[_-]?key|secret|token)\s*=\s*['"][^'"]+['"]""", re.IGNORECASE),
        Severity.ERROR,
        "Hardcoded secret detected",
    ),
    (
        "todo-comment",
        re.compile(r"//\s*TODO", re.IGNORECASE),
        Severity.INFO,
        "TODO comment found",
    ),
]


def analyze(code: str, file_name: str = "") -> StaticResult:
    """Run every rule against every line of ``code``.

    ``file_name`` is accepted for context only; the rules do not depend on it.
    """
    issues: List[Finding] = []

    for line_num, line in enumerate(code.split("\n"), start=1):
        for rule_id, pattern, severity, message in RULES:
            if pattern.search(line):
                issues.append(Finding(
                    line=line_num,
                    severity=severity,
                    message=message,
                    rule=rule_id,
                ))

    errors = sum(1 for f in issues if f.severity == Severity.ERROR)
    warnings = sum(1 for f in issues if f.severity == Severity.WARNING)

    return StaticResult(
        issues=issues,
        summary=StaticSummary(total=len(issues), errors=errors, warnings=warnings),
    )
