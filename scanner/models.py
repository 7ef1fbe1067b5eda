from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class SourceFile:
    path: str
    content: str
    size: int = 0


@dataclass(frozen=True)
class Finding:
    line: int  # 1-based
    severity: Severity
    message: str
    rule: str

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "severity": self.severity.value,
            "message": self.message,
            "rule": self.rule,
        }


@dataclass(frozen=True)
class StaticSummary:
    total: int = 0
    errors: int = 0
    warnings: int = 0


@dataclass
class StaticResult:
    issues: List[Finding] = field(default_factory=list)
    summary: StaticSummary = field(default_factory=StaticSummary)

    def to_dict(self) -> dict:
        return {
            "issues": [f.to_dict() for f in self.issues],
            "summary": {
                "total": self.summary.total,
                "errors": self.summary.errors,
                "warnings": self.summary.warnings,
            },
        }
