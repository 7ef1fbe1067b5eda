import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from scanner.models import StaticResult

_REPO_PATTERN = re.compile(r"^[\w.-]+/[\w.-]+$")


class EventType(Enum):
    PUSH = "push"
    PULL_REQUEST = "pull_request"


@dataclass(frozen=True)
class ReviewContext:
    repository: str  # owner/repo
    branch: str
    event_type: EventType

    def __post_init__(self):
        if not _REPO_PATTERN.match(self.repository or ""):
            raise ValueError(
                f"Invalid repository {self.repository!r}. Expected 'owner/repo'."
            )
        if not isinstance(self.event_type, EventType):
            # Accept the raw webhook header value as well as the enum.
            try:
                object.__setattr__(self, "event_type", EventType(self.event_type))
            except ValueError:
                raise ValueError(f"Unsupported event type: {self.event_type!r}") from None


@dataclass(frozen=True)
class ReviewMetrics:
    static_issues: int
    static_errors: int


@dataclass(frozen=True)
class FileReviewOutcome:
    file_name: str
    success: bool
    report: Optional[str] = None
    metrics: Optional[ReviewMetrics] = None
    static_result: Optional[StaticResult] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, file_name: str, error: str) -> "FileReviewOutcome":
        return cls(file_name=file_name, success=False, error=error)


@dataclass(frozen=True)
class CriticalFile:
    file_name: str
    errors: int


@dataclass
class AggregatedReview:
    repository: str
    branch: str
    event_type: EventType
    total_files: int = 0
    total_issues: int = 0
    total_errors: int = 0
    critical_files: List[CriticalFile] = field(default_factory=list)
    per_file_outcomes: List[FileReviewOutcome] = field(default_factory=list)

    @property
    def successful_outcomes(self) -> List[FileReviewOutcome]:
        return [o for o in self.per_file_outcomes if o.success]

    @property
    def failed_outcomes(self) -> List[FileReviewOutcome]:
        return [o for o in self.per_file_outcomes if not o.success]
