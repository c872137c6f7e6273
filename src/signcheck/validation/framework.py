"""Core validation framework for Signposting link sets.

Validators are pluggable: each one inspects a list of web links and returns
a view over the input together with the issues it found. Issues never raise;
only structurally broken input fails earlier, in the parser.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from linkset_parser import WebLink

from ..view import SignPostingView

logger = logging.getLogger(__name__)


class IssueType(str, Enum):
    """Severity of a validation issue."""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Issue:
    """A single validation issue found during validation."""
    severity: IssueType
    message: str

    @classmethod
    def error(cls, message: str) -> "Issue":
        return cls(IssueType.ERROR, message)

    @classmethod
    def warning(cls, message: str) -> "Issue":
        return cls(IssueType.WARNING, message)

    def is_error(self) -> bool:
        return self.severity == IssueType.ERROR

    def is_warning(self) -> bool:
        return self.severity == IssueType.WARNING

    def __str__(self) -> str:
        return f"[{self.severity.value.upper()}] {self.message}"


@dataclass(frozen=True)
class IssueReport:
    """Ordered, immutable collection of issues."""
    issues: tuple[Issue, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "issues", tuple(self.issues))

    @classmethod
    def of(cls, issues: Iterable[Issue]) -> "IssueReport":
        return cls(tuple(issues))

    def has_errors(self) -> bool:
        return any(issue.is_error() for issue in self.issues)

    def has_warnings(self) -> bool:
        return any(issue.is_warning() for issue in self.issues)

    def errors(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.is_error()]

    def warnings(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.is_warning()]

    def merge(self, other: "IssueReport") -> "IssueReport":
        """Return a new report with the other report's issues appended."""
        return IssueReport(self.issues + other.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "has_errors": self.has_errors(),
            "has_warnings": self.has_warnings(),
            "issues": [
                {
                    "severity": issue.severity.value,
                    "message": issue.message,
                }
                for issue in self.issues
            ]
        }


@dataclass(frozen=True)
class SignPostingResult:
    """Outcome of a validation run: the validated view and its report."""
    view: SignPostingView
    report: IssueReport = field(default_factory=IssueReport)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "links": [link.to_dict() if link is not None else None for link in self.view.web_links],
            "report": self.report.to_dict(),
        }


class SignPostingValidator(ABC):
    """Base class for Signposting validators.

    Implementations keep no state between calls, so a single instance can be
    shared and reused.
    """

    @property
    def name(self) -> str:
        """Validator name for identification in logs and issues."""
        return type(self).__name__

    @abstractmethod
    def validate(self, web_links: Sequence[WebLink | None]) -> SignPostingResult:
        """Validate web links against this validator's profile.

        Args:
            web_links: Links to validate; ``None`` elements are tolerated

        Returns:
            SignPostingResult with a view over the input and the issues found
        """
        pass
