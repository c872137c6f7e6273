"""signcheck - FAIR Signposting validation for typed web links.

signcheck reads RFC 9264 Link Sets into RFC 8288 web links and checks them
against the Signposting Level 1 and Level 2 profiles.
"""

__version__ = "0.1.0"
__author__ = "signcheck contributors"
__description__ = "FAIR Signposting validation for typed web links"

from signcheck.processor import SignPostingProcessor
from signcheck.validation.framework import (
    Issue,
    IssueReport,
    IssueType,
    SignPostingResult,
    SignPostingValidator,
)
from signcheck.view import SignPostingView

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "Issue",
    "IssueReport",
    "IssueType",
    "SignPostingProcessor",
    "SignPostingResult",
    "SignPostingValidator",
    "SignPostingView",
]
