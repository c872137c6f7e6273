"""Signposting Level 1 validation over a flat list of inline links."""

import logging
from collections.abc import Sequence

from linkset_parser import UriUtils, WebLink

from .framework import Issue, IssueReport, SignPostingResult, SignPostingValidator
from ..view import SignPostingView

logger = logging.getLogger(__name__)

AUTHOR = "author"
CITE_AS = "cite-as"
DESCRIBED_BY = "describedby"


class Level1SignPostingValidator(SignPostingValidator):
    """Checks the minimal relations a Level 1 resource advertises.

    - ``author`` should be present (warning)
    - ``cite-as`` must be present exactly once, preferably over https
    - ``describedby`` must be present at least once

    No anchor grouping happens at this level.
    """

    def validate(self, web_links: Sequence[WebLink | None]) -> SignPostingResult:
        links = [link for link in web_links if link is not None]
        issues: list[Issue] = []

        self._validate_author(links, issues)
        self._validate_cite_as(links, issues)
        self._validate_described_by(links, issues)

        logger.debug(f"{self.name} found {len(issues)} issues in {len(links)} links")
        return SignPostingResult(SignPostingView(links), IssueReport.of(issues))

    @classmethod
    def _validate_author(cls, links: list[WebLink], issues: list[Issue]) -> None:
        if cls._count_relation(links, AUTHOR) == 0:
            issues.append(Issue.warning(f"Missing relation type '{AUTHOR}'"))

    @staticmethod
    def _count_relation(links: list[WebLink], relation: str) -> int:
        return sum(link.rel().count(relation) for link in links)

    @classmethod
    def _validate_cite_as(cls, links: list[WebLink], issues: list[Issue]) -> None:
        count = cls._count_relation(links, CITE_AS)
        if count == 0:
            issues.append(Issue.error(f"Missing relation type '{CITE_AS}'"))
            return
        if count > 1:
            issues.append(Issue.error(f"Multiple links for relation type '{CITE_AS}' found"))
            return

        target = next(link for link in links if link.has_relation(CITE_AS)).target
        if UriUtils.scheme(target) != "https":
            issues.append(Issue.warning(
                f"Non-https link target found for relation type '{CITE_AS}': '{target}'"))

    @classmethod
    def _validate_described_by(cls, links: list[WebLink], issues: list[Issue]) -> None:
        if cls._count_relation(links, DESCRIBED_BY) == 0:
            issues.append(Issue.error(f"Missing relation type '{DESCRIBED_BY}'"))
