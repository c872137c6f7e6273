"""Signposting Level 2 discovery: does a resource advertise its link set?"""

import logging
from collections.abc import Sequence

from linkset_parser import LINKSET_MEDIA_TYPES, WebLink

from .framework import Issue, IssueReport, SignPostingResult, SignPostingValidator
from ..view import SignPostingView

logger = logging.getLogger(__name__)

LINKSET = "linkset"


def is_supported_linkset_type(media_type: str | None) -> bool:
    return media_type is not None and media_type.lower() in LINKSET_MEDIA_TYPES


class Level2DiscoveryValidator(SignPostingValidator):
    """Checks inline links for a typed ``rel=linkset`` link.

    The link set itself is never retrieved.
    """

    def validate(self, web_links: Sequence[WebLink | None]) -> SignPostingResult:
        links = [link for link in web_links if link is not None]
        issues: list[Issue] = []

        linkset_links = [link for link in links if link.has_relation(LINKSET)]
        if not linkset_links:
            issues.append(Issue.error(f"No resource with rel={LINKSET} found"))
            return SignPostingResult(SignPostingView(links), IssueReport.of(issues))

        if all(link.type() is None for link in linkset_links):
            issues.append(Issue.warning(f"Missing type for {LINKSET}"))

        supported: list[WebLink] = []
        for link in linkset_links:
            media_type = link.type()
            if is_supported_linkset_type(media_type):
                supported.append(link)
            elif media_type is not None:
                issues.append(Issue.warning(f"Unsupported type '{media_type}' for {LINKSET}"))

        if len({link.target for link in supported}) > 1:
            issues.append(Issue.warning("Linkset has multiple targets"))

        if not supported:
            issues.append(Issue.error(f"No supported {LINKSET} type found"))

        logger.debug(f"{self.name} found {len(linkset_links)} linkset links, {len(supported)} supported")
        return SignPostingResult(SignPostingView(links), IssueReport.of(issues))
