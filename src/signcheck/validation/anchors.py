"""Grouping of Level 2 links by their shared anchor (link context)."""

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from linkset_parser import WebLink

from .framework import Issue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnchorGrouping:
    """Outcome of scanning links for a single anchor.

    ``relation_counts`` only covers links whose anchor matched. When ``ok`` is
    False the counts are incomplete and must not be used.
    """
    ok: bool
    relation_counts: dict[str, int] = field(default_factory=dict)
    links_without_anchor: tuple[WebLink, ...] = ()
    issues: tuple[Issue, ...] = ()
    anchor: str | None = None

    def missing_anchor_issues(self) -> list[Issue]:
        """One error per link that has no anchor."""
        return [
            Issue.error(f"Found weblink with missing anchor; link target was '{link.target}'")
            for link in self.links_without_anchor
        ]


def group_by_single_anchor(web_links: Sequence[WebLink | None]) -> AnchorGrouping:
    """Count relation types of links that share one anchor.

    The first link carrying an anchor establishes the expected context. A
    link with a different anchor aborts the scan. Links without an anchor
    are collected and not counted.

    Args:
        web_links: Links to scan; ``None`` elements are reported and skipped

    Returns:
        AnchorGrouping with counts, anchor-less links and issues
    """
    issues: list[Issue] = []
    counts: Counter[str] = Counter()
    without_anchor: list[WebLink] = []
    expected: str | None = None

    for index, link in enumerate(web_links):
        if link is None:
            issues.append(Issue.error(f"Skipped null element at index {index}"))
            continue

        anchor = link.anchor()
        if anchor is None:
            without_anchor.append(link)
            continue

        if expected is None:
            expected = anchor
        elif anchor != expected:
            logger.debug(f"Anchor mismatch at index {index}: '{anchor}' != '{expected}'")
            issues.append(Issue.error(
                "Input contains multiple anchors; context is ambiguous. "
                f"Found new anchor '{anchor}' but expected '{expected}'"))
            return AnchorGrouping(
                ok=False,
                links_without_anchor=tuple(without_anchor),
                issues=tuple(issues),
                anchor=expected,
            )

        counts.update(link.rel())

    return AnchorGrouping(
        ok=True,
        relation_counts=dict(counts),
        links_without_anchor=tuple(without_anchor),
        issues=tuple(issues),
        anchor=expected,
    )
