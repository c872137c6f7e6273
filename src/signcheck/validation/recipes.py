"""Signposting Level 2 recipe validators.

Each recipe describes one kind of resource in a Level 2 link set (landing
page, metadata resource, content resource) as a table of relation types and
their allowed cardinality for a single anchor.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from linkset_parser import WebLink

from .anchors import group_by_single_anchor
from .framework import Issue, IssueReport, SignPostingResult, SignPostingValidator
from ..view import SignPostingView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cardinality:
    """Allowed number of links for one relation type; ``maximum`` None is unbounded."""
    relation: str
    minimum: int
    maximum: int | None = None

    def check(self, count: int) -> Issue | None:
        if count < self.minimum:
            return Issue.error(f"Missing mandatory relation type '{self.relation}'")
        if self.maximum is not None and count > self.maximum:
            return Issue.error(
                f"Multiple links with relation type '{self.relation}' found ({count}). "
                f"Expected cardinality ({self.minimum},{self._render_maximum()})")
        return None

    def _render_maximum(self) -> str:
        return "n" if self.maximum is None else str(self.maximum)


LANDING_PAGE_RECIPE: tuple[Cardinality, ...] = (
    Cardinality("cite-as", 1, 1),
    Cardinality("describedby", 1),
    Cardinality("item", 1),
    Cardinality("type", 1, 2),
    Cardinality("license", 0, 1),
)

METADATA_RESOURCE_RECIPE: tuple[Cardinality, ...] = (
    Cardinality("describes", 1, 1),
)

CONTENT_RESOURCE_RECIPE: tuple[Cardinality, ...] = (
    Cardinality("collection", 1, 1),
    Cardinality("cite-as", 0, 1),
    Cardinality("license", 0, 1),
    Cardinality("type", 0, 1),
)


class RecipeValidator(SignPostingValidator):
    """Checks the links of one anchor against a recipe table.

    Cardinality is only judged once all links share a single anchor. On an
    ambiguous or missing anchor the validator reports that and stops.
    """

    recipe: tuple[Cardinality, ...] = ()

    def validate(self, web_links: Sequence[WebLink | None]) -> SignPostingResult:
        view = SignPostingView(link for link in web_links if link is not None)
        grouping = group_by_single_anchor(web_links)
        issues = list(grouping.issues)

        if not grouping.ok:
            return SignPostingResult(view, IssueReport.of(issues))

        if grouping.links_without_anchor:
            issues.extend(grouping.missing_anchor_issues())
            return SignPostingResult(view, IssueReport.of(issues))

        for cardinality in self.recipe:
            issue = cardinality.check(grouping.relation_counts.get(cardinality.relation, 0))
            if issue is not None:
                issues.append(issue)

        logger.debug(f"{self.name} checked {len(self.recipe)} relation types "
                     f"for anchor '{grouping.anchor}': {len(issues)} issues")
        return SignPostingResult(view, IssueReport.of(issues))


class Level2LandingPageValidator(RecipeValidator):
    """Landing page: cite-as, describedby, item and type are mandatory."""
    recipe = LANDING_PAGE_RECIPE


class Level2MetadataResourceValidator(RecipeValidator):
    """Metadata resource: exactly one describes link back to the landing page."""
    recipe = METADATA_RESOURCE_RECIPE


class Level2ContentResourceValidator(RecipeValidator):
    """Content resource: exactly one collection link back to the landing page."""
    recipe = CONTENT_RESOURCE_RECIPE
