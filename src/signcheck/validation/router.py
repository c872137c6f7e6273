"""Routing of Level 2 link sets to the matching recipe validator."""

import logging
from collections.abc import Iterable, Sequence
from enum import Enum

from linkset_parser import WebLink

from .framework import Issue, IssueReport, SignPostingResult, SignPostingValidator
from .recipes import (
    Level2ContentResourceValidator,
    Level2LandingPageValidator,
    Level2MetadataResourceValidator,
)
from ..view import SignPostingView

logger = logging.getLogger(__name__)


class Recipe(str, Enum):
    """Level 2 recipes, in routing precedence order."""
    LANDING_PAGE = "landing-page"
    METADATA_RESOURCE = "metadata-resource"
    CONTENT_RESOURCE = "content-resource"


# Relation types that identify a recipe; checked in Recipe order
RECIPE_SIGNALS: dict[Recipe, frozenset[str]] = {
    Recipe.LANDING_PAGE: frozenset({"describedby", "item"}),
    Recipe.METADATA_RESOURCE: frozenset({"describes"}),
    Recipe.CONTENT_RESOURCE: frozenset({"collection"}),
}


def determine_recipe(relations: Iterable[str]) -> Recipe | None:
    """Pick the recipe whose signal relations occur first in precedence order.

    Args:
        relations: Relation types present in the link set

    Returns:
        Matching Recipe or None when no signal is present
    """
    present = set(relations)
    for recipe in Recipe:
        if present & RECIPE_SIGNALS[recipe]:
            return recipe
    return None


class Level2RecipeValidator(SignPostingValidator):
    """Delegates a single-anchor link set to exactly one recipe validator."""

    def __init__(
        self,
        landing: SignPostingValidator | None = None,
        metadata: SignPostingValidator | None = None,
        content: SignPostingValidator | None = None,
    ):
        self._validators: dict[Recipe, SignPostingValidator] = {
            Recipe.LANDING_PAGE: landing if landing is not None else Level2LandingPageValidator(),
            Recipe.METADATA_RESOURCE: metadata if metadata is not None else Level2MetadataResourceValidator(),
            Recipe.CONTENT_RESOURCE: content if content is not None else Level2ContentResourceValidator(),
        }

    def validator_for(self, recipe: Recipe) -> SignPostingValidator:
        return self._validators[recipe]

    def validate(self, web_links: Sequence[WebLink | None]) -> SignPostingResult:
        issues: list[Issue] = []
        links: list[WebLink] = []
        for index, link in enumerate(web_links):
            if link is None:
                issues.append(Issue.error(f"Null element encountered at index {index}"))
            else:
                links.append(link)
        view = SignPostingView(links)

        anchors = list(dict.fromkeys(link.anchor() for link in links if link.anchor() is not None))
        if len(anchors) > 1:
            issues.append(Issue.error(
                "Input contains multiple anchors; context is ambiguous. "
                f"Found anchors: {', '.join(repr(a) for a in anchors)}"))
            return SignPostingResult(view, IssueReport.of(issues))

        relations = {relation for link in links for relation in link.rel()}
        recipe = determine_recipe(relations)
        if recipe is None:
            issues.append(Issue.error(
                "No recipe could be determined for the link set; expected one of the relation types "
                f"{', '.join(sorted(set().union(*RECIPE_SIGNALS.values())))}"))
            return SignPostingResult(view, IssueReport.of(issues))

        validator = self.validator_for(recipe)
        logger.debug(f"Routing {len(links)} links to {validator.name} ({recipe.value})")
        result = validator.validate(links)
        issues.extend(result.report.issues)
        return SignPostingResult(view, IssueReport.of(issues))
