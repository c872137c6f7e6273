"""Validation layer for Signposting link sets.

Level 1 checks inline links of a single resource, Level 2 checks link sets
per recipe (landing page, metadata resource, content resource) and whether a
resource advertises its link set at all.
"""

from .anchors import AnchorGrouping, group_by_single_anchor
from .discovery import Level2DiscoveryValidator
from .framework import Issue, IssueReport, IssueType, SignPostingResult, SignPostingValidator
from .level1 import Level1SignPostingValidator
from .recipes import (
    Cardinality,
    Level2ContentResourceValidator,
    Level2LandingPageValidator,
    Level2MetadataResourceValidator,
    RecipeValidator,
)
from .router import Level2RecipeValidator, Recipe, determine_recipe

__all__ = [
    "AnchorGrouping",
    "Cardinality",
    "Issue",
    "IssueReport",
    "IssueType",
    "Level1SignPostingValidator",
    "Level2ContentResourceValidator",
    "Level2DiscoveryValidator",
    "Level2LandingPageValidator",
    "Level2MetadataResourceValidator",
    "Level2RecipeValidator",
    "Recipe",
    "RecipeValidator",
    "SignPostingResult",
    "SignPostingValidator",
    "determine_recipe",
    "group_by_single_anchor",
]
