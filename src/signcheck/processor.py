"""Signposting processor running a fixed list of validators over one input."""

import logging
from collections.abc import Iterable, Sequence

from linkset_parser import WebLink

from signcheck.config import Profile
from signcheck.validation.discovery import Level2DiscoveryValidator
from signcheck.validation.framework import Issue, IssueReport, SignPostingResult, SignPostingValidator
from signcheck.validation.level1 import Level1SignPostingValidator
from signcheck.validation.router import Level2RecipeValidator
from signcheck.view import SignPostingView

logger = logging.getLogger(__name__)

PROFILE_VALIDATORS: dict[Profile, type[SignPostingValidator]] = {
    Profile.LEVEL1: Level1SignPostingValidator,
    Profile.LEVEL2_RECIPE: Level2RecipeValidator,
    Profile.LEVEL2_DISCOVERY: Level2DiscoveryValidator,
}


class SignPostingProcessor:
    """Runs every configured validator on the same input and merges the reports.

    Example:
        processor = SignPostingProcessor.builder().with_validators(
            Level1SignPostingValidator(), Level2DiscoveryValidator()
        ).build()
        result = processor.process(links)
    """

    def __init__(self, validators: Sequence[SignPostingValidator]):
        self._validators = tuple(validators)

    @property
    def validators(self) -> tuple[SignPostingValidator, ...]:
        return self._validators

    @staticmethod
    def builder() -> "SignPostingProcessor.Builder":
        return SignPostingProcessor.Builder()

    @classmethod
    def from_profiles(cls, profiles: Iterable[Profile | str]) -> "SignPostingProcessor":
        """Create a processor with one validator per profile, in the given order.

        Raises:
            ValueError: If a profile name is unknown
        """
        validators = [PROFILE_VALIDATORS[Profile(profile)]() for profile in profiles]
        return cls.builder().with_validators(validators).build()

    def process(self, web_links: Sequence[WebLink | None]) -> SignPostingResult:
        """Validate links with every configured validator.

        Each validator receives the original input. Issues are concatenated
        in validator order.

        Args:
            web_links: Links to validate

        Returns:
            SignPostingResult with a view over the input and the merged report

        Raises:
            ValueError: If web_links is None
        """
        if web_links is None:
            raise ValueError("web links must not be None")

        links = list(web_links)
        report = IssueReport()

        logger.info(f"Processing {len(links)} web links with {len(self._validators)} validators")
        for validator in self._validators:
            logger.debug(f"Executing validator: {validator.name}")
            try:
                result = validator.validate(links)
            except Exception as e:
                logger.error(f"Validator {validator.name} failed with error: {e}")
                report = report.merge(IssueReport.of([Issue.error(f"Validator '{validator.name}' failed: {e}")]))
                continue
            report = report.merge(result.report)

        logger.info(f"Processing completed with {len(report.errors())} errors "
                    f"and {len(report.warnings())} warnings")
        return SignPostingResult(SignPostingView(links), report)

    class Builder:
        """Collects validators across calls; ``build`` takes a copy."""

        def __init__(self):
            self._validators: list[SignPostingValidator] = []

        def with_validators(self, *validators) -> "SignPostingProcessor.Builder":
            """Add validators, given as arguments or as a single iterable."""
            if (len(validators) == 1 and isinstance(validators[0], Iterable)
                    and not isinstance(validators[0], SignPostingValidator)):
                validators = tuple(validators[0])
            for validator in validators:
                if validator is None:
                    raise ValueError("validator must not be None")
                if not isinstance(validator, SignPostingValidator):
                    raise ValueError(f"not a SignPostingValidator: {validator!r}")
                self._validators.append(validator)
            return self

        def build(self) -> "SignPostingProcessor":
            validators = list(self._validators) or [Level1SignPostingValidator()]
            return SignPostingProcessor(validators)
