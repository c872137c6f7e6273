"""Read-only view over a list of web links with Signposting accessors."""

from collections.abc import Iterable, Iterator

from linkset_parser import WebLink

CITE_AS = "cite-as"
DESCRIBED_BY = "describedby"
LINKSET = "linkset"


class SignPostingView:
    """Immutable projection of web links.

    The view holds its own tuple copy of the links, so later changes to the
    caller's list are never visible through it. ``None`` elements are kept
    in ``web_links`` as given but never match a relation lookup.
    """

    def __init__(self, web_links: Iterable[WebLink | None]):
        self._web_links = tuple(web_links)

    @property
    def web_links(self) -> tuple[WebLink | None, ...]:
        return self._web_links

    def with_relation_type(self, relation_type: str) -> list[WebLink]:
        """Links carrying the given relation type, compared case-insensitively."""
        wanted = relation_type.lower()
        return [
            link for link in self._web_links
            if link is not None and any(rel.lower() == wanted for rel in link.rel())
        ]

    def cite_as(self) -> list[WebLink]:
        return self.with_relation_type(CITE_AS)

    def described_by(self) -> list[WebLink]:
        return self.with_relation_type(DESCRIBED_BY)

    def linksets(self) -> list[WebLink]:
        return self.with_relation_type(LINKSET)

    def __len__(self) -> int:
        return len(self._web_links)

    def __iter__(self) -> Iterator[WebLink | None]:
        return iter(self._web_links)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignPostingView):
            return NotImplemented
        return self._web_links == other._web_links

    def __hash__(self) -> int:
        return hash(self._web_links)

    def __repr__(self) -> str:
        return f"SignPostingView({len(self._web_links)} links)"
