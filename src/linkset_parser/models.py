"""Data models for Link Set parsing using only Python stdlib.

All models use dataclasses to avoid external dependencies, making this package
completely self-contained and reusable in any Python project.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .constants import ANCHOR_PARAMETER, REL_PARAMETER, TYPE_PARAMETER
from .utils import TextUtils, UriUtils


@dataclass(frozen=True)
class WebLinkParameter:
    """Single target attribute of a web link (RFC 8288, section 3.4).

    A parameter may be present without a value, e.g. a bare token.
    """
    name: str
    value: Optional[str] = None

    @classmethod
    def without_value(cls, name: str) -> 'WebLinkParameter':
        return cls(name, None)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {'name': self.name, 'value': self.value}


ParameterLike = Union[WebLinkParameter, Tuple[str, Optional[str]]]


@dataclass(frozen=True)
class WebLink:
    """Typed link with a target URI and ordered parameters (RFC 8288).

    Parameter order is preserved for round-tripping only; it carries no
    meaning for validation. Parameters may repeat, notably ``rel``.
    """
    target: str                                          # Target URI (href)
    parameters: Tuple[WebLinkParameter, ...] = ()        # In original order

    def __post_init__(self):
        if not UriUtils.is_uri(self.target):
            raise ValueError(f"Web link target must be a URI: {self.target!r}")
        object.__setattr__(self, 'parameters', tuple(self.parameters))

    @classmethod
    def create(cls, target: str, parameters: Iterable[ParameterLike] = ()) -> 'WebLink':
        """Create a web link from parameters or ``(name, value)`` pairs.

        Args:
            target: Target URI
            parameters: WebLinkParameter instances or name/value tuples

        Returns:
            New WebLink

        Raises:
            ValueError: If the target is not a valid URI
        """
        normalized = [
            p if isinstance(p, WebLinkParameter) else WebLinkParameter(p[0], p[1])
            for p in parameters
        ]
        return cls(target, tuple(normalized))

    def parameters_named(self, name: str) -> List[WebLinkParameter]:
        """All parameters with the given name, in order."""
        return [p for p in self.parameters if p.name == name]

    def parameter(self, name: str) -> Optional[str]:
        """Value of the first parameter with the given name."""
        for p in self.parameters:
            if p.name == name:
                return p.value
        return None

    def rel(self) -> List[str]:
        """Relation types of this link, one entry per whitespace-separated token."""
        return TextUtils.split_relation_types(p.value for p in self.parameters_named(REL_PARAMETER))

    def type(self) -> Optional[str]:
        """Media type hint of the target (first ``type`` parameter)."""
        return self.parameter(TYPE_PARAMETER)

    def anchor(self) -> Optional[str]:
        """Context URI of this link (first ``anchor`` parameter)."""
        return self.parameter(ANCHOR_PARAMETER)

    def has_relation(self, relation: str) -> bool:
        return relation in self.rel()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            'target': self.target,
            'parameters': [p.to_dict() for p in self.parameters],
        }


@dataclass(frozen=True)
class LinkTargetObject:
    """Link target object of a JSON Link Set (RFC 9264, section 4.2.3).

    Transient: exists only between reading a target object and creating
    the corresponding WebLink.
    """
    relation_type: str                                   # Member name in the context object
    href: str                                            # Target URI
    attributes: Tuple[Tuple[str, Optional[str]], ...] = ()  # Everything except href, in order

    def to_web_link(self, anchor: Optional[str] = None) -> WebLink:
        """Create the web link for this target within its link context."""
        parameters = [WebLinkParameter(REL_PARAMETER, self.relation_type)]
        if anchor is not None:
            parameters.append(WebLinkParameter(ANCHOR_PARAMETER, anchor))
        parameters.extend(WebLinkParameter(name, value) for name, value in self.attributes)
        return WebLink(self.href, tuple(parameters))


@dataclass
class ParseDiagnostics:
    """Detailed diagnostic information about a parsing operation."""
    input_size_bytes: int = 0
    encoding_detected: Optional[str] = None
    tokens_processed: int = 0
    contexts_processed: int = 0
    contexts_without_anchor: int = 0
    link_targets_found: int = 0
    relation_types: List[str] = field(default_factory=list)
    processing_steps: List[str] = field(default_factory=list)
    performance_metrics: Dict[str, float] = field(default_factory=dict)

    def record_relation_type(self, relation_type: str) -> None:
        if relation_type not in self.relation_types:
            self.relation_types.append(relation_type)


@dataclass
class ParseResult:
    """Complete parsing result with success/error information and diagnostics."""
    links: List[WebLink] = field(default_factory=list)
    success: bool = True
    errors: List[str] = field(default_factory=list)
    error_line: Optional[int] = None
    error_column: Optional[int] = None
    parse_time_ms: float = 0.0
    source: Optional[str] = None
    diagnostics: Optional[ParseDiagnostics] = None
    config_used: Dict[str, Any] = field(default_factory=dict)
