"""Constants and configuration for Link Set parsing.

Member names, parameter names and media types used by the JSON
representation of RFC 9264 are centralized here.
"""

from typing import Any, Dict, FrozenSet

# Top-level member of a JSON Link Set document (RFC 9264, section 4.2.1)
LINKSET_MEMBER: str = 'linkset'

# Member of a link context object carrying the context URI (section 4.2.2)
ANCHOR_MEMBER: str = 'anchor'

# Member of a link target object carrying the target URI (section 4.2.3)
HREF_ATTRIBUTE: str = 'href'

# Member of a language-tagged target attribute object (section 4.2.4.2)
VALUE_MEMBER: str = 'value'

# Web link parameter names (RFC 8288, section 3)
REL_PARAMETER: str = 'rel'
TYPE_PARAMETER: str = 'type'
ANCHOR_PARAMETER: str = 'anchor'

# Media types registered for Link Sets (RFC 9264, section 6)
LINKSET_MEDIA_TYPES: FrozenSet[str] = frozenset({
    'application/linkset',
    'application/linkset+json',
})

# Default parser configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Inputs above this size are rejected before tokenizing
    'max_bytes': 10 * 1024 * 1024,

    # Text encoding of byte input (JSON documents are UTF-8, BOM tolerated)
    'encoding': 'utf-8-sig',
}
