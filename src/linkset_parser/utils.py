"""Utility functions for Link Set parsing operations.

This module provides helper functions for URI syntax checks and
relation type handling shared by the parser and its consumers.
"""

import re
from typing import Iterable, List, Optional
from urllib.parse import urlsplit


class UriUtils:
    """URI syntax utilities (RFC 3986)."""

    # Characters allowed anywhere in a URI reference (unreserved, reserved, '%')
    _ALLOWED = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*$")
    _BROKEN_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
    _SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
    _PATH_START = re.compile(r"[/?#]")
    _IP_LITERAL_AUTHORITY = re.compile(r"^([^@\[\]]*@)?\[[^\[\]]+\](:[0-9]*)?$")

    @staticmethod
    def is_uri(value: object) -> bool:
        """Check whether a value is a syntactically valid URI reference.

        Absolute URIs and relative references are both accepted. No
        normalization or resolution takes place.

        Args:
            value: Candidate value

        Returns:
            True if the value is a string that parses as a URI reference
        """
        if not isinstance(value, str):
            return False
        if not UriUtils._ALLOWED.match(value) or UriUtils._BROKEN_PERCENT.search(value):
            return False

        # A colon before the first '/', '?' or '#' terminates the scheme
        head = UriUtils._PATH_START.split(value, maxsplit=1)[0]
        if ':' in head:
            scheme = head.split(':', 1)[0]
            if not UriUtils._SCHEME.match(scheme):
                return False

        try:
            parts = urlsplit(value)
        except ValueError:
            return False

        # Square brackets only delimit an IP-literal host in the authority
        if any(c in part for part in (parts.path, parts.query, parts.fragment) for c in "[]"):
            return False
        if ('[' in parts.netloc or ']' in parts.netloc) and not UriUtils._IP_LITERAL_AUTHORITY.match(parts.netloc):
            return False
        return True

    @staticmethod
    def scheme(value: str) -> Optional[str]:
        """Get the lower-cased scheme of a URI, None for relative references.

        Args:
            value: URI string

        Returns:
            Scheme without the trailing colon or None (also for unparsable values)
        """
        try:
            scheme = urlsplit(value).scheme
        except ValueError:
            return None
        return scheme.lower() if scheme else None


class TextUtils:
    """Text processing utilities for parameter values."""

    @staticmethod
    def split_relation_types(values: Iterable[Optional[str]]) -> List[str]:
        """Split ``rel`` parameter values into single relation types.

        A single ``rel`` value may carry several space-separated relation
        types (RFC 8288, section 3.3). Every token is returned, in order,
        duplicates included.

        Args:
            values: Raw ``rel`` parameter values (None entries are skipped)

        Returns:
            Flat list of relation type tokens
        """
        relations: List[str] = []
        for value in values:
            if value:
                relations.extend(value.split())
        return relations
