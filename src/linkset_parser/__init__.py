"""Standalone Link Set parser for typed web links.

This package parses the JSON representation of RFC 9264 Link Sets into
RFC 8288 web links with zero external dependencies, designed for reuse
across different projects.

Basic usage:
    from linkset_parser import LinkSetJsonParser

    parser = LinkSetJsonParser()
    links = parser.parse(raw_json)

    for link in links:
        print(link.target, link.rel(), link.anchor())
"""

from .__version__ import __version__, __author__, __description__
from .parser import LinkSetJsonParser
from .exceptions import ParsingException
from .models import (
    WebLink,
    WebLinkParameter,
    LinkTargetObject,
    ParseResult,
    ParseDiagnostics
)
from .tokens import (
    JsonToken,
    JsonTokenStream,
    TokenType
)
from .utils import (
    UriUtils,
    TextUtils
)
from .constants import (
    LINKSET_MEDIA_TYPES,
    DEFAULT_CONFIG
)

# Public API
__all__ = [
    # Version info
    '__version__',
    '__author__',
    '__description__',

    # Main parser
    'LinkSetJsonParser',
    'ParsingException',

    # Data models
    'WebLink',
    'WebLinkParameter',
    'LinkTargetObject',
    'ParseResult',
    'ParseDiagnostics',

    # Tokenizer
    'JsonToken',
    'JsonTokenStream',
    'TokenType',

    # Utilities
    'UriUtils',
    'TextUtils',

    # Constants
    'LINKSET_MEDIA_TYPES',
    'DEFAULT_CONFIG'
]


def create_parser(config=None):
    """Convenience function to create parser with configuration.

    Args:
        config: Optional configuration dictionary

    Returns:
        Configured LinkSetJsonParser instance
    """
    return LinkSetJsonParser(config)


def parse_linkset_file(file_path, config=None):
    """Convenience function to parse a Link Set file directly.

    Args:
        file_path: Path to the JSON document (string or Path object)
        config: Optional parser configuration

    Returns:
        List of WebLink
    """
    return LinkSetJsonParser(config).parse_file(file_path)


def parse_linkset(content, config=None):
    """Convenience function to parse Link Set content.

    Args:
        content: JSON document as string or bytes
        config: Optional parser configuration

    Returns:
        List of WebLink
    """
    return LinkSetJsonParser(config).parse(content)
