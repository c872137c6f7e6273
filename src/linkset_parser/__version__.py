"""Version information for linkset_parser."""

__version__ = "0.1.0"
__author__ = "signcheck contributors"
__description__ = "Standalone RFC 9264 Link Set JSON parser producing RFC 8288 web links"
