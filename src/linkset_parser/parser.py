"""Core Link Set parser for the JSON representation of RFC 9264.

This module provides the main LinkSetJsonParser class that turns a JSON
Link Set document into a flat list of WebLink records using only Python
stdlib.
"""

import time
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Tuple, Union

from .constants import (
    ANCHOR_MEMBER,
    DEFAULT_CONFIG,
    HREF_ATTRIBUTE,
    LINKSET_MEMBER,
    VALUE_MEMBER,
)
from .exceptions import ParsingException
from .models import LinkTargetObject, ParseDiagnostics, ParseResult, WebLink
from .tokens import JsonToken, JsonTokenStream, TokenType
from .utils import UriUtils

RawLinkSet = Union[str, bytes, bytearray]
Attribute = Tuple[str, Optional[str]]


class LinkSetJsonParser:
    """Parser for Link Set documents (``application/linkset+json``).

    A Link Set document is a JSON object with a single ``linkset`` member
    holding an array of link context objects. Each context object has an
    optional ``anchor`` and one member per relation type whose value is an
    array of link target objects::

        { "linkset": [
            { "anchor": "https://example.net/bar",
              "item": [
                {"href": "https://example.com/foo1"},
                {"href": "https://example.com/foo2"}
              ]
            }
        ]}

    Every link target object becomes one WebLink with ``rel`` set to the
    member name, ``anchor`` set to the context anchor and all other target
    attributes copied verbatim. Vocabulary is not checked here; unknown
    relation types and attributes pass through to the validators.

    The parser keeps no per-call state and can be shared between threads.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize parser with configuration.

        Args:
            config: Parser configuration dict, uses DEFAULT_CONFIG if None
        """
        self.config = {**DEFAULT_CONFIG, **(config or {})}

    def parse(self, raw_link_set: Optional[RawLinkSet]) -> List[WebLink]:
        """Parse a JSON Link Set into web links.

        Args:
            raw_link_set: Document as text or UTF-8 bytes

        Returns:
            Web links in document order (a new list per call)

        Raises:
            ParsingException: If the input is not a valid JSON Link Set
        """
        return self._parse(raw_link_set, ParseDiagnostics())

    def parse_file(self, file_path: Union[str, Path]) -> List[WebLink]:
        """Parse a JSON Link Set file.

        The file is read in binary mode and closed before parsing starts,
        regardless of the outcome.

        Args:
            file_path: Path to the Link Set document

        Returns:
            Web links in document order

        Raises:
            ParsingException: If the file content is not a valid JSON Link Set
            OSError: If the file cannot be read
        """
        with open(file_path, 'rb') as handle:
            # One byte over the limit is enough to detect oversized input
            raw = handle.read(self.config['max_bytes'] + 1)
        return self.parse(raw)

    def parse_content(self, raw_link_set: Optional[RawLinkSet], source: str = "<string>") -> ParseResult:
        """Parse a JSON Link Set without raising on invalid input.

        Args:
            raw_link_set: Document as text or UTF-8 bytes
            source: Virtual source name for error reporting

        Returns:
            ParseResult with links or error information
        """
        start_time = time.time()
        result = ParseResult(source=source, config_used=self.config.copy())
        diagnostics = ParseDiagnostics()
        diagnostics.processing_steps.append("parse_content_started")

        try:
            result.links = self._parse(raw_link_set, diagnostics)
        except ParsingException as e:
            result.success = False
            result.errors.append(str(e))
            result.error_line = e.line
            result.error_column = e.column
            diagnostics.processing_steps.append("parse_failed")

        result.parse_time_ms = (time.time() - start_time) * 1000
        result.diagnostics = diagnostics
        return result

    def _parse(self, raw_link_set: Optional[RawLinkSet], diagnostics: ParseDiagnostics) -> List[WebLink]:
        text = self._decode(raw_link_set, diagnostics)
        diagnostics.processing_steps.append("input_decoded")

        stream = JsonTokenStream(text)
        parse_start = time.time()
        try:
            links = self._parse_document(stream, diagnostics)
        finally:
            diagnostics.tokens_processed = stream.tokens_read
            diagnostics.performance_metrics['tokenize_parse_ms'] = (time.time() - parse_start) * 1000

        diagnostics.processing_steps.append("links_created")
        return links

    def _decode(self, raw_link_set: Optional[RawLinkSet], diagnostics: ParseDiagnostics) -> str:
        if raw_link_set is None:
            raise ParsingException("raw link set must not be None")

        if isinstance(raw_link_set, (bytes, bytearray)):
            size = len(raw_link_set)
            self._check_size(size)
            encoding = self.config['encoding']
            try:
                text = bytes(raw_link_set).decode(encoding)
            except UnicodeDecodeError as e:
                raise ParsingException(f"Link set is not valid {encoding}: {e}") from e
            diagnostics.encoding_detected = encoding
        elif isinstance(raw_link_set, str):
            size = len(raw_link_set.encode('utf-8'))
            self._check_size(size)
            text = raw_link_set
        else:
            raise ParsingException(f"Unsupported link set input type: {type(raw_link_set).__name__}")

        diagnostics.input_size_bytes = size
        if not text.strip():
            raise ParsingException("raw link set must not be empty")
        return text

    def _check_size(self, size: int) -> None:
        limit = self.config['max_bytes']
        if size > limit:
            raise ParsingException(f"Link set exceeds the maximum size of {limit} bytes")

    def _parse_document(self, stream: JsonTokenStream, diagnostics: ParseDiagnostics) -> List[WebLink]:
        # The set of links is a JSON object (RFC 9264, section 4.2.1)
        token = stream.next_token()
        if token.type != TokenType.START_OBJECT:
            self._fail(f"Linkset JSON must be an object, but was: {token.describe()}", token)

        # ... whose single member is named 'linkset'
        token = stream.next_token()
        if token.type != TokenType.PROPERTY_NAME:
            self._fail(f"Linkset JSON must contain '{LINKSET_MEMBER}', but was: {token.describe()}", token)
        if token.value != LINKSET_MEMBER:
            self._fail(f"Expected '{LINKSET_MEMBER}' member, but was: '{token.value}'", token)

        # ... and holds the link context objects in an array (section 4.2.2)
        token = stream.next_token()
        if token.type != TokenType.START_ARRAY:
            self._fail(f"'{LINKSET_MEMBER}' must be an array, but was: {token.describe()}", token)

        links: List[WebLink] = []
        while True:
            token = stream.next_token()
            if token.type == TokenType.END_ARRAY:
                break
            if token.type != TokenType.START_OBJECT:
                self._fail(f"Link context must be an object, but was: {token.describe()}", token)
            links.extend(self._parse_link_context(stream, diagnostics))

        token = stream.next_token()
        if token.type != TokenType.END_OBJECT:
            self._fail(f"Linkset JSON must contain a single '{LINKSET_MEMBER}' member, "
                       f"but found: {token.describe()}", token)

        # Reaching the end raises on trailing content
        stream.next_token()
        return links

    def _parse_link_context(self, stream: JsonTokenStream, diagnostics: ParseDiagnostics) -> List[WebLink]:
        """Parse one link context object; the stream is positioned after its '{'."""
        anchor: Optional[str] = None
        targets: List[LinkTargetObject] = []

        while True:
            token = stream.next_token()
            if token.type == TokenType.END_OBJECT:
                break

            member = token.value
            if member == ANCHOR_MEMBER:
                anchor = self._read_anchor(stream)
            else:
                targets.extend(self._parse_link_targets(member, stream))
                diagnostics.record_relation_type(member)

        diagnostics.contexts_processed += 1
        if anchor is None:
            diagnostics.contexts_without_anchor += 1
        diagnostics.link_targets_found += len(targets)
        return [target.to_web_link(anchor) for target in targets]

    def _read_anchor(self, stream: JsonTokenStream) -> str:
        token = stream.next_token()
        if token.type != TokenType.VALUE_STRING:
            self._fail(f"'{ANCHOR_MEMBER}' must be a string, but was: {token.describe()}", token)
        # An anchor MAY be omitted, but when present it MUST be a URI
        if not UriUtils.is_uri(token.value):
            self._fail(f"Anchor value must be a URI: '{token.value}'", token)
        return token.value

    def _parse_link_targets(self, relation_type: str, stream: JsonTokenStream) -> List[LinkTargetObject]:
        """Parse the array of link target objects of one relation type."""
        token = stream.next_token()
        if token.type != TokenType.START_ARRAY:
            self._fail(f"Link targets for relation type '{relation_type}' must be provided in an array, "
                       f"but was: {token.describe()}", token)

        targets: List[LinkTargetObject] = []
        while True:
            token = stream.next_token()
            if token.type == TokenType.END_ARRAY:
                break
            if token.type != TokenType.START_OBJECT:
                self._fail(f"Link target for relation type '{relation_type}' must be an object, "
                           f"but was: {token.describe()}", token)
            targets.append(self._parse_link_target(relation_type, token, stream))
        return targets

    def _parse_link_target(self, relation_type: str, start: JsonToken,
                           stream: JsonTokenStream) -> LinkTargetObject:
        """Parse one link target object; the stream is positioned after its '{'."""
        href: Optional[str] = None
        attributes: List[Attribute] = []

        while True:
            token = stream.next_token()
            if token.type == TokenType.END_OBJECT:
                break

            name = token.value
            value = stream.next_token()
            if name == HREF_ATTRIBUTE:
                href = self._read_href(value)
            elif value.is_scalar:
                attributes.append((name, self._scalar_text(value)))
            elif value.type == TokenType.START_ARRAY:
                attributes.extend(self._parse_attribute_array(name, stream))
            else:
                self._fail(f"Target attribute '{name}' must not be an object", value)

        if href is None:
            self._fail(f"Missing '{HREF_ATTRIBUTE}' for link target of relation type '{relation_type}'", start)
        return LinkTargetObject(relation_type, href, tuple(attributes))

    def _read_href(self, token: JsonToken) -> str:
        if token.type != TokenType.VALUE_STRING:
            self._fail(f"'{HREF_ATTRIBUTE}' must be a string, but was: {token.describe()}", token)
        if not UriUtils.is_uri(token.value):
            self._fail(f"Link target '{HREF_ATTRIBUTE}' must be a URI: '{token.value}'", token)
        return token.value

    def _parse_attribute_array(self, name: str, stream: JsonTokenStream) -> List[Attribute]:
        """Expand an array-valued target attribute (RFC 9264, section 4.2.4).

        Scalars map to one parameter each; objects are language-tagged values
        and contribute their ``value`` member.
        """
        attributes: List[Attribute] = []
        while True:
            token = stream.next_token()
            if token.type == TokenType.END_ARRAY:
                break
            if token.is_scalar:
                attributes.append((name, self._scalar_text(token)))
            elif token.type == TokenType.START_OBJECT:
                attributes.append((name, self._read_tagged_value(name, token, stream)))
            else:
                self._fail(f"Target attribute '{name}' must not contain nested arrays", token)
        return attributes

    def _read_tagged_value(self, name: str, start: JsonToken, stream: JsonTokenStream) -> Optional[str]:
        found = False
        value: Optional[str] = None
        while True:
            token = stream.next_token()
            if token.type == TokenType.END_OBJECT:
                break
            member = token.value
            member_value = stream.next_token()
            if not member_value.is_scalar:
                self._fail(f"Members of target attribute '{name}' must be scalar values", member_value)
            if member == VALUE_MEMBER:
                found = True
                value = self._scalar_text(member_value)
        if not found:
            self._fail(f"Target attribute '{name}' object is missing '{VALUE_MEMBER}'", start)
        return value

    @staticmethod
    def _scalar_text(token: JsonToken) -> Optional[str]:
        if token.type == TokenType.VALUE_NULL:
            return None
        return token.value

    @staticmethod
    def _fail(message: str, token: JsonToken) -> NoReturn:
        raise ParsingException(message, token.line, token.column)
