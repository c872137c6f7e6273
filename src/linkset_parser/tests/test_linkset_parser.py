"""Pytest-style tests for the JSON Link Set parser."""

import pytest

from linkset_parser import (
    LinkSetJsonParser,
    ParsingException,
    WebLinkParameter,
    parse_linkset,
    parse_linkset_file,
)


class TestLinkSetJsonParser:
    """Test cases for LinkSetJsonParser happy paths."""

    def test_parser_initialization(self):
        """Test parser initialization with default config."""
        parser = LinkSetJsonParser()
        assert parser.config['max_bytes'] == 10 * 1024 * 1024
        assert parser.config['encoding'] == 'utf-8-sig'

    def test_parser_with_custom_config(self):
        """Test custom configuration overrides defaults only where given."""
        parser = LinkSetJsonParser({'max_bytes': 100})
        assert parser.config['max_bytes'] == 100
        assert parser.config['encoding'] == 'utf-8-sig'

    @pytest.mark.rfc9264
    def test_minimal_linkset(self, parser):
        """Test one anchor with one relation entry."""
        raw = """
        {
          "linkset": [
            {
              "anchor": "https://example.org/resource1",
              "author": [
                { "href": "https://authors.example.net/johndoe", "type": "application/rdf+xml" }
              ]
            }
          ]
        }
        """
        links = parser.parse(raw)

        assert len(links) == 1
        link = links[0]
        assert link.target == "https://authors.example.net/johndoe"
        assert link.rel() == ["author"]
        assert link.type() == "application/rdf+xml"
        assert link.anchor() == "https://example.org/resource1"

    def test_parameters_injected_in_order(self, parser):
        """Test rel and anchor come first, then target attributes verbatim."""
        raw = ('{"linkset":[{"anchor":"https://example.org/page",'
               '"describedby":[{"href":"https://example.org/meta","type":"application/json","foo":"bar"}]}]}')
        link = parser.parse(raw)[0]

        assert link.parameters == (
            WebLinkParameter("rel", "describedby"),
            WebLinkParameter("anchor", "https://example.org/page"),
            WebLinkParameter("type", "application/json"),
            WebLinkParameter("foo", "bar"),
        )

    def test_multiple_contexts_preserve_document_order(self, parser, landing_page_linkset):
        """Test every target object becomes one link, in document order."""
        links = parser.parse(landing_page_linkset)

        assert [link.target for link in links] == [
            "https://doi.org/10.1234/example",
            "https://example.org/metadata",
            "https://example.org/file1",
            "https://example.org/file2",
        ]
        assert [link.anchor() for link in links] == [
            "https://example.org/landing",
            "https://example.org/landing",
            "https://example.org/content",
            "https://example.org/content",
        ]
        assert len([link for link in links if "item" in link.rel()]) == 2

    def test_end_to_end_scenario_document(self, parser):
        """Test the compact landing page document yields two links."""
        raw = ('{"linkset":[{"anchor":"https://example.org/page",'
               '"cite-as":[{"href":"https://doi.org/10.1/x"}],'
               '"describedby":[{"href":"https://example.org/meta","type":"application/json"}]}]}')
        links = parser.parse(raw)

        assert len(links) == 2
        assert links[0].rel() == ["cite-as"]
        assert links[1].type() == "application/json"

    def test_unknown_relations_and_attributes_are_kept(self, parser):
        """Test vocabulary is not judged by the parser."""
        raw = """
        {"linkset": [{"anchor": "https://example.org/resource1",
                      "custom-rel": [{"href": "https://example.org/x", "foo": "bar", "type": "text/plain"}]}]}
        """
        links = parser.parse(raw)

        assert len(links) == 1
        assert links[0].rel() == ["custom-rel"]
        assert links[0].type() == "text/plain"
        assert links[0].parameter("foo") == "bar"

    def test_context_without_anchor(self, parser):
        """Test the anchor member is optional and then absent on the link."""
        links = parser.parse('{"linkset":[{"author":[{"href":"https://example.org/a"}]}]}')

        assert len(links) == 1
        assert links[0].anchor() is None
        assert links[0].parameters == (WebLinkParameter("rel", "author"),)

    def test_empty_linkset_and_empty_relation(self, parser):
        """Test empty arrays produce no links."""
        assert parser.parse('{"linkset": []}') == []
        assert parser.parse('{"linkset": [{"anchor": "https://example.org/a", "item": []}]}') == []

    def test_non_string_scalar_attributes(self, parser):
        """Test numbers and booleans keep their JSON text, null has no value."""
        raw = ('{"linkset":[{"anchor":"https://example.org/a",'
               '"item":[{"href":"https://example.org/f","length":42,"public":true,"title":null}]}]}')
        link = parser.parse(raw)[0]

        assert link.parameter("length") == "42"
        assert link.parameter("public") == "true"
        assert WebLinkParameter("title", None) in link.parameters

    @pytest.mark.rfc9264
    def test_array_valued_attributes_expand(self, parser):
        """Test hreflang arrays and language-tagged title* objects."""
        raw = """
        {"linkset": [{"anchor": "https://example.org/a",
          "alternate": [{"href": "https://example.org/b",
                         "hreflang": ["en", "de"],
                         "title*": [{"value": "Beispiel", "language": "de"}]}]}]}
        """
        link = parser.parse(raw)[0]

        assert [p.value for p in link.parameters_named("hreflang")] == ["en", "de"]
        assert link.parameter("title*") == "Beispiel"

    def test_bytes_input_with_bom(self, parser):
        """Test UTF-8 bytes, including a byte order mark, are accepted."""
        raw = '\ufeff{"linkset":[{"item":[{"href":"https://example.org/f"}]}]}'.encode("utf-8")
        links = parser.parse(raw)
        assert links[0].target == "https://example.org/f"

    def test_escaped_strings_are_decoded(self, parser):
        """Test JSON escapes in member names and values."""
        raw = '{"linkset":[{"anchor":"https:\\/\\/example.org\\/a","item":[{"href":"https://example.org/f","title":"caf\\u00e9"}]}]}'
        link = parser.parse(raw)[0]
        assert link.anchor() == "https://example.org/a"
        assert link.parameter("title") == "café"

    def test_returned_list_is_owned_by_caller(self, parser, landing_page_linkset):
        """Test each call returns a fresh list."""
        first = parser.parse(landing_page_linkset)
        first.clear()
        assert len(parser.parse(landing_page_linkset)) == 4

    def test_parse_file(self, parser, linkset_file):
        """Test parsing from disk."""
        links = parser.parse_file(linkset_file)
        assert len(links) == 4

    def test_convenience_functions(self, landing_page_linkset, linkset_file):
        """Test module level helpers."""
        assert len(parse_linkset(landing_page_linkset)) == 4
        assert len(parse_linkset_file(str(linkset_file))) == 4


class TestLinkSetJsonParserFailures:
    """Test structural violations raise ParsingException."""

    @pytest.mark.parametrize("case_name,raw", [
        ("none input", None),
        ("empty string", ""),
        ("whitespace only", "   \n "),
        ("not json", "<not-json>"),
        ("root is array", '[{"linkset": []}]'),
        ("root is scalar", '"linkset"'),
        ("empty object", "{}"),
        ("missing top-level linkset", '{"x": []}'),
        ("linkset not an array", '{"linkset": {}}'),
        ("second top-level member", '{"linkset": [], "other": 1}'),
        ("context not an object", '{"linkset": ["https://example.org"]}'),
        ("relation value not an array",
         '{"linkset":[{"anchor":"https://example.org/r","author":{"href":"https://example.org/a"}}]}'),
        ("target not an object", '{"linkset":[{"author":["https://example.org/a"]}]}'),
        ("target missing href",
         '{"linkset":[{"anchor":"https://example.org/r","author":[{"type":"text/plain"}]}]}'),
        ("href not a string", '{"linkset":[{"author":[{"href":42}]}]}'),
        ("href not a uri",
         '{"linkset":[{"anchor":"https://example.org/r","author":[{"href":"::::"}]}]}'),
        ("href with spaces", '{"linkset":[{"author":[{"href":"https://example.org/a b"}]}]}'),
        ("href with unclosed ip literal",
         '{"linkset":[{"anchor":"https://example.org/r","cite-as":[{"href":"https://[::1"}]}]}'),
        ("href with unopened ip literal", '{"linkset":[{"author":[{"href":"https://::1]/a"}]}]}'),
        ("href with brackets in path", '{"linkset":[{"author":[{"href":"https://example.org/a[1]"}]}]}'),
        ("anchor not a uri",
         '{"linkset":[{"anchor":"::::","author":[{"href":"https://example.org/a"}]}]}'),
        ("anchor not a string", '{"linkset":[{"anchor":1,"author":[{"href":"https://example.org/a"}]}]}'),
        ("anchor with unclosed ip literal",
         '{"linkset":[{"anchor":"https://[::1","author":[{"href":"https://example.org/a"}]}]}'),
        ("object attribute", '{"linkset":[{"author":[{"href":"https://example.org/a","x":{"y":"z"}}]}]}'),
        ("nested attribute array", '{"linkset":[{"author":[{"href":"https://example.org/a","x":[["y"]]}]}]}'),
        ("tagged value without value", '{"linkset":[{"author":[{"href":"https://example.org/a","title*":[{"language":"en"}]}]}]}'),
        ("truncated", '{"linkset":[{"anchor":"https://example.org/r"'),
        ("trailing comma", '{"linkset":[],}'),
        ("trailing content", '{"linkset":[]} {}'),
    ])
    def test_rejects_invalid_documents(self, parser, case_name, raw):
        """Test malformed or structurally invalid documents."""
        with pytest.raises(ParsingException):
            parser.parse(raw)

    def test_missing_linkset_member_reports_position(self, parser):
        """Test the exception carries line and column of the offending token."""
        with pytest.raises(ParsingException) as exc_info:
            parser.parse('{\n  "links": []\n}')

        assert exc_info.value.line == 2
        assert exc_info.value.column == 3
        assert "linkset" in str(exc_info.value)

    def test_malformed_json_reports_position(self, parser):
        """Test syntax errors carry the position of the broken character."""
        with pytest.raises(ParsingException) as exc_info:
            parser.parse('{"linkset": [\n  {"item": [ {"href" "https://example.org/a"} ]}\n]}')

        assert exc_info.value.line == 2
        assert exc_info.value.column == 22

    def test_none_input_has_no_position(self, parser):
        """Test None is rejected before tokenizing."""
        with pytest.raises(ParsingException) as exc_info:
            parser.parse(None)
        assert exc_info.value.line is None
        assert exc_info.value.column is None

    def test_parsing_exception_is_value_error(self, parser):
        """Test callers may catch ValueError."""
        with pytest.raises(ValueError):
            parser.parse("{")

    def test_oversized_input_rejected(self, small_parser):
        """Test the configured size limit."""
        raw = '{"linkset":[{"item":[{"href":"https://example.org/' + "a" * 100 + '"}]}]}'
        with pytest.raises(ParsingException, match="maximum size"):
            small_parser.parse(raw)

    def test_invalid_utf8_bytes(self, parser):
        """Test undecodable byte input."""
        with pytest.raises(ParsingException):
            parser.parse(b'{"linkset": ["\xff"]}')

    def test_parse_file_closes_handle_on_failure(self, parser, tmp_path):
        """Test invalid files raise and leave no open handle behind."""
        path = tmp_path / "broken.json"
        path.write_text('{"x": []}', encoding="utf-8")

        with pytest.raises(ParsingException):
            parser.parse_file(path)
        # The file can be replaced right away, nothing keeps it open
        path.unlink()
        assert not path.exists()


class TestParseContent:
    """Test the non-raising parse_content variant."""

    def test_parse_content_success(self, parser, landing_page_linkset):
        """Test successful parsing with diagnostics."""
        result = parser.parse_content(landing_page_linkset, "linkset.json")

        assert result.success is True
        assert result.errors == []
        assert result.source == "linkset.json"
        assert len(result.links) == 4
        assert result.parse_time_ms >= 0

        diagnostics = result.diagnostics
        assert diagnostics.contexts_processed == 2
        assert diagnostics.contexts_without_anchor == 0
        assert diagnostics.link_targets_found == 4
        assert diagnostics.relation_types == ["cite-as", "describedby", "item"]
        assert diagnostics.tokens_processed > 0
        assert "links_created" in diagnostics.processing_steps

    def test_parse_content_failure(self, parser):
        """Test failures are reported in the result instead of raised."""
        result = parser.parse_content('{"x": []}')

        assert result.success is False
        assert result.links == []
        assert len(result.errors) == 1
        assert "linkset" in result.errors[0]
        assert result.error_line == 1
        assert result.error_column == 2
        assert "parse_failed" in result.diagnostics.processing_steps
