"""Pytest configuration and fixtures for Link Set parser tests."""

import pytest

from linkset_parser import LinkSetJsonParser


@pytest.fixture
def parser():
    """Basic parser fixture."""
    return LinkSetJsonParser()


@pytest.fixture
def small_parser():
    """Parser with a tiny input size limit."""
    return LinkSetJsonParser({'max_bytes': 64})


@pytest.fixture
def landing_page_linkset():
    """Link Set for a landing page with two link contexts (RFC 9264, section 7.2 style)."""
    return """{
  "linkset": [
    {
      "anchor": "https://example.org/landing",
      "cite-as": [ { "href": "https://doi.org/10.1234/example" } ],
      "describedby": [
        { "href": "https://example.org/metadata", "type": "application/json" }
      ]
    },
    {
      "anchor": "https://example.org/content",
      "item": [
        { "href": "https://example.org/file1", "type": "application/pdf" },
        { "href": "https://example.org/file2", "type": "application/pdf" }
      ]
    }
  ]
}"""


@pytest.fixture
def linkset_file(tmp_path, landing_page_linkset):
    """Link Set document written to disk."""
    path = tmp_path / "linkset.json"
    path.write_text(landing_page_linkset, encoding="utf-8")
    return path


def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line("markers", "rfc9264: tests derived from RFC 9264 examples")
