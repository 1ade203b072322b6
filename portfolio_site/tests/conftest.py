import copy
import json

import pytest
from bs4 import NavigableString, Tag

from portfolio_site.components.content.loader import parse_content_document
from portfolio_site.components.renderer.page import PageDocument

TEMPLATE_HTML = """<!DOCTYPE html>
<html><body>
  <div id="who-am-i-content">placeholder</div>
  <ul class="info-list" id="personal-info-content"></ul>
  <ul id="knowhow-left"></ul>
  <ul id="knowhow-right"></ul>
  <div id="technical-skills"></div>
  <div id="showcase-content"></div>
  <div id="experience-content"></div>
  <div id="education-content"></div>
  <div id="map"></div>
</body></html>
"""

SAMPLE_PAYLOAD = {
    "sections": {
        "whoAmI": {"content": ["Hello, World!", "I write code."]},
        "personalInfo": {
            "legalName": "Alex Example",
            "preferredName": "Alex",
            "dateOfBirth": "1990.01.01",
            "email": "alex@example.com",
            "phones": ["+1 555-010-0000", "+44 20.7946.0000"],
        },
        "knowHow": ["A", "B", "C", "D", "E"],
        "showcase": [
            {
                "title": "Site builder",
                "url": "https://example.com/builder",
                "description": "Static generator",
                "details": ["Fast, safe.", "Tested!"],
            }
        ],
        "experience": [
            {"title": "Engineer", "period": "2019-2024", "details": ["Built things.", "Fixed things!"]}
        ],
        "education": [
            {
                "degree": "BSc",
                "institution": "MIT & Caltech",
                "institutionUrl": "u1",
                "institutionUrl2": "u2",
                "period": "2010-2014",
            }
        ],
    },
    "styling": {
        "firstLetterRule": {"enabled": True, "className": "big"},
        "punctuationRule": {"enabled": True, "characters": ",!", "className": "hl"},
    },
}


def describe(nodes):
    """Flattens nodes into comparable tuples: ("text", s) or (tag_name, classes, text)."""
    described = []
    for node in nodes:
        if isinstance(node, NavigableString):
            described.append(("text", str(node)))
        elif isinstance(node, Tag):
            described.append((node.name, node.get("class"), node.get_text()))
    return described


@pytest.fixture
def describe_nodes():
    return describe


@pytest.fixture
def sample_payload():
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def document(sample_payload):
    return parse_content_document(sample_payload, source="test")


@pytest.fixture
def page():
    return PageDocument(TEMPLATE_HTML)


@pytest.fixture
def template_html():
    return TEMPLATE_HTML


@pytest.fixture
def content_file(tmp_path, sample_payload):
    path = tmp_path / "about-content.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    return path
