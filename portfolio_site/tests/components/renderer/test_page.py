import pytest
from bs4 import NavigableString

from portfolio_site.components.renderer.page import PageDocument
from portfolio_site.core.exceptions import RendererError


def test_none_html_rejected():
    with pytest.raises(RendererError):
        PageDocument(None)


def test_find_container_tries_selectors_in_order(page):
    found = page.find_container("#absent", "#knowhow-right", "#knowhow-left")
    assert found["id"] == "knowhow-right"
    assert page.find_container("#absent", ".also-absent") is None


def test_clear_removes_children(page):
    container = page.find_container("#who-am-i-content")
    page.clear(container)
    assert container.contents == []


def test_new_tag_with_class_text_and_attrs(page):
    tag = page.new_tag("a", class_name="one two", text="<b>x</b>", attrs={"href": "/here"})
    assert tag["class"] == ["one", "two"]
    assert tag["href"] == "/here"
    assert isinstance(tag.contents[0], NavigableString)
    assert tag.find("b") is None
    assert "&lt;b&gt;x&lt;/b&gt;" in str(tag)


def test_new_tag_without_class_has_no_class_attribute(page):
    assert page.new_tag("li").get("class") is None


def test_to_html_reflects_changes(page):
    container = page.find_container("#map")
    container["data-azure-maps-key"] = "k"
    assert 'data-azure-maps-key="k"' in page.to_html()
