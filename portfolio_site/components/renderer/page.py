"""
Page document wrapper around BeautifulSoup.

This module provides the `PageDocument` class, which parses the page
template and offers the small set of DOM operations the renderers need:
locating mount points, clearing them, and creating new tag and text nodes.
Text is always added as `NavigableString` nodes, so content is never
interpreted as markup.
"""
from typing import Dict, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from portfolio_site.core.exceptions import RendererError


class PageDocument:
    """
    A parsed HTML page that section renderers populate.

    Attributes:
        soup (BeautifulSoup): The parsed page.
    """
    def __init__(self, html_content: str):
        """
        Args:
            html_content (str): The page template markup.

        Raises:
            RendererError: If `html_content` is None or cannot be parsed.
        """
        if html_content is None:
            raise RendererError("HTML content cannot be None for PageDocument.")

        try:
            # Stdlib parser.
            self.soup = BeautifulSoup(html_content, "html.parser")
        except Exception as e:
            raise RendererError(f"Failed to parse page template: {e}")

    def find_container(self, *selectors: str) -> Optional[Tag]:
        """
        Returns the first element matched by the selectors, tried in order.

        Args:
            *selectors (str): CSS selectors, e.g. "#who-am-i-content".

        Returns:
            Optional[Tag]: The matched element, or None.
        """
        for selector in selectors:
            found = self.soup.select_one(selector)
            if found is not None:
                return found
        return None

    @staticmethod
    def clear(container: Tag) -> None:
        """Removes every child of the container."""
        container.clear()

    def new_tag(self, name: str, class_name: Optional[str] = None, text: Optional[str] = None,
                attrs: Optional[Dict[str, str]] = None) -> Tag:
        """
        Creates a detached tag.

        Args:
            name (str): Tag name.
            class_name (Optional[str]): Value of the class attribute.
            text (Optional[str]): Plain text child, added as a text node.
            attrs (Optional[Dict[str, str]]): Further attributes.
        """
        tag = self.soup.new_tag(name, attrs=dict(attrs or {}))
        if class_name:
            # Stored as a list, matching how BeautifulSoup parses class attributes.
            tag["class"] = class_name.split()
        if text is not None:
            tag.append(self.new_text(text))
        return tag

    def new_text(self, text: str) -> NavigableString:
        return self.soup.new_string(text)

    def to_html(self) -> str:
        return str(self.soup)
