"""
Styled-text rendering.

Plain strings are split into typed segments: `TextSegment` for plain runs and
`StyledSegment` for characters that receive a highlight class (the first
letter, punctuation). `segment_text` is pure; `StyledTextRenderer` turns the
segments into BeautifulSoup nodes inside a container.
"""
from typing import List, NamedTuple, Union

from bs4 import NavigableString, Tag

from portfolio_site.components.content.models import StylingRules
from portfolio_site.components.renderer.page import PageDocument


class TextSegment(NamedTuple):
    text: str


class StyledSegment(NamedTuple):
    text: str
    class_name: str


Segment = Union[TextSegment, StyledSegment]


def segment_text(text: str, rules: StylingRules) -> List[Segment]:
    """
    Splits `text` into plain and styled segments.

    The first-letter rule is applied first and isolates exactly one leading
    character. The punctuation rule then scans the rest, emitting every
    member character as its own styled segment. Concatenating the segment
    texts always gives back `text`.

    Args:
        text (str): Plain text; never interpreted as markup.
        rules (StylingRules): The document's global styling rules.

    Returns:
        List[Segment]: Segments in document order. Empty runs are omitted.
    """
    segments: List[Segment] = []
    working = text or ""

    if rules.first_letter_enabled:
        if working:
            segments.append(StyledSegment(working[0], rules.first_letter_rule.class_name))
        working = working[1:]

    if rules.punctuation_enabled:
        characters = rules.punctuation_rule.character_set
        class_name = rules.punctuation_rule.class_name
        run_start = 0
        for i, char in enumerate(working):
            if char in characters:
                if i > run_start:
                    segments.append(TextSegment(working[run_start:i]))
                segments.append(StyledSegment(char, class_name))
                run_start = i + 1
        if run_start < len(working):
            segments.append(TextSegment(working[run_start:]))
    elif working:
        segments.append(TextSegment(working))

    return segments


class StyledTextRenderer:
    """
    Materializes styled segments as nodes of a `PageDocument`.
    """

    def __init__(self, page: PageDocument, rules: StylingRules):
        self.page = page
        self.rules = rules

    def span(self, text: str, class_name: str) -> Tag:
        """A `<span>` carrying `class_name` around a text node."""
        return self.page.new_tag("span", class_name=class_name, text=text)

    def separator(self, text: str) -> Tag:
        """A fixed separator (/, :, en dash, &) styled with the punctuation class."""
        return self.span(text, self.rules.separator_class)

    def build(self, text: str) -> List[Union[NavigableString, Tag]]:
        """Returns detached nodes for `text`, in order."""
        nodes: List[Union[NavigableString, Tag]] = []
        for segment in segment_text(text, self.rules):
            if isinstance(segment, StyledSegment):
                nodes.append(self.span(segment.text, segment.class_name))
            else:
                nodes.append(self.page.new_text(segment.text))
        return nodes

    def render_into(self, text: str, container: Tag) -> Tag:
        """
        Clears `container` and appends the styled nodes of `text` to it.

        Returns:
            Tag: The container, for chaining.
        """
        self.page.clear(container)
        for node in self.build(text):
            container.append(node)
        return container

    def inline_block(self, text: str) -> Tag:
        """A `<div style="display: inline">` holding the styled `text`."""
        block = self.page.new_tag("div", attrs={"style": "display: inline"})
        return self.render_into(text, block)
