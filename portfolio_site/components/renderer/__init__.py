"""
Renderer component for the portfolio site builder.

Provides the page wrapper, the styled-text renderer and the section renderers.
"""
from .page import PageDocument
from .styled_text import StyledSegment, StyledTextRenderer, TextSegment, segment_text
from .sections import (
    SectionRenderer,
    WhoAmIRenderer,
    PersonalInfoRenderer,
    KnowHowRenderer,
    ShowcaseRenderer,
    ExperienceRenderer,
    EducationRenderer,
    default_section_renderers,
    split_columns,
)

__all__ = [
    "PageDocument",
    "StyledSegment",
    "StyledTextRenderer",
    "TextSegment",
    "segment_text",
    "SectionRenderer",
    "WhoAmIRenderer",
    "PersonalInfoRenderer",
    "KnowHowRenderer",
    "ShowcaseRenderer",
    "ExperienceRenderer",
    "EducationRenderer",
    "default_section_renderers",
    "split_columns",
]
