"""
Components sub-package for the portfolio site builder.

This package contains the building blocks of a site build: loading the
content document, rendering sections into the page, the language skills
display, map-key resolution and file output.
"""

# Re-export key components for easier access.
from .content.loader import ContentLoader
from .content.models import ContentDocument, StylingRules
from .renderer.page import PageDocument
from .renderer.styled_text import StyledTextRenderer
from .skills.language_skills import LanguageSkillsRenderer
from .mapping.map_key import MapKeyResolver
from .storage.file_storage import FileStorage

__all__ = [
    "ContentLoader",
    "ContentDocument",
    "StylingRules",
    "PageDocument",
    "StyledTextRenderer",
    "LanguageSkillsRenderer",
    "MapKeyResolver",
    "FileStorage",
]
