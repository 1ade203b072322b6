"""
Content component for the portfolio site builder.

This sub-package holds the content document models and the loader that
fetches and parses the document.
"""
from .models import (
    ContentDocument,
    EducationEntry,
    FirstLetterRule,
    PersonalInfo,
    ProjectEntry,
    PunctuationRule,
    SectionKind,
    StylingRules,
    WhoAmISection,
)
from .loader import ContentLoader, fetch_json, parse_content_document

__all__ = [
    "ContentDocument",
    "EducationEntry",
    "FirstLetterRule",
    "PersonalInfo",
    "ProjectEntry",
    "PunctuationRule",
    "SectionKind",
    "StylingRules",
    "WhoAmISection",
    "ContentLoader",
    "fetch_json",
    "parse_content_document",
]
