"""
Pydantic models for the portfolio content document.

The top-level `ContentDocument` keeps the raw section mapping untouched;
each section renderer validates its own slice with the section models
below, so a malformed section only affects that section.
"""
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field

DEFAULT_PUNCTUATION_CLASS = "punctuation-highlight"


class SectionKind(str, Enum):
    """The six section kinds of the page, valued by their key in the content document."""
    WHO_AM_I = "whoAmI"
    PERSONAL_INFO = "personalInfo"
    KNOW_HOW = "knowHow"
    SHOWCASE = "showcase"
    EXPERIENCE = "experience"
    EDUCATION = "education"


# --- Styling rules ---

class FirstLetterRule(BaseModel):
    enabled: bool = False
    class_name: str = Field(default="first-letter", alias="className")

    class Config:
        populate_by_name = True
        frozen = True


class PunctuationRule(BaseModel):
    enabled: bool = False
    characters: str = ""
    class_name: str = Field(default=DEFAULT_PUNCTUATION_CLASS, alias="className")

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def character_set(self) -> FrozenSet[str]:
        """Characters to highlight, compared by exact code point."""
        return frozenset(self.characters)


class StylingRules(BaseModel):
    """
    Global styling rules applied to every styled text field.
    An absent rule behaves as a disabled one.
    """
    first_letter_rule: Optional[FirstLetterRule] = Field(default=None, alias="firstLetterRule")
    punctuation_rule: Optional[PunctuationRule] = Field(default=None, alias="punctuationRule")

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def first_letter_enabled(self) -> bool:
        return bool(self.first_letter_rule and self.first_letter_rule.enabled)

    @property
    def punctuation_enabled(self) -> bool:
        return bool(self.punctuation_rule and self.punctuation_rule.enabled)

    @property
    def separator_class(self) -> str:
        """Class used for fixed separators (/, :, en dash, &), styled even when scanning is off."""
        if self.punctuation_rule and self.punctuation_rule.class_name:
            return self.punctuation_rule.class_name
        return DEFAULT_PUNCTUATION_CLASS


# --- Section models ---

class WhoAmISection(BaseModel):
    content: List[str] = Field(default_factory=list)


class PersonalInfo(BaseModel):
    legal_name: Optional[str] = Field(default=None, alias="legalName")
    preferred_name: Optional[str] = Field(default=None, alias="preferredName")
    date_of_birth: Optional[str] = Field(default=None, alias="dateOfBirth")
    email: Optional[str] = None
    phones: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class ProjectEntry(BaseModel):
    """An entry of the showcase or experience sections."""
    title: str
    description: Optional[str] = None
    url: Optional[str] = None
    period: Optional[str] = None
    details: List[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    degree: str
    institution: str
    institution_url: Optional[str] = Field(default=None, alias="institutionUrl")
    institution_url2: Optional[str] = Field(default=None, alias="institutionUrl2")
    period: Optional[str] = None
    details: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


# --- Document ---

class ContentDocument(BaseModel):
    """
    The loaded content document: the raw section mapping plus the parsed
    styling rules. Immutable once built.
    """
    sections: Dict[str, Any]
    styling: StylingRules
    source: Optional[str] = None

    class Config:
        frozen = True

    def has_section(self, kind: SectionKind) -> bool:
        return self.sections.get(kind.value) is not None

    def section(self, kind: SectionKind) -> Optional[Any]:
        """Returns the raw data of a section, or None when absent."""
        return self.sections.get(kind.value)
