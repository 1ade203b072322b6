"""
Skills component: display of aggregated GitHub language statistics.
"""
from .language_skills import (
    LanguageSkillsRenderer,
    LanguageStat,
    aggregate_language_bytes,
    calculate_language_percentages,
    format_language_name,
    select_top_languages,
)

__all__ = [
    "LanguageSkillsRenderer",
    "LanguageStat",
    "aggregate_language_bytes",
    "calculate_language_percentages",
    "format_language_name",
    "select_top_languages",
]
