"""
Language skills display.

Reads the pre-generated GitHub language statistics and renders them as
progress bars into the skills container of the page.
"""
import math
from typing import Any, Dict, List, Mapping, Optional, TYPE_CHECKING

from bs4 import Tag
from pydantic import BaseModel, TypeAdapter, ValidationError

from portfolio_site.components.content.loader import DEFAULT_TIMEOUT_SECONDS, fetch_json
from portfolio_site.components.content.models import DEFAULT_PUNCTUATION_CLASS, PunctuationRule, StylingRules
from portfolio_site.components.renderer.page import PageDocument
from portfolio_site.components.renderer.styled_text import StyledTextRenderer
from portfolio_site.core.exceptions import LoadError, SkillsError
from portfolio_site.core.logger import get_logger

if TYPE_CHECKING:
    from portfolio_site.core.config import ConfigurationManager

logger = get_logger(__name__)

DEFAULT_DATA_URL = "site/data/github-languages.json"
DEFAULT_CONTAINER = "#technical-skills"
DEFAULT_MAX_SKILLS = 8
DEFAULT_MIN_PERCENT = 1.0
DEFAULT_HIGHLIGHT_CHARACTERS = "&#+"

# Display names for GitHub's language labels; unknown labels are shown as-is.
LANGUAGE_DISPLAY_NAMES = {
    "HTML": "HTML&CSS",
    "CSS": "HTML&CSS",
    "Shell": "Shell Scripts",
    "Dockerfile": "Docker",
}


class LanguageStat(BaseModel):
    name: str
    percent: float
    bytes: int = 0


_stats_adapter = TypeAdapter(List[LanguageStat])


def format_language_name(language: str) -> str:
    return LANGUAGE_DISPLAY_NAMES.get(language, language)


def calculate_language_percentages(language_bytes: Mapping[str, int]) -> List[LanguageStat]:
    """Converts byte counts per language into percentages of the total."""
    total_bytes = sum(language_bytes.values())
    if total_bytes == 0:
        return []
    return [
        LanguageStat(name=language, percent=(count / total_bytes) * 100, bytes=count)
        for language, count in language_bytes.items()
    ]


def aggregate_language_bytes(languages_by_repo: Mapping[str, Mapping[str, int]]) -> Dict[str, int]:
    """Sums the per-repository byte counts of every language."""
    totals: Dict[str, int] = {}
    for repo_languages in languages_by_repo.values():
        for language, count in repo_languages.items():
            totals[language] = totals.get(language, 0) + count
    return totals


def select_top_languages(stats: List[LanguageStat], min_percent: float = DEFAULT_MIN_PERCENT,
                         max_skills: int = DEFAULT_MAX_SKILLS) -> List[LanguageStat]:
    """
    Prepares the languages for display.

    Names are mapped to display names and entries sharing one (HTML and CSS)
    are merged. Entries below `min_percent` are dropped, the rest sorted by
    percent, highest first, and cut to `max_skills`.
    """
    merged: Dict[str, LanguageStat] = {}
    for stat in stats:
        display_name = format_language_name(stat.name)
        previous = merged.get(display_name)
        if previous is None:
            merged[display_name] = LanguageStat(name=display_name, percent=stat.percent, bytes=stat.bytes)
        else:
            merged[display_name] = LanguageStat(
                name=display_name,
                percent=previous.percent + stat.percent,
                bytes=previous.bytes + stat.bytes,
            )
    kept = [stat for stat in merged.values() if stat.percent >= min_percent]
    kept.sort(key=lambda stat: stat.percent, reverse=True)
    return kept[:max_skills]


def parse_language_data(data: Any) -> List[LanguageStat]:
    """
    Reads either the main data file (`languages` list) or the detailed one
    (`languagesByRepo` byte counts).

    Raises:
        SkillsError: If neither shape is present or the entries are invalid.
    """
    if not isinstance(data, dict):
        raise SkillsError("Invalid data format in language file")
    try:
        if isinstance(data.get("languages"), list):
            return _stats_adapter.validate_python(data["languages"])
        if isinstance(data.get("languagesByRepo"), dict):
            return calculate_language_percentages(aggregate_language_bytes(data["languagesByRepo"]))
    except (ValidationError, TypeError, AttributeError) as e:
        raise SkillsError(f"Invalid language entries in language file: {e}")
    raise SkillsError("Invalid data format in language file")


class LanguageSkillsRenderer:
    """
    Loads the language statistics and renders one progress bar per language.
    """

    def __init__(self, config: Optional['ConfigurationManager'] = None):
        if config:
            self.enabled = bool(config.get("components.skills.enabled", True))
            self.data_url = config.get("components.skills.data_url", DEFAULT_DATA_URL)
            self.container_selector = config.get("components.skills.container", DEFAULT_CONTAINER)
            self.max_skills = int(config.get("components.skills.max_skills", DEFAULT_MAX_SKILLS))
            self.min_percent = float(config.get("components.skills.min_percent", DEFAULT_MIN_PERCENT))
            highlight_characters = config.get("components.skills.highlight_characters", DEFAULT_HIGHLIGHT_CHARACTERS)
            highlight_class = config.get("components.skills.highlight_class", DEFAULT_PUNCTUATION_CLASS)
            self.timeout = float(config.get("content.timeout_seconds", DEFAULT_TIMEOUT_SECONDS))
        else:
            self.enabled = True
            self.data_url = DEFAULT_DATA_URL
            self.container_selector = DEFAULT_CONTAINER
            self.max_skills = DEFAULT_MAX_SKILLS
            self.min_percent = DEFAULT_MIN_PERCENT
            highlight_characters = DEFAULT_HIGHLIGHT_CHARACTERS
            highlight_class = DEFAULT_PUNCTUATION_CLASS
            self.timeout = DEFAULT_TIMEOUT_SECONDS
        self.name_rules = StylingRules(
            punctuation_rule=PunctuationRule(enabled=True, characters=highlight_characters, class_name=highlight_class)
        )

    async def load(self, url: Optional[str] = None) -> List[LanguageStat]:
        """
        Raises:
            SkillsError: If the data file cannot be fetched or parsed.
        """
        target = url or self.data_url
        try:
            data = await fetch_json(target, timeout=self.timeout)
        except LoadError as e:
            raise SkillsError(f"Failed to load language data: {e.message}")
        stats = parse_language_data(data)
        if isinstance(data, dict) and data.get("lastUpdated"):
            logger.info(
                f"GitHub language data last updated: {data['lastUpdated']} "
                f"({data.get('totalRepositories', 'unknown')} repositories analyzed)"
            )
        return select_top_languages(stats, self.min_percent, self.max_skills)

    def _skill_nodes(self, page: PageDocument, styler: StyledTextRenderer, skill: LanguageStat) -> List[Tag]:
        display_percent = math.floor(skill.percent + 0.5)
        label = page.new_tag("label", class_name="progress-bar-label")
        styler.render_into(skill.name, label)

        bar = page.new_tag(
            "div",
            class_name="progress-bar six-sec-ease-in-out",
            attrs={
                "style": f"width: {display_percent}%;",
                "role": "progressbar",
                "aria-valuenow": str(display_percent),
                "aria-valuemin": "0",
                "aria-valuemax": "100",
            },
        )
        bar.append(page.new_tag("span", class_name="loading", text=f"{display_percent}%"))
        progress = page.new_tag("div", class_name="progress")
        progress.append(bar)
        return [label, progress]

    def render(self, page: PageDocument, skills: List[LanguageStat]) -> Optional[Tag]:
        """
        Renders `skills` into the skills container.

        Returns:
            Optional[Tag]: The container, or None when the page has none.
        """
        container = page.find_container(self.container_selector)
        if container is None:
            logger.warning(f"Skills container '{self.container_selector}' not found; skipping skills.")
            return None
        page.clear(container)
        if not skills:
            container.append(page.new_tag("div", class_name="no-skills-message",
                                          text="No programming language data found"))
            return container
        styler = StyledTextRenderer(page, self.name_rules)
        for skill in skills:
            for node in self._skill_nodes(page, styler, skill):
                container.append(node)
        return container

    def render_error(self, page: PageDocument, message: str) -> Optional[Tag]:
        container = page.find_container(self.container_selector)
        if container is None:
            return None
        page.clear(container)
        block = page.new_tag("div", class_name="error-message",
                             text="Unable to load programming language data from GitHub")
        block.append(page.new_tag("br"))
        block.append(page.new_tag("small", text=message))
        container.append(block)
        return container

    async def render_into_page(self, page: PageDocument, url: Optional[str] = None) -> bool:
        """
        Loads the statistics and renders them; a load failure renders the
        error block instead.

        Returns:
            bool: True if the skills were rendered.
        """
        if not self.enabled:
            logger.debug("Skills display disabled in configuration.")
            return False
        try:
            skills = await self.load(url)
        except SkillsError as e:
            logger.error(f"Error loading language data: {e.message}")
            self.render_error(page, "Please run the build script to generate language data.")
            return False
        return self.render(page, skills) is not None
