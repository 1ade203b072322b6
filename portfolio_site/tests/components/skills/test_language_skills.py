import json
from unittest.mock import MagicMock

import pytest

from portfolio_site.components.renderer.page import PageDocument
from portfolio_site.components.skills.language_skills import (
    LanguageSkillsRenderer,
    LanguageStat,
    aggregate_language_bytes,
    calculate_language_percentages,
    format_language_name,
    parse_language_data,
    select_top_languages,
)
from portfolio_site.core.exceptions import SkillsError

LANGUAGE_DATA = {
    "lastUpdated": "2026-10-01T00:00:00.000Z",
    "totalRepositories": 3,
    "languages": [
        {"name": "Python", "percent": 60.5, "bytes": 605},
        {"name": "HTML", "percent": 10.0, "bytes": 100},
        {"name": "CSS", "percent": 5.0, "bytes": 50},
        {"name": "C#", "percent": 20.0, "bytes": 200},
        {"name": "Dockerfile", "percent": 0.5, "bytes": 5},
    ],
}


@pytest.fixture
def skills_file(tmp_path):
    path = tmp_path / "github-languages.json"
    path.write_text(json.dumps(LANGUAGE_DATA), encoding="utf-8")
    return path


@pytest.mark.parametrize("language, display", [
    ("HTML", "HTML&CSS"),
    ("CSS", "HTML&CSS"),
    ("Shell", "Shell Scripts"),
    ("Dockerfile", "Docker"),
    ("Rust", "Rust"),
])
def test_format_language_name(language, display):
    assert format_language_name(language) == display


def test_percentages_from_bytes():
    stats = calculate_language_percentages({"Python": 300, "Go": 100})
    assert [(s.name, s.percent, s.bytes) for s in stats] == [("Python", 75.0, 300), ("Go", 25.0, 100)]
    assert calculate_language_percentages({}) == []
    assert calculate_language_percentages({"Python": 0}) == []


def test_aggregate_language_bytes():
    totals = aggregate_language_bytes({
        "repo-a": {"Python": 100, "Shell": 10},
        "repo-b": {"Python": 50},
    })
    assert totals == {"Python": 150, "Shell": 10}


def test_select_top_languages_merges_filters_sorts_and_limits():
    stats = parse_language_data(LANGUAGE_DATA)
    top = select_top_languages(stats, min_percent=1.0, max_skills=2)
    assert [(s.name, s.percent) for s in top] == [("Python", 60.5), ("C#", 20.0)]

    everything = select_top_languages(stats, min_percent=1.0, max_skills=10)
    assert [s.name for s in everything] == ["Python", "C#", "HTML&CSS"]
    assert everything[2].percent == 15.0
    assert everything[2].bytes == 150


def test_parse_language_data_by_repo():
    stats = parse_language_data({"languagesByRepo": {"a": {"Python": 3}, "b": {"Go": 1}}})
    assert {s.name: s.percent for s in stats} == {"Python": 75.0, "Go": 25.0}


@pytest.mark.parametrize("data", [
    [],
    {},
    {"languages": "Python"},
    {"languages": [{"name": "Python"}]},
])
def test_parse_language_data_rejects_bad_shapes(data):
    with pytest.raises(SkillsError):
        parse_language_data(data)


def test_renderer_reads_config():
    settings = {
        "components.skills.container": "#skills",
        "components.skills.max_skills": 3,
        "components.skills.highlight_characters": "#",
        "components.skills.highlight_class": "accent",
    }
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: settings.get(key, default)

    renderer = LanguageSkillsRenderer(config=config)
    assert renderer.container_selector == "#skills"
    assert renderer.max_skills == 3
    assert renderer.name_rules.punctuation_rule.character_set == frozenset("#")
    assert renderer.name_rules.separator_class == "accent"


def test_render_progress_bars(page):
    renderer = LanguageSkillsRenderer()
    container = renderer.render(page, [LanguageStat(name="C#", percent=20.5), LanguageStat(name="Go", percent=7.4)])

    labels = container.find_all("label", recursive=False)
    assert [label.get_text() for label in labels] == ["C#", "Go"]
    assert labels[0]["class"] == ["progress-bar-label"]
    assert labels[0].find("span", class_="punctuation-highlight").get_text() == "#"
    assert labels[1].find("span") is None

    bars = container.select("div.progress > div.progress-bar")
    assert [bar["style"] for bar in bars] == ["width: 21%;", "width: 7%;"]
    assert bars[0]["aria-valuenow"] == "21"
    assert bars[0]["role"] == "progressbar"
    assert "six-sec-ease-in-out" in bars[0]["class"]
    assert bars[0].find("span", class_="loading").get_text() == "21%"


def test_render_without_skills_shows_message(page):
    container = LanguageSkillsRenderer().render(page, [])
    message = container.find("div", class_="no-skills-message")
    assert message.get_text() == "No programming language data found"


def test_render_without_container_returns_none():
    page = PageDocument("<div></div>")
    assert LanguageSkillsRenderer().render(page, [LanguageStat(name="Go", percent=50)]) is None


def test_render_error(page):
    container = LanguageSkillsRenderer().render_error(page, "Try again later.")
    block = container.find("div", class_="error-message")
    assert block.get_text().startswith("Unable to load programming language data from GitHub")
    assert block.br is not None
    assert block.small.get_text() == "Try again later."


@pytest.mark.asyncio
async def test_load_selects_top_languages(skills_file):
    skills = await LanguageSkillsRenderer().load(str(skills_file))
    assert [s.name for s in skills] == ["Python", "C#", "HTML&CSS"]


@pytest.mark.asyncio
async def test_load_missing_file_raises(tmp_path):
    with pytest.raises(SkillsError):
        await LanguageSkillsRenderer().load(str(tmp_path / "absent.json"))


@pytest.mark.asyncio
async def test_render_into_page(page, skills_file):
    assert await LanguageSkillsRenderer().render_into_page(page, str(skills_file)) is True
    assert len(page.find_container("#technical-skills").find_all("label")) == 3


@pytest.mark.asyncio
async def test_render_into_page_failure_renders_error(page, tmp_path):
    rendered = await LanguageSkillsRenderer().render_into_page(page, str(tmp_path / "absent.json"))
    assert rendered is False
    assert page.find_container("#technical-skills").find("div", class_="error-message") is not None


@pytest.mark.asyncio
async def test_render_into_page_disabled(page, skills_file):
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: False if key == "components.skills.enabled" else default
    renderer = LanguageSkillsRenderer(config=config)
    assert await renderer.render_into_page(page, str(skills_file)) is False
    assert page.find_container("#technical-skills").contents == []
