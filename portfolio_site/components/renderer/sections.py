"""
Section renderers.

One renderer per section kind. Every renderer follows the same steps:
look up its data in the content document, resolve its mount point(s) in the
page, validate the data, clear the mount point(s) and append freshly built
nodes. Failures raise `SectionError` subclasses so the caller can skip the
section and carry on with the others.
"""
import math
import re
from typing import Any, List, Optional, Sequence, Tuple, TYPE_CHECKING

from bs4 import Tag
from pydantic import TypeAdapter, ValidationError

from portfolio_site.components.content.models import (
    ContentDocument,
    EducationEntry,
    PersonalInfo,
    ProjectEntry,
    SectionKind,
    WhoAmISection,
)
from portfolio_site.components.renderer.page import PageDocument
from portfolio_site.components.renderer.styled_text import StyledTextRenderer
from portfolio_site.core.exceptions import InvalidSectionDataError, MissingContainerError, MissingDataError
from portfolio_site.core.logger import get_logger

if TYPE_CHECKING:
    from portfolio_site.core.config import ConfigurationManager

logger = get_logger(__name__)

EXTERNAL_LINK_REL = "noopener noreferrer"
INSTITUTION_SEPARATOR = " & "
ENTRY_CLASS = "exp animated fadeInUp"
_PHONE_STRIP_RE = re.compile(r"[\s.-]")

SelectorGroup = Tuple[str, ...]


def split_columns(items: Sequence[Any]) -> Tuple[List[Any], List[Any]]:
    """Splits items in two; the left column gets the ceiling half."""
    mid_point = math.ceil(len(items) / 2)
    return list(items[:mid_point]), list(items[mid_point:])


def phone_link_target(phone: str) -> str:
    """`tel:` href for a displayed phone number, without whitespace, dots and dashes."""
    return f"tel:{_PHONE_STRIP_RE.sub('', phone)}"


def split_institution(institution: str) -> Optional[Tuple[str, str]]:
    """Returns the two institution names joined by " & ", or None if it does not split in exactly two."""
    parts = institution.split(INSTITUTION_SEPARATOR)
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


class SectionRenderer:
    """
    Base class of the section renderers.

    Subclasses set `kind` and `default_containers`, and implement `parse`
    and `populate`.

    Attributes:
        containers (Tuple[SelectorGroup, ...]): One selector group per mount
            point; selectors inside a group are fallbacks tried in order.
    """
    kind: SectionKind
    default_containers: Tuple[SelectorGroup, ...] = ()

    def __init__(self, containers: Optional[Sequence[SelectorGroup]] = None):
        self.containers: Tuple[SelectorGroup, ...] = tuple(
            tuple(group) for group in (containers or self.default_containers)
        )

    @classmethod
    def containers_from_config(cls, value: Sequence[str]) -> Tuple[SelectorGroup, ...]:
        """Maps a configured selector list to selector groups (one mount point with fallbacks)."""
        return (tuple(value),)

    @property
    def name(self) -> str:
        return self.kind.value

    def resolve_containers(self, page: PageDocument) -> List[Tag]:
        found: List[Tag] = []
        for group in self.containers:
            container = page.find_container(*group)
            if container is None:
                raise MissingContainerError(self.name, group)
            found.append(container)
        return found

    def parse(self, data: Any) -> Any:
        raise NotImplementedError

    def populate(self, model: Any, containers: List[Tag], page: PageDocument, styler: StyledTextRenderer) -> None:
        raise NotImplementedError

    def render(self, document: ContentDocument, page: PageDocument) -> None:
        """
        Renders this section of `document` into `page`.

        Raises:
            MissingDataError: If the document has no data for this section.
            MissingContainerError: If a mount point is absent from the page.
            InvalidSectionDataError: If the section data has the wrong shape.
        """
        logger.debug(f"Rendering {self.name} section...")
        data = document.section(self.kind)
        if data is None:
            raise MissingDataError(self.name)

        containers = self.resolve_containers(page)

        try:
            model = self.parse(data)
        except ValidationError as e:
            raise InvalidSectionDataError(self.name, f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}")

        for container in containers:
            page.clear(container)
        self.populate(model, containers, page, StyledTextRenderer(page, document.styling))
        logger.info(f"{self.name} section rendered successfully")

    # --- shared builders ---

    @staticmethod
    def external_link(page: PageDocument, href: str, text: str) -> Tag:
        """A link opening in a new tab without referrer."""
        return page.new_tag("a", text=text, attrs={"href": href, "target": "_blank", "rel": EXTERNAL_LINK_REL})

    def entry_header(self, page: PageDocument) -> Tuple[Tag, Tag]:
        """Creates the `div.exp > div.hgroup` frame of an entry."""
        entry = page.new_tag("div", class_name=ENTRY_CLASS)
        hgroup = page.new_tag("div", class_name="hgroup")
        entry.append(hgroup)
        return entry, hgroup

    @staticmethod
    def details_list(page: PageDocument, styler: StyledTextRenderer, details: Sequence[str]) -> Tag:
        ul = page.new_tag("ul")
        for detail in details:
            li = page.new_tag("li")
            styler.render_into(detail, li)
            ul.append(li)
        return ul

    @staticmethod
    def period_heading(page: PageDocument, styler: StyledTextRenderer, period: str) -> Tag:
        h5 = page.new_tag("h5")
        h5.append(styler.inline_block(period))
        return h5


class WhoAmIRenderer(SectionRenderer):
    """One inline block per line, lines separated by `<br>`."""
    kind = SectionKind.WHO_AM_I
    default_containers = (("#who-am-i-content", ".col-md-7.animated.fadeInUp"),)

    def parse(self, data: Any) -> WhoAmISection:
        # A bare list of lines is accepted as well as {"content": [...]}.
        if isinstance(data, list):
            data = {"content": data}
        return WhoAmISection.model_validate(data)

    def populate(self, model: WhoAmISection, containers: List[Tag], page: PageDocument, styler: StyledTextRenderer) -> None:
        container = containers[0]
        for index, line in enumerate(model.content):
            container.append(styler.inline_block(line))
            if index < len(model.content) - 1:
                container.append(page.new_tag("br"))


class PersonalInfoRenderer(SectionRenderer):
    kind = SectionKind.PERSONAL_INFO
    default_containers = (("#personal-info-content", ".info-list"),)

    def parse(self, data: Any) -> PersonalInfo:
        return PersonalInfo.model_validate(data)

    @staticmethod
    def _labelled_item(page: PageDocument, label: str) -> Tag:
        li = page.new_tag("li")
        li.append(page.new_tag("strong", text=f"{label} : "))
        return li

    def populate(self, model: PersonalInfo, containers: List[Tag], page: PageDocument, styler: StyledTextRenderer) -> None:
        container = containers[0]
        for label, value in (
            ("Legal Name", model.legal_name),
            ("Preferred Name", model.preferred_name),
            ("Date of birth", model.date_of_birth),
        ):
            if value is None:
                continue
            li = self._labelled_item(page, label)
            li.append(page.new_text(value))
            container.append(li)

        if model.email is not None:
            li = self._labelled_item(page, "Email")
            li.append(page.new_tag("a", text=model.email, attrs={"href": f"mailto:{model.email}"}))
            container.append(li)

        if model.phones:
            li = self._labelled_item(page, "Phone")
            for index, phone in enumerate(model.phones):
                link = page.new_tag("a", attrs={"href": phone_link_target(phone)})
                link.append(styler.inline_block(phone))
                li.append(link)
                if index < len(model.phones) - 1:
                    li.append(styler.separator("/"))
            container.append(li)


class KnowHowRenderer(SectionRenderer):
    """Two plain lists; the left one gets the ceiling half."""
    kind = SectionKind.KNOW_HOW
    default_containers = (("#knowhow-left",), ("#knowhow-right",))

    _adapter = TypeAdapter(List[str])

    @classmethod
    def containers_from_config(cls, value: Sequence[str]) -> Tuple[SelectorGroup, ...]:
        # [left, right]
        return tuple((selector,) for selector in value)

    def parse(self, data: Any) -> List[str]:
        return self._adapter.validate_python(data)

    def populate(self, model: List[str], containers: List[Tag], page: PageDocument, styler: StyledTextRenderer) -> None:
        for container, column in zip(containers, split_columns(model)):
            for item in column:
                container.append(page.new_tag("li", text=item))


class ShowcaseRenderer(SectionRenderer):
    kind = SectionKind.SHOWCASE
    default_containers = (("#showcase-content",),)

    _adapter = TypeAdapter(List[ProjectEntry])

    def parse(self, data: Any) -> List[ProjectEntry]:
        return self._adapter.validate_python(data)

    def populate(self, model: List[ProjectEntry], containers: List[Tag], page: PageDocument, styler: StyledTextRenderer) -> None:
        container = containers[0]
        for project in model:
            entry, hgroup = self.entry_header(page)
            h4 = page.new_tag("h4")
            if project.url:
                h4.append(self.external_link(page, project.url, project.title))
            else:
                h4.append(page.new_text(project.title))
            if project.description:
                h4.append(styler.separator(":"))
                h4.append(page.new_text(f" {project.description}"))
            hgroup.append(h4)
            entry.append(self.details_list(page, styler, project.details))
            container.append(entry)


class ExperienceRenderer(SectionRenderer):
    kind = SectionKind.EXPERIENCE
    default_containers = (("#experience-content",),)

    _adapter = TypeAdapter(List[ProjectEntry])

    def parse(self, data: Any) -> List[ProjectEntry]:
        return self._adapter.validate_python(data)

    def populate(self, model: List[ProjectEntry], containers: List[Tag], page: PageDocument, styler: StyledTextRenderer) -> None:
        container = containers[0]
        for experience in model:
            entry, hgroup = self.entry_header(page)
            hgroup.append(page.new_tag("h4", text=experience.title))
            if experience.period is not None:
                hgroup.append(self.period_heading(page, styler, experience.period))
            entry.append(self.details_list(page, styler, experience.details))
            container.append(entry)


class EducationRenderer(SectionRenderer):
    kind = SectionKind.EDUCATION
    default_containers = (("#education-content",),)

    _adapter = TypeAdapter(List[EducationEntry])

    def parse(self, data: Any) -> List[EducationEntry]:
        return self._adapter.validate_python(data)

    def _institution_node(self, page: PageDocument, href: Optional[str], text: str):
        if href:
            return self.external_link(page, href, text)
        return page.new_text(text)

    def populate(self, model: List[EducationEntry], containers: List[Tag], page: PageDocument, styler: StyledTextRenderer) -> None:
        container = containers[0]
        for education in model:
            entry, hgroup = self.entry_header(page)
            h4 = page.new_tag("h4", text=f"{education.degree} ")
            h4.append(styler.separator("–"))
            h4.append(page.new_text(" "))

            names = split_institution(education.institution) if education.institution_url2 else None
            if names:
                h4.append(self._institution_node(page, education.institution_url, names[0]))
                h4.append(page.new_text(" "))
                h4.append(styler.separator("&"))
                h4.append(page.new_text(" "))
                h4.append(self._institution_node(page, education.institution_url2, names[1]))
            else:
                if education.institution_url2:
                    logger.warning(
                        f"Institution '{education.institution}' has a second URL but does not split "
                        f"on '{INSTITUTION_SEPARATOR}' into two names; linking it as a whole."
                    )
                h4.append(self._institution_node(page, education.institution_url, education.institution))

            hgroup.append(h4)
            if education.period is not None:
                hgroup.append(self.period_heading(page, styler, education.period))
            if education.details:
                entry.append(self.details_list(page, styler, education.details))
            container.append(entry)


SECTION_RENDERER_CLASSES = (
    WhoAmIRenderer,
    PersonalInfoRenderer,
    KnowHowRenderer,
    ShowcaseRenderer,
    ExperienceRenderer,
    EducationRenderer,
)


def default_section_renderers(config: Optional['ConfigurationManager'] = None) -> List[SectionRenderer]:
    """
    Instantiates one renderer per section kind.

    Mount points can be overridden with `components.renderer.containers.<sectionKey>`,
    a list of selectors (for knowHow: [left, right]).
    """
    renderers: List[SectionRenderer] = []
    for renderer_cls in SECTION_RENDERER_CLASSES:
        configured = config.get(f"components.renderer.containers.{renderer_cls.kind.value}") if config else None
        if configured:
            renderers.append(renderer_cls(containers=renderer_cls.containers_from_config(configured)))
        else:
            renderers.append(renderer_cls())
    return renderers
