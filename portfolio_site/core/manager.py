"""
Site manager: orchestrates one page build.

The manager loads the content document once, then hands it to every section
renderer. Its load state moves IDLE -> LOADING -> READY or FAILED and never
goes back; a failed load means no section is rendered.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from portfolio_site.components.content.loader import ContentLoader
from portfolio_site.components.content.models import ContentDocument
from portfolio_site.components.mapping.map_key import MapKeyResolution, MapKeyResolver
from portfolio_site.components.renderer.page import PageDocument
from portfolio_site.components.renderer.sections import SectionRenderer, default_section_renderers
from portfolio_site.components.skills.language_skills import LanguageSkillsRenderer
from portfolio_site.core.exceptions import LoadError, OrchestrationError, SectionError
from portfolio_site.core.logger import get_logger

if TYPE_CHECKING:
    from portfolio_site.core.config import ConfigurationManager

logger = get_logger(__name__)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class RenderReport:
    """
    Outcome of a run.

    Attributes:
        state (LoadState): Final load state.
        rendered (List[str]): Section keys rendered successfully.
        skipped (Dict[str, str]): Section keys skipped, with the reason.
        error (Optional[str]): The load failure message when state is FAILED.
        skills_rendered (bool): Whether the language skills were rendered.
        map_key (Optional[MapKeyResolution]): The map-key resolution of the build.
    """
    state: LoadState
    rendered: List[str] = field(default_factory=list)
    skipped: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None
    skills_rendered: bool = False
    map_key: Optional[MapKeyResolution] = None

    @property
    def ok(self) -> bool:
        return self.state == LoadState.READY


class SiteManager:
    """
    Orchestrates a page build by coordinating the content loader, the section
    renderers, the skills display and the map-key resolver.
    """
    def __init__(self, config: Optional['ConfigurationManager'] = None,
                 loader: Optional[ContentLoader] = None,
                 section_renderers: Optional[Sequence[SectionRenderer]] = None,
                 skills_renderer: Optional[LanguageSkillsRenderer] = None,
                 map_key_resolver: Optional[MapKeyResolver] = None):
        """
        Args:
            config (Optional[ConfigurationManager]): Configuration passed on to the
                components that are not given explicitly.
            loader, section_renderers, skills_renderer, map_key_resolver: Optional
                replacements for the default components.
        """
        self.config = config
        self.loader = loader or ContentLoader(config=config)
        self.section_renderers: List[SectionRenderer] = list(
            section_renderers if section_renderers is not None else default_section_renderers(config)
        )
        self.skills_renderer = skills_renderer or LanguageSkillsRenderer(config=config)
        self.map_key_resolver = map_key_resolver or MapKeyResolver(config=config)
        self._state = LoadState.IDLE
        self._document: Optional[ContentDocument] = None
        self._load_error: Optional[str] = None
        logger.debug(f"SiteManager initialized with {len(self.section_renderers)} section renderers.")

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def document(self) -> Optional[ContentDocument]:
        return self._document

    async def load_content(self, url: Optional[str] = None) -> Optional[ContentDocument]:
        """
        Loads the content document. Allowed once per manager.

        Returns:
            Optional[ContentDocument]: The document, or None if the load failed
                                       (state FAILED).

        Raises:
            OrchestrationError: If called when the manager is not IDLE.
        """
        if self._state != LoadState.IDLE:
            raise OrchestrationError(f"Content can only be loaded once (current state: {self._state.value}).")

        logger.info("Content Manager: Initializing...")
        self._state = LoadState.LOADING
        try:
            self._document = await self.loader.load(url)
        except LoadError as e:
            self._state = LoadState.FAILED
            self._load_error = e.message
            logger.error(f"Failed to load content data: {e.message}")
            return None

        self._state = LoadState.READY
        logger.info("Data loaded, ready to render sections.")
        return self._document

    def render_sections(self, page: PageDocument) -> RenderReport:
        """
        Runs every section renderer against `page`.

        A `SectionError` in one renderer is logged and recorded in the report;
        the remaining renderers still run.

        Raises:
            OrchestrationError: If the content is not loaded yet.
        """
        if self._state == LoadState.FAILED:
            logger.warning("Content load failed; no sections rendered.")
            return RenderReport(state=self._state, error=self._load_error)
        if self._state != LoadState.READY or self._document is None:
            raise OrchestrationError(f"Cannot render before content is loaded (current state: {self._state.value}).")

        report = RenderReport(state=self._state)
        for renderer in self.section_renderers:
            try:
                renderer.render(self._document, page)
                report.rendered.append(renderer.name)
            except SectionError as e:
                logger.error(f"Skipping {renderer.name} section: {e.message}")
                report.skipped[renderer.name] = e.message

        logger.info(
            f"Sections rendered: {len(report.rendered)}/{len(self.section_renderers)}"
            + (f" (skipped: {', '.join(report.skipped)})" if report.skipped else "")
        )
        return report

    async def run(self, page: PageDocument, url: Optional[str] = None) -> RenderReport:
        """Loads the content document and renders all sections into `page`."""
        await self.load_content(url)
        return self.render_sections(page)

    async def build_page(self, html: str, url: Optional[str] = None,
                         skills_url: Optional[str] = None) -> Tuple[str, RenderReport]:
        """
        Builds the full page from its template.

        The content sections, the language skills and the map key are
        independent: a failed content load does not stop the other two.

        Args:
            html (str): The page template.
            url (Optional[str]): Content document location; configured default when None.
            skills_url (Optional[str]): Language data location; configured default when None.

        Returns:
            Tuple[str, RenderReport]: The built page and the run report.
        """
        page = PageDocument(html)
        report = await self.run(page, url)

        report.skills_rendered = await self.skills_renderer.render_into_page(page, skills_url)

        resolution = self.map_key_resolver.resolve(page)
        self.map_key_resolver.apply_to_page(page, resolution)
        report.map_key = resolution

        if report.ok:
            logger.info("All sections rendered successfully" if not report.skipped else "Page built with skipped sections")
        return page.to_html(), report
