"""
Map subscription-key resolution.

The key is looked up through an ordered list of providers; the first one
returning a usable value wins. The result is an explicit `MapKeyResolution`
value that the caller keeps, so nothing here holds global state.

Default chain:
1. runtime config (AZURE_MAPS_SUBSCRIPTION_KEY env var, then `components.map.subscription_key`)
2. the `data-azure-maps-key` attribute already present in the page template
3. the local development key (AZURE_MAPS_DEV_KEY), only when local development is enabled
"""
import os
from typing import Callable, List, Mapping, NamedTuple, Optional, Sequence, Tuple, TYPE_CHECKING

from portfolio_site.components.renderer.page import PageDocument
from portfolio_site.core.exceptions import MapKeyUnavailableError
from portfolio_site.core.logger import get_logger

if TYPE_CHECKING:
    from portfolio_site.core.config import ConfigurationManager

logger = get_logger(__name__)

SUBSCRIPTION_KEY_ENV = "AZURE_MAPS_SUBSCRIPTION_KEY"
DEV_KEY_ENV = "AZURE_MAPS_DEV_KEY"
DEFAULT_KEY_ATTRIBUTE = "data-azure-maps-key"
DEFAULT_MAP_ELEMENT = "#map"
PLACEHOLDER_PREFIX = "${"

KeyProvider = Callable[[], Optional[str]]


def is_usable_key(value: Optional[str]) -> bool:
    """False for non-strings, empty values, the literal 'undefined' and un-substituted ${...} placeholders."""
    if not isinstance(value, str):
        return False
    stripped = value.strip()
    return bool(stripped) and stripped != "undefined" and not stripped.startswith(PLACEHOLDER_PREFIX)


def mask_key(key: str) -> str:
    """Log-safe preview of a key: first 8 and last 4 characters."""
    if len(key) <= 12:
        return "*" * len(key)
    return f"{key[:8]}...{key[-4:]}"


class MapKeyResolution(NamedTuple):
    key: Optional[str]
    source: Optional[str]

    @property
    def available(self) -> bool:
        return self.key is not None


def resolve_map_key(providers: Sequence[Tuple[str, KeyProvider]]) -> MapKeyResolution:
    """
    Tries each named provider in order.

    Returns:
        MapKeyResolution: The first usable key and the provider's name, or
                          (None, None) when none of them yields one.
    """
    for source, provider in providers:
        value = provider()
        if is_usable_key(value):
            logger.info(f"Using map key from {source}")
            return MapKeyResolution(value.strip(), source)
        logger.debug(f"No usable map key from {source}")
    return MapKeyResolution(None, None)


def env_config_provider(environ: Mapping[str, str], configured: Optional[str] = None) -> KeyProvider:
    def provide() -> Optional[str]:
        value = environ.get(SUBSCRIPTION_KEY_ENV)
        if is_usable_key(value):
            return value
        return configured
    return provide


def page_attribute_provider(page: Optional[PageDocument], attribute: str = DEFAULT_KEY_ATTRIBUTE) -> KeyProvider:
    def provide() -> Optional[str]:
        if page is None:
            return None
        values = [element.get(attribute) for element in page.soup.find_all(attrs={attribute: True})]
        # First usable value across every element carrying the attribute.
        for value in values:
            if is_usable_key(value):
                return value
        return values[0] if values else None
    return provide


def dev_key_provider(environ: Mapping[str, str], local_development: bool) -> KeyProvider:
    def provide() -> Optional[str]:
        if not local_development:
            return None
        value = environ.get(DEV_KEY_ENV)
        if not is_usable_key(value):
            logger.warning(f"Local development: set {DEV_KEY_ENV} to provide a map key.")
        return value
    return provide


class MapKeyResolver:
    """
    Builds the default provider chain from configuration and resolves the key.
    """

    def __init__(self, config: Optional['ConfigurationManager'] = None, environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            config (Optional[ConfigurationManager]): Supplies `components.map.*` settings.
            environ (Optional[Mapping[str, str]]): Environment variables; `os.environ` when None.
        """
        self.environ = os.environ if environ is None else environ
        if config:
            configured_key = config.get("components.map.subscription_key")
            # YAML reads an unquoted numeric key as an int.
            self.configured_key = str(configured_key) if configured_key is not None else None
            self.attribute = config.get("components.map.attribute", DEFAULT_KEY_ATTRIBUTE)
            self.element_selector = config.get("components.map.element", DEFAULT_MAP_ELEMENT)
            self.local_development = bool(config.get("components.map.local_development", False))
        else:
            self.configured_key = None
            self.attribute = DEFAULT_KEY_ATTRIBUTE
            self.element_selector = DEFAULT_MAP_ELEMENT
            self.local_development = False

    def providers(self, page: Optional[PageDocument] = None) -> List[Tuple[str, KeyProvider]]:
        return [
            ("runtime config", env_config_provider(self.environ, self.configured_key)),
            ("page attribute", page_attribute_provider(page, self.attribute)),
            ("local development key", dev_key_provider(self.environ, self.local_development)),
        ]

    def resolve(self, page: Optional[PageDocument] = None) -> MapKeyResolution:
        resolution = resolve_map_key(self.providers(page))
        if resolution.available:
            logger.info(f"Map key resolved from {resolution.source}: {mask_key(resolution.key)}")
        else:
            logger.warning("Map subscription key not found; the map widget will not load.")
        return resolution

    def require_key(self, page: Optional[PageDocument] = None) -> MapKeyResolution:
        """
        Like `resolve`, but raises when no key is available.

        Raises:
            MapKeyUnavailableError: If every provider came back empty.
        """
        resolution = self.resolve(page)
        if not resolution.available:
            raise MapKeyUnavailableError(
                f"Map subscription key not found. Set {SUBSCRIPTION_KEY_ENV}, add a "
                f"'{self.attribute}' attribute to the page, or set {DEV_KEY_ENV} for local development."
            )
        return resolution

    def apply_to_page(self, page: PageDocument, resolution: MapKeyResolution) -> bool:
        """
        Stamps the resolved key on the map element so the page script finds it.

        Returns:
            bool: True if the attribute was written.
        """
        if not resolution.available:
            return False
        element = page.find_container(self.element_selector)
        if element is None:
            logger.warning(f"Map element '{self.element_selector}' not found; key not embedded.")
            return False
        element[self.attribute] = resolution.key
        return True
