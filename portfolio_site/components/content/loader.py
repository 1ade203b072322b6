"""
Loads the portfolio content document.

This module provides `fetch_json`, which retrieves a JSON payload from an
HTTP(S) URL (via aiohttp), a `file://` URL or a plain filesystem path, and
the `ContentLoader` class that turns that payload into a `ContentDocument`.
"""
import asyncio
import json
from typing import Any, Optional, TYPE_CHECKING
from urllib.parse import urlparse
from urllib.request import url2pathname

import aiohttp
from pydantic import ValidationError

from portfolio_site.components.content.models import ContentDocument, StylingRules
from portfolio_site.core.exceptions import LoadError
from portfolio_site.core.logger import get_logger

if TYPE_CHECKING:
    from portfolio_site.core.config import ConfigurationManager

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CONTENT_URL = "site/data/about-content.json"


def _read_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


async def _fetch_http(url: str, timeout: Optional[float]) -> str:
    client_timeout = aiohttp.ClientTimeout(total=timeout) if timeout else aiohttp.ClientTimeout()
    try:
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise LoadError(f"HTTP error! status: {response.status}", source=url)
                try:
                    return await response.text()
                except UnicodeDecodeError as e:
                    raise LoadError(f"Response from '{url}' could not be decoded", source=url, original_exception=e)
    except aiohttp.ClientError as e:
        raise LoadError(f"Request to '{url}' failed", source=url, original_exception=e)
    except asyncio.TimeoutError as e:
        raise LoadError(f"Request to '{url}' timed out after {timeout}s", source=url, original_exception=e)


async def fetch_json(url: str, timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """
    Fetches and decodes a JSON payload.

    Args:
        url (str): An http(s) URL, a file:// URL, or a filesystem path.
        timeout (Optional[float]): Total timeout in seconds for HTTP fetches.

    Returns:
        Any: The decoded JSON value.

    Raises:
        LoadError: If the fetch fails, returns a non-success status, or the
                   payload is not valid JSON.
    """
    if not url:
        raise LoadError("No URL given for JSON fetch.")

    parsed = urlparse(url)
    if parsed.scheme in ("http", "https"):
        raw = await _fetch_http(url, timeout)
    else:
        path = url2pathname(parsed.path) if parsed.scheme == "file" else url
        try:
            raw = await asyncio.to_thread(_read_file, path)
        except OSError as e:
            raise LoadError(f"Could not read '{path}'", source=url, original_exception=e)
        except UnicodeDecodeError as e:
            raise LoadError(f"'{path}' is not valid UTF-8", source=url, original_exception=e)

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise LoadError(f"Payload from '{url}' is not valid JSON", source=url, original_exception=e)


def parse_content_document(payload: Any, source: Optional[str] = None) -> ContentDocument:
    """
    Builds a `ContentDocument` from a decoded JSON payload.

    Only the top-level structure is checked here; sections are validated
    lazily by their renderers.

    Raises:
        LoadError: If `sections` or `styling` is missing or not an object, or
                   the styling rules are invalid.
    """
    if not isinstance(payload, dict):
        raise LoadError("Content document must be a JSON object.", source=source)
    for key in ("sections", "styling"):
        if key not in payload:
            raise LoadError(f"Content document is missing the '{key}' key.", source=source)
        if not isinstance(payload[key], dict):
            raise LoadError(f"Content document key '{key}' must be an object.", source=source)

    try:
        styling = StylingRules.model_validate(payload["styling"])
    except ValidationError as e:
        raise LoadError("Invalid styling rules in content document", source=source, original_exception=e)

    return ContentDocument(sections=dict(payload["sections"]), styling=styling, source=source)


class ContentLoader:
    """
    Fetches the content document once and parses it into a `ContentDocument`.
    """

    def __init__(self, config: Optional['ConfigurationManager'] = None):
        """
        Args:
            config (Optional[ConfigurationManager]): Supplies `content.url` and
                `content.timeout_seconds`. Defaults are used when None.
        """
        if config:
            self.default_url = config.get("content.url", DEFAULT_CONTENT_URL)
            self.timeout = float(config.get("content.timeout_seconds", DEFAULT_TIMEOUT_SECONDS))
        else:
            self.default_url = DEFAULT_CONTENT_URL
            self.timeout = DEFAULT_TIMEOUT_SECONDS
        logger.debug(f"ContentLoader configured with url={self.default_url}, timeout={self.timeout}s")

    async def load(self, url: Optional[str] = None) -> ContentDocument:
        """
        Loads the content document.

        Args:
            url (Optional[str]): Location of the document; the configured URL when None.

        Returns:
            ContentDocument: The parsed document.

        Raises:
            LoadError: On any fetch or structure failure.
        """
        target = url or self.default_url
        logger.info(f"Loading content document from {target}")
        payload = await fetch_json(target, timeout=self.timeout)
        document = parse_content_document(payload, source=target)
        logger.info(f"Content document loaded with sections: {sorted(document.sections)}")
        return document

    async def load_or_none(self, url: Optional[str] = None) -> Optional[ContentDocument]:
        """Like `load`, but logs the failure and returns None instead of raising."""
        try:
            return await self.load(url)
        except LoadError as e:
            logger.error(f"Failed to load content data: {e.message}")
            return None
