from unittest.mock import MagicMock

import pytest

from portfolio_site.components.mapping.map_key import (
    DEV_KEY_ENV,
    SUBSCRIPTION_KEY_ENV,
    MapKeyResolution,
    MapKeyResolver,
    is_usable_key,
    mask_key,
    resolve_map_key,
)
from portfolio_site.components.renderer.page import PageDocument
from portfolio_site.core.exceptions import MapKeyUnavailableError

REAL_KEY = "abcdefgh1234567890wxyz"


def make_config(**settings):
    values = {f"components.map.{key}": value for key, value in settings.items()}
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: values.get(key, default)
    return config


@pytest.mark.parametrize("value, usable", [
    (None, False),
    ("", False),
    ("   ", False),
    ("undefined", False),
    ("${AZURE_MAPS_SUBSCRIPTION_KEY}", False),
    ("abc", True),
    ("  abc  ", True),
])
def test_is_usable_key(value, usable):
    assert is_usable_key(value) is usable


def test_mask_key():
    assert mask_key(REAL_KEY) == "abcdefgh...wxyz"
    assert mask_key("short") == "*****"


def test_resolve_map_key_first_usable_wins():
    calls = []

    def provider(name, value):
        def provide():
            calls.append(name)
            return value
        return name, provide

    resolution = resolve_map_key([provider("a", None), provider("b", " key-b "), provider("c", "key-c")])
    assert resolution == MapKeyResolution("key-b", "b")
    assert resolution.available
    assert calls == ["a", "b"]


def test_resolve_map_key_nothing_available():
    resolution = resolve_map_key([("a", lambda: "undefined")])
    assert resolution == MapKeyResolution(None, None)
    assert not resolution.available


def test_env_var_beats_page_attribute():
    page = PageDocument('<div id="map" data-azure-maps-key="from-page"></div>')
    resolver = MapKeyResolver(environ={SUBSCRIPTION_KEY_ENV: REAL_KEY})
    assert resolver.resolve(page) == MapKeyResolution(REAL_KEY, "runtime config")


def test_configured_key_used_when_env_var_missing():
    resolver = MapKeyResolver(config=make_config(subscription_key="configured"), environ={})
    assert resolver.resolve() == MapKeyResolution("configured", "runtime config")


def test_placeholder_env_var_falls_through_to_page_attribute():
    page = PageDocument('<div id="map" data-azure-maps-key="from-page"></div>')
    resolver = MapKeyResolver(environ={SUBSCRIPTION_KEY_ENV: "${AZURE_MAPS_SUBSCRIPTION_KEY}"})
    assert resolver.resolve(page) == MapKeyResolution("from-page", "page attribute")


def test_dev_key_only_in_local_development():
    environ = {DEV_KEY_ENV: "dev-key"}
    assert not MapKeyResolver(environ=environ).resolve().available

    resolver = MapKeyResolver(config=make_config(local_development=True), environ=environ)
    assert resolver.resolve() == MapKeyResolution("dev-key", "local development key")


def test_require_key_raises_when_unavailable():
    with pytest.raises(MapKeyUnavailableError) as excinfo:
        MapKeyResolver(environ={}).require_key()
    assert SUBSCRIPTION_KEY_ENV in excinfo.value.message


def test_apply_to_page_stamps_attribute():
    page = PageDocument('<div id="map"></div>')
    resolver = MapKeyResolver(environ={SUBSCRIPTION_KEY_ENV: REAL_KEY})
    assert resolver.apply_to_page(page, resolver.resolve(page)) is True
    assert page.find_container("#map")["data-azure-maps-key"] == REAL_KEY


def test_apply_to_page_without_key_or_element():
    resolver = MapKeyResolver(environ={})
    page = PageDocument('<div id="map"></div>')
    assert resolver.apply_to_page(page, MapKeyResolution(None, None)) is False
    assert page.find_container("#map").get("data-azure-maps-key") is None

    no_map = PageDocument("<div></div>")
    assert resolver.apply_to_page(no_map, MapKeyResolution("key", "runtime config")) is False


def test_custom_attribute_and_element():
    page = PageDocument('<section class="map" data-maps-key="attr-key"></section>')
    resolver = MapKeyResolver(config=make_config(attribute="data-maps-key", element=".map"), environ={})
    resolution = resolver.resolve(page)
    assert resolution == MapKeyResolution("attr-key", "page attribute")
    assert resolver.apply_to_page(page, resolution)


@pytest.mark.parametrize("value", [1234567890123, 12.5, ["key"]])
def test_non_string_values_are_unusable(value):
    assert is_usable_key(value) is False


def test_numeric_configured_key_is_used_as_text():
    """An unquoted numeric key in YAML arrives as an int."""
    resolver = MapKeyResolver(config=make_config(subscription_key=1234567890123), environ={})
    assert resolver.resolve() == MapKeyResolution("1234567890123", "runtime config")


def test_page_attribute_skips_placeholder_elements():
    page = PageDocument(
        '<meta data-azure-maps-key="${AZURE_MAPS_SUBSCRIPTION_KEY}">'
        '<div id="map" data-azure-maps-key="usable-page-key"></div>'
    )
    resolver = MapKeyResolver(environ={})
    assert resolver.resolve(page) == MapKeyResolution("usable-page-key", "page attribute")


def test_page_attribute_with_only_placeholders_is_unavailable():
    page = PageDocument('<div id="map" data-azure-maps-key="undefined"></div>')
    assert not MapKeyResolver(environ={}).resolve(page).available
