"""
Mapping component: resolution of the map widget's subscription key.
"""
from .map_key import MapKeyResolution, MapKeyResolver, is_usable_key, mask_key, resolve_map_key

__all__ = [
    "MapKeyResolution",
    "MapKeyResolver",
    "is_usable_key",
    "mask_key",
    "resolve_map_key",
]
