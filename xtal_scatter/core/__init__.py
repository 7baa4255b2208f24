"""Core building blocks: constants, element data, errors and the keyed cache."""

from xtal_scatter.core.cache import CachedHandle, CacheStats, KeyedObjectCache
from xtal_scatter.core.constants import (
    DEFAULT_CONSTANTS,
    DEFAULT_TEMPERATURE_K,
    DEUTERIUM_Z,
    NeutronConstants,
)
from xtal_scatter.core.elements import ElementData, find_element, get_element, is_valid_z
from xtal_scatter.core.errors import BadInput, InvalidInput, MissingInfo, XtalScatterError

__all__ = [
    # Cache
    "KeyedObjectCache",
    "CachedHandle",
    "CacheStats",
    # Constants
    "NeutronConstants",
    "DEFAULT_CONSTANTS",
    "DEFAULT_TEMPERATURE_K",
    "DEUTERIUM_Z",
    # Elements
    "ElementData",
    "get_element",
    "find_element",
    "is_valid_z",
    # Errors
    "XtalScatterError",
    "BadInput",
    "MissingInfo",
    "InvalidInput",
]
