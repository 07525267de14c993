"""Identity token normalization and comparison."""

from orgchart_engine.identity.normalizer import (
    GuidCache,
    compare_guids,
    default_cache,
    is_valid_guid,
    normalize_guid,
)

__all__ = [
    "GuidCache",
    "compare_guids",
    "default_cache",
    "is_valid_guid",
    "normalize_guid",
]
