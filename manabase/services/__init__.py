"""
manabase services.

Configuration loading and manual category overrides.
"""

from manabase.services.config_loader import (
    CATEGORY_FILES,
    OVERRIDES_FILE,
    load_overrides,
    load_tag_sources,
    load_tags,
)
from manabase.services.overrides import CategoryOverrides, find_missing_cards, parse_overrides

__all__ = [
    "CATEGORY_FILES",
    "CategoryOverrides",
    "OVERRIDES_FILE",
    "find_missing_cards",
    "load_overrides",
    "load_tag_sources",
    "load_tags",
    "parse_overrides",
]
