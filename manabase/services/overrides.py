"""
Manual category overrides.

A curated mapping from card name to category names. Overrides only ever
add categories; they never remove one a rule or type-line filter assigned.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from manabase.models.card import Card
from manabase.models.failure import FailureKind, OverrideConfigError
from manabase.models.tag import Category

logger = logging.getLogger(__name__)

CategoryOverrides = dict[str, frozenset[Category]]


def parse_overrides(raw: Mapping[str, Any]) -> CategoryOverrides:
    """
    Validate a raw override document.

    Args:
        raw: Card name -> list of category names (a single name is accepted)

    Returns:
        Card name -> categories

    Raises:
        OverrideConfigError: On a non-list value or an unknown category
    """
    overrides: CategoryOverrides = {}
    for card_name, value in raw.items():
        names = [value] if isinstance(value, str) else value
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise OverrideConfigError(card_name, "expected a list of category names")
        try:
            overrides[card_name] = frozenset(Category.parse(name) for name in names)
        except ValueError as e:
            raise OverrideConfigError(card_name, str(e), kind=FailureKind.UNKNOWN_CATEGORY) from e
    return overrides


def find_missing_cards(overrides: Mapping[str, object], cards: Iterable[Card]) -> list[str]:
    """
    Override names that do not match any card in the catalog.

    Each one is logged as a warning; the run continues.
    """
    known = {card.name for card in cards}
    missing = sorted(name for name in overrides if name not in known)
    for name in missing:
        logger.warning("Category override for '%s' matches no card in the catalog", name)
    return missing
