"""
Match condition evaluator.

Checks run in a fixed order and stop at the first failure. An absent
card field never raises; the check that needs it simply fails.
"""

import re

from manabase.models.card import Card, CardFace
from manabase.models.tag import CategoryRules, Tag, TagCondition

# Textual checks run against either the card itself or one of its faces
MatchTarget = Card | CardFace


def _search(pattern: re.Pattern[str], value: str | None) -> bool:
    return value is not None and pattern.search(value) is not None


def _is_target_match(condition: TagCondition, target: MatchTarget, rules: CategoryRules) -> bool:
    category_filter = rules.type_filter(condition.category)
    if category_filter is not None and not _search(category_filter, target.type_line):
        return False

    if condition.type_regex is not None and not _search(condition.type_regex, target.type_line):
        return False

    if condition.name_regex is not None and not _search(condition.name_regex, target.name):
        return False

    if condition.text_regex is not None and not _search(condition.text_regex, target.oracle_text):
        return False

    return True


def is_condition_match(condition: TagCondition, card: Card, rules: CategoryRules) -> bool:
    """
    Evaluate one condition against a card.

    Order: cmc, color identity length, color identity set, name list,
    format legality, face selection, category type filter, type regex,
    name regex, text regex.
    """
    # Exact float comparison; fractional costs only match themselves
    if condition.cmc is not None and card.cmc != condition.cmc:
        return False

    if (
        condition.color_identity_len is not None
        and len(card.color_identity) != condition.color_identity_len
    ):
        return False

    if condition.color_identity is not None and card.color_identity != condition.color_identity:
        return False

    if condition.names is not None and card.name not in condition.names:
        return False

    if condition.format is not None and card.legality(condition.format) is not condition.legality:
        return False

    target: MatchTarget = card
    if condition.card_face is not None:
        face = card.face(condition.card_face)
        if face is None:
            return False
        target = face

    return _is_target_match(condition, target, rules)


def is_tag_match(tag: Tag, card: Card, rules: CategoryRules) -> bool:
    """True if any of the tag's conditions matches the card."""
    return any(is_condition_match(condition, card, rules) for condition in tag.conditions)
