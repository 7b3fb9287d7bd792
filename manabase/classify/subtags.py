"""
Subtag buckets.

Partitions the cards of a parent tag by the parent's subtags. A card is
listed under every subtag it carries; the remainder bucket holds the
parent's cards that carry none of them.
"""

from dataclasses import dataclass

from manabase.classify.engine import TaggedCardDb
from manabase.models.tag import Category, Tag


@dataclass(frozen=True, slots=True)
class SubtagBucket:
    """
    Cards of a parent tag that also carry one subtag.

    Attributes:
        tag: The subtag, or None for the remainder bucket
        card_ids: Member card ids
    """

    tag: Tag | None
    card_ids: frozenset[str]

    @property
    def is_remainder(self) -> bool:
        return self.tag is None

    def __len__(self) -> int:
        return len(self.card_ids)


def subtag_buckets(
    db: TaggedCardDb,
    parent: Tag,
    category: Category | None = None,
    include_empty: bool = False,
) -> list[SubtagBucket]:
    """
    Split a parent tag's cards into subtag buckets.

    Subtag names that are not in the tag index are skipped. The remainder
    bucket is always last.

    Args:
        db: Classified catalog
        parent: Tag whose cards are partitioned
        category: Only consider cards that matched the parent through this category
        include_empty: Keep buckets with no cards

    Returns:
        One bucket per resolved subtag, in subtag order, then the remainder
    """
    if category is None:
        parent_ids = set(db.tag_cards(parent))
    else:
        parent_ids = set(db.tag_category_cards(parent, category))

    buckets: list[SubtagBucket] = []
    covered: set[str] = set()

    for subtag in db.tag_index.resolve_subtags(parent):
        ids = frozenset(parent_ids & db.tag_cards(subtag))
        covered |= ids
        if ids or include_empty:
            buckets.append(SubtagBucket(tag=subtag, card_ids=ids))

    remainder = frozenset(parent_ids - covered)
    if remainder or include_empty:
        buckets.append(SubtagBucket(tag=None, card_ids=remainder))

    return buckets
