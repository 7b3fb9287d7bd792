"""
Classification engine.

Evaluates every tag against every card and builds the cross-reference
indexes consumed by page assembly.

INVARIANTS:
- Cards and tags are read-only during classification
- A card with no category after all steps is dropped from every index
- Serial and parallel builds produce identical databases
- Category sources are additive: rule matches, implicit type-line
  filters, then manual overrides
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from manabase.classify.matcher import is_condition_match
from manabase.models.card import Card, CardType
from manabase.models.tag import Category, CategoryRules, Tag, TagKind
from manabase.tags.index import TagIndex

logger = logging.getLogger(__name__)

# Cards per work item in parallel builds
CHUNK_SIZE = 512


@dataclass(frozen=True, slots=True)
class TaggedCard:
    """
    Classification result for one retained card.

    Attributes:
        card: The classified card
        tags: Names of matching tags
        categories: Categories the card appears under
        matched_categories: Categories assigned per tag name by rule matches
    """

    card: Card
    tags: frozenset[str]
    categories: frozenset[Category]
    matched_categories: Mapping[str, frozenset[Category]] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.card.id

    @property
    def name(self) -> str:
        return self.card.name

    @property
    def types(self) -> list[CardType]:
        return sorted(self.card.card_types, key=lambda t: t.order)

    @property
    def front_image_uri(self) -> str:
        return self.card.front_image_uri

    @property
    def back_image_uri(self) -> str | None:
        return self.card.back_image_uri

    def sorted_tags(self) -> list[str]:
        return sorted(self.tags)

    def has_type(self, card_type: CardType) -> bool:
        return card_type in self.card.card_types

    def type_filter_classes(self) -> str:
        return " ".join(card_type.filter_class for card_type in self.types)

    def category_filter_classes(self) -> str:
        return " ".join(
            category.filter_class for category in Category if category in self.categories
        )


def classify_card(
    card: Card,
    tags: Iterable[Tag],
    rules: CategoryRules,
    overrides: Mapping[str, Iterable[Category]] | None = None,
) -> TaggedCard | None:
    """
    Classify one card.

    Args:
        card: Card to classify
        tags: Compiled tags
        rules: Category type-line filters
        overrides: Card name -> manually assigned categories

    Returns:
        TaggedCard, or None if the card ends up in no category
    """
    matched: dict[str, set[Category]] = {}
    categories: set[Category] = set()

    for tag in tags:
        for condition in tag.conditions:
            if is_condition_match(condition, card, rules):
                matched.setdefault(tag.name, set()).add(condition.category)
                categories.add(condition.category)

    # Reversible cards carry type lines only on their faces
    categories |= rules.implicit_categories(card.full_type_line or None)

    if overrides:
        categories.update(overrides.get(card.name, ()))

    if not categories:
        return None

    return TaggedCard(
        card=card,
        tags=frozenset(matched),
        categories=frozenset(categories),
        matched_categories={name: frozenset(cats) for name, cats in matched.items()},
    )


def _classify_chunk(
    cards: Sequence[Card],
    tags: Sequence[Tag],
    rules: CategoryRules,
    overrides: Mapping[str, Iterable[Category]] | None,
) -> list[TaggedCard | None]:
    return [classify_card(card, tags, rules, overrides) for card in cards]


def _chunks(cards: Sequence[Card], size: int) -> Iterator[Sequence[Card]]:
    for start in range(0, len(cards), size):
        yield cards[start : start + size]


class TaggedCardDb:
    """
    Classified catalog plus its cross-reference indexes.

    Indexes:
        tag -> card ids, (tag, category) -> card ids, category -> card ids,
        kind -> sorted tags, card type -> tag names, category -> tag names
    """

    def __init__(self, tag_index: TagIndex) -> None:
        self._tag_index = tag_index
        self._cards: dict[str, TaggedCard] = {}
        self._tag_cards: dict[str, set[str]] = {}
        self._tag_category_cards: dict[tuple[str, Category], set[str]] = {}
        self._category_cards: dict[Category, set[str]] = {c: set() for c in Category}
        self._type_tags: dict[CardType, set[str]] = {t: set() for t in CardType}
        self._category_tags: dict[Category, set[str]] = {c: set() for c in Category}
        self._kind_tags: dict[TagKind, list[Tag]] = tag_index.by_kind()

    @classmethod
    def build(
        cls,
        tag_index: TagIndex,
        cards: Sequence[Card],
        rules: CategoryRules | None = None,
        overrides: Mapping[str, Iterable[Category]] | None = None,
        workers: int = 1,
    ) -> "TaggedCardDb":
        """
        Classify a catalog.

        Args:
            tag_index: Compiled tags
            cards: Full card catalog
            rules: Category type-line filters. Defaults to CategoryRules.default()
            overrides: Card name -> manually assigned categories
            workers: Thread count; 1 classifies serially

        Returns:
            Populated TaggedCardDb
        """
        rules = rules or CategoryRules.default()
        tags = list(tag_index.tags())
        db = cls(tag_index)

        if workers > 1 and len(cards) > CHUNK_SIZE:
            logger.debug("Classifying %d cards with %d workers", len(cards), workers)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [
                    pool.submit(_classify_chunk, chunk, tags, rules, overrides)
                    for chunk in _chunks(cards, CHUNK_SIZE)
                ]
                # Merge in submission order so the result matches a serial build
                for future in futures:
                    for tagged in future.result():
                        db._add(tagged)
        else:
            logger.debug("Classifying %d cards", len(cards))
            for tagged in _classify_chunk(cards, tags, rules, overrides):
                db._add(tagged)

        logger.info(
            "Tagged %d of %d cards with %d tags",
            len(db._cards),
            len(cards),
            sum(1 for ids in db._tag_cards.values() if ids),
        )
        return db

    def _add(self, tagged: TaggedCard | None) -> None:
        if tagged is None:
            return

        if tagged.id in self._cards:
            logger.warning("Duplicate card id %s (%s), keeping first", tagged.id, tagged.name)
            return

        self._cards[tagged.id] = tagged
        for category in tagged.categories:
            self._category_cards[category].add(tagged.id)

        card_types = tagged.card.card_types
        for tag_name, categories in tagged.matched_categories.items():
            self._tag_cards.setdefault(tag_name, set()).add(tagged.id)
            for card_type in card_types:
                self._type_tags[card_type].add(tag_name)
            for category in categories:
                self._category_tags[category].add(tag_name)
                self._tag_category_cards.setdefault((tag_name, category), set()).add(tagged.id)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    @property
    def tag_index(self) -> TagIndex:
        return self._tag_index

    def get(self, card_id: str) -> TaggedCard | None:
        return self._cards.get(card_id)

    def cards(self) -> Iterator[TaggedCard]:
        """Retained cards in catalog order."""
        return iter(self._cards.values())

    def sorted_cards(self, card_ids: Iterable[str] | None = None) -> list[TaggedCard]:
        """Retained cards (or the given subset) sorted by name, then id."""
        if card_ids is None:
            selected: Iterable[TaggedCard] = self._cards.values()
        else:
            selected = (self._cards[card_id] for card_id in card_ids if card_id in self._cards)
        return sorted(selected, key=lambda tagged: (tagged.name, tagged.id))

    def tag_cards(self, tag: Tag | str) -> frozenset[str]:
        """Ids of cards carrying a tag (empty if the tag matched nothing)."""
        name = tag if isinstance(tag, str) else tag.name
        return frozenset(self._tag_cards.get(name, ()))

    def tag_category_cards(self, tag: Tag | str, category: Category) -> frozenset[str]:
        """Ids of cards that matched one of the tag's conditions for this category."""
        name = tag if isinstance(tag, str) else tag.name
        return frozenset(self._tag_category_cards.get((name, category), ()))

    def category_cards(self, category: Category) -> frozenset[str]:
        return frozenset(self._category_cards[category])

    def kind_tags(self, kind: TagKind) -> list[Tag]:
        """Tags of a kind in display order."""
        return list(self._kind_tags.get(kind, ()))

    def type_has_cards_of_tag(self, card_type: CardType, tag: Tag | str) -> bool:
        name = tag if isinstance(tag, str) else tag.name
        return name in self._type_tags[card_type]

    def category_has_tag(self, category: Category, tag: Tag | str) -> bool:
        """True if some card matched one of the tag's conditions for this category."""
        name = tag if isinstance(tag, str) else tag.name
        return name in self._category_tags[category]
