"""
Page assembly.

Builds serializable page models from a TaggedCardDb: one page per
category (tags grouped by kind, each split into subtag buckets) and an
all-cards page sorted by name. Templating consumes these models; here
they are written out as JSON.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from manabase.classify.engine import TaggedCard, TaggedCardDb
from manabase.classify.subtags import subtag_buckets
from manabase.models.tag import Category, Tag

logger = logging.getLogger(__name__)

ALL_CARDS_PAGE = "all"


class CardView(BaseModel):
    """Display data for one card."""

    id: str
    name: str
    scryfall_uri: str = ""
    front_image_uri: str = ""
    back_image_uri: str | None = None
    tags: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    filter_classes: str = ""

    @classmethod
    def from_tagged(cls, tagged: TaggedCard) -> "CardView":
        classes = [
            tagged.type_filter_classes(),
            tagged.category_filter_classes(),
            tagged.card.set_type.filter_class,
        ]
        return cls(
            id=tagged.id,
            name=tagged.name,
            scryfall_uri=tagged.card.scryfall_uri,
            front_image_uri=tagged.front_image_uri,
            back_image_uri=tagged.back_image_uri,
            tags=tagged.sorted_tags(),
            types=[card_type.value for card_type in tagged.types],
            filter_classes=" ".join(c for c in classes if c),
        )


class BucketView(BaseModel):
    """Cards of a tag that carry one subtag, or none of them."""

    subtag: str | None = None
    canonical_name: str | None = None
    cards: list[CardView] = Field(default_factory=list)


class TagView(BaseModel):
    name: str
    canonical_name: str
    alt_names: list[str] = Field(default_factory=list)
    buckets: list[BucketView] = Field(default_factory=list)


class KindView(BaseModel):
    kind: str
    label: str
    tags: list[TagView] = Field(default_factory=list)


class CategoryPage(BaseModel):
    """All tags of one category, grouped by kind."""

    category: str
    title: str
    uri: str
    kinds: list[KindView] = Field(default_factory=list)


class AllCardsPage(BaseModel):
    cards: list[CardView] = Field(default_factory=list)


def _tag_view(db: TaggedCardDb, tag: Tag, category: Category) -> TagView:
    buckets = [
        BucketView(
            subtag=bucket.tag.name if bucket.tag else None,
            canonical_name=bucket.tag.canonical_name if bucket.tag else None,
            cards=[CardView.from_tagged(t) for t in db.sorted_cards(bucket.card_ids)],
        )
        for bucket in subtag_buckets(db, tag, category)
    ]
    return TagView(
        name=tag.name,
        canonical_name=tag.canonical_name,
        alt_names=list(tag.alt_names),
        buckets=buckets,
    )


def build_category_page(db: TaggedCardDb, category: Category) -> CategoryPage:
    """
    Assemble the page for one category.

    Only tags that matched at least one card under this category are listed.
    """
    kinds: list[KindView] = []
    for kind, tags in db.tag_index.by_kind(category).items():
        views = [_tag_view(db, tag, category) for tag in tags if db.category_has_tag(category, tag)]
        if views:
            kinds.append(KindView(kind=kind.value, label=kind.label, tags=views))

    return CategoryPage(
        category=category.value,
        title=category.label,
        uri=category.base_uri,
        kinds=kinds,
    )


def build_all_cards_page(db: TaggedCardDb) -> AllCardsPage:
    return AllCardsPage(cards=[CardView.from_tagged(t) for t in db.sorted_cards()])


def write_page(page: BaseModel, output_dir: Path, name: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{name}.json"
    path.write_text(page.model_dump_json(indent=2), encoding="utf-8")
    return path


def write_output(db: TaggedCardDb, output_dir: Path) -> list[Path]:
    """Write the all-cards page and every category page. Returns written paths."""
    logger.debug("Writing all cards page")
    written = [write_page(build_all_cards_page(db), output_dir, ALL_CARDS_PAGE)]

    logger.debug("Writing category pages")
    for category in Category:
        written.append(write_page(build_category_page(db, category), output_dir, category.value))

    return written
