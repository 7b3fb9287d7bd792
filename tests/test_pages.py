"""Tests for page assembly and output."""

import json
from pathlib import Path

import pytest

from manabase.classify.engine import TaggedCardDb
from manabase.models.card import Card
from manabase.models.tag import Category, CategoryRules
from manabase.render.pages import (
    ALL_CARDS_PAGE,
    CardView,
    build_all_cards_page,
    build_category_page,
    write_output,
)
from manabase.tags.compiler import TagSource, compile_tags


@pytest.fixture
def db(catalog: list[Card], rules: CategoryRules) -> TaggedCardDb:
    index = compile_tags(
        [
            TagSource(
                Category.LANDS,
                {
                    "Shock Land": {"text": "pay 2 life"},
                    "Basic": {"type": r"\bBasic\b", "kind": "type-line"},
                    "Azorius": {"color-identity": "WU", "kind": "color-identity"},
                    "Dual Faced": {"card-face": 1, "type": r"\bLand\b", "subtags": ["Pathway"]},
                    "Pathway": {"name": "Pathway$"},
                    "Snow": {"type": r"\bSnow\b", "kind": "type-line"},
                },
            ),
            TagSource(Category.ROCKS, {"Cost: 1": {"cmc": 1, "text": "Add", "kind": "cost"}}),
            TagSource(Category.DORKS, {"Cost: 1": {"cmc": 1, "text": "Add"}}),
        ]
    )
    return TaggedCardDb.build(index, catalog, rules)


class TestCategoryPage:
    def test_kinds_and_tags(self, db: TaggedCardDb) -> None:
        page = build_category_page(db, Category.LANDS)

        assert page.title == "Lands"
        assert page.uri == "lands.html"
        assert [k.kind for k in page.kinds] == ["color-identity", "type-line", "other"]
        assert [t.name for t in page.kinds[2].tags] == ["Dual Faced", "Pathway", "Shock Land"]

    def test_unmatched_tags_omitted(self, db: TaggedCardDb) -> None:
        page = build_category_page(db, Category.LANDS)
        type_line = page.kinds[1]

        assert [t.name for t in type_line.tags] == ["Basic"]

    def test_subtag_buckets(self, db: TaggedCardDb) -> None:
        page = build_category_page(db, Category.LANDS)
        dual_faced = page.kinds[2].tags[0]

        assert [b.subtag for b in dual_faced.buckets] == ["Pathway", None]
        assert [c.id for c in dual_faced.buckets[0].cards] == ["brightclimb"]
        assert [c.id for c in dual_faced.buckets[1].cards] == ["bala-ged"]

    def test_shared_tag_restricted_to_category(self, db: TaggedCardDb) -> None:
        rocks = build_category_page(db, Category.ROCKS)
        dorks = build_category_page(db, Category.DORKS)

        assert [c.name for c in rocks.kinds[0].tags[0].buckets[0].cards] == ["Sol Ring"]
        assert [c.name for c in dorks.kinds[0].tags[0].buckets[0].cards] == ["Llanowar Elves"]

    def test_empty_category(self, db: TaggedCardDb) -> None:
        assert build_category_page(db, Category.RAMP).kinds == []


class TestAllCardsPage:
    def test_sorted_by_name(self, db: TaggedCardDb) -> None:
        names = [card.name for card in build_all_cards_page(db).cards]

        assert names == sorted(names)
        assert "Lightning Bolt" not in names
        assert len(names) == len(db)

    def test_card_view(self, db: TaggedCardDb) -> None:
        view = CardView.from_tagged(db.get("brightclimb"))

        assert view.tags == ["Dual Faced", "Pathway"]
        assert view.types == ["Land"]
        assert view.filter_classes == "mtg-filter-land mtg-filter-lands"
        assert view.front_image_uri == "https://img/bright.jpg"
        assert view.back_image_uri == "https://img/grim.jpg"


class TestWriteOutput:
    def test_writes_every_page(self, db: TaggedCardDb, tmp_path: Path) -> None:
        paths = write_output(db, tmp_path / "www")

        assert [p.name for p in paths] == [
            f"{ALL_CARDS_PAGE}.json",
            "lands.json",
            "rocks.json",
            "dorks.json",
            "ramp.json",
        ]
        assert all(p.exists() for p in paths)

    def test_json_content(self, db: TaggedCardDb, tmp_path: Path) -> None:
        write_output(db, tmp_path)

        lands = json.loads((tmp_path / "lands.json").read_text(encoding="utf-8"))
        assert lands["category"] == "lands"
        assert lands["kinds"][0]["tags"][0]["name"] == "Azorius"
        assert lands["kinds"][0]["tags"][0]["buckets"][0]["cards"][0]["id"] == "hallowed-fountain"


class TestTagSplitAcrossCategories:
    @pytest.fixture
    def producer_db(self, llanowar_elves: Card, rules: CategoryRules) -> TaggedCardDb:
        birds = Card(
            id="birds",
            name="Birds of Paradise",
            cmc=1.0,
            type_line="Creature — Bird",
            oracle_text="Flying\n{T}: Add one mana of any color.",
        )
        index = compile_tags(
            [
                TagSource(Category.RAMP, {"Producer": {"text": "any color"}}),
                TagSource(Category.DORKS, {"Producer": {"name": "Elves"}}),
            ]
        )
        return TaggedCardDb.build(index, [birds, llanowar_elves], rules)

    def test_listed_only_where_matched(self, producer_db: TaggedCardDb) -> None:
        """Birds is a creature, but it matched Producer only through Ramp."""
        dorks = build_category_page(producer_db, Category.DORKS)
        ramp = build_category_page(producer_db, Category.RAMP)

        assert Category.DORKS in producer_db.get("birds").categories
        assert [c.id for c in dorks.kinds[0].tags[0].buckets[0].cards] == ["llanowar"]
        assert [c.id for c in ramp.kinds[0].tags[0].buckets[0].cards] == ["birds"]
