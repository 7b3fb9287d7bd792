import pytest

from manabase.models.card import Card, CardFace, Format, Legality
from manabase.models.color import Color
from manabase.models.tag import CategoryRules


def colors(symbols: str) -> frozenset[Color]:
    return Color.parse(symbols)


@pytest.fixture
def rules() -> CategoryRules:
    """Default category filters: Lands, Rocks, Dorks filtered; Ramp not."""
    return CategoryRules.default()


@pytest.fixture
def forest() -> Card:
    return Card(
        id="forest",
        name="Forest",
        type_line="Basic Land — Forest",
        oracle_text="({T}: Add {G}.)",
        color_identity=colors("G"),
        image_uris={"normal": "https://img/forest.jpg"},
        legalities={Format.MODERN: Legality.LEGAL, Format.COMMANDER: Legality.LEGAL},
    )


@pytest.fixture
def llanowar_elves() -> Card:
    return Card(
        id="llanowar",
        name="Llanowar Elves",
        cmc=1.0,
        type_line="Creature — Elf Druid",
        oracle_text="{T}: Add {G}.",
        color_identity=colors("G"),
        image_uris={"normal": "https://img/llanowar.jpg"},
    )


@pytest.fixture
def sol_ring() -> Card:
    return Card(
        id="sol-ring",
        name="Sol Ring",
        cmc=1.0,
        type_line="Artifact",
        oracle_text="{T}: Add {C}{C}.",
        legalities={Format.COMMANDER: Legality.LEGAL, Format.LEGACY: Legality.BANNED},
    )


@pytest.fixture
def ornithopter() -> Card:
    return Card(
        id="ornithopter",
        name="Ornithopter",
        cmc=0.0,
        type_line="Artifact Creature — Thopter",
        oracle_text="Flying",
    )


@pytest.fixture
def hallowed_fountain() -> Card:
    return Card(
        id="hallowed-fountain",
        name="Hallowed Fountain",
        type_line="Land — Plains Island",
        oracle_text=(
            "({T}: Add {W} or {U}.)\n"
            "As Hallowed Fountain enters, you may pay 2 life. "
            "If you don't, it enters tapped."
        ),
        color_identity=colors("WU"),
        legalities={Format.MODERN: Legality.LEGAL},
    )


@pytest.fixture
def pathway() -> Card:
    """Two-sided land: both faces have their own image."""
    return Card(
        id="brightclimb",
        name="Brightclimb Pathway // Grimclimb Pathway",
        type_line="Land // Land",
        color_identity=colors("WB"),
        card_faces=(
            CardFace(
                name="Brightclimb Pathway",
                type_line="Land",
                oracle_text="{T}: Add {W}.",
                image_uris={"normal": "https://img/bright.jpg"},
            ),
            CardFace(
                name="Grimclimb Pathway",
                type_line="Land",
                oracle_text="{T}: Add {B}.",
                image_uris={"normal": "https://img/grim.jpg"},
            ),
        ),
    )


@pytest.fixture
def bala_ged() -> Card:
    """Modal double-faced card: a sorcery front and a land back."""
    return Card(
        id="bala-ged",
        name="Bala Ged Recovery // Bala Ged Sanctuary",
        cmc=3.0,
        type_line="Sorcery // Land",
        color_identity=colors("G"),
        card_faces=(
            CardFace(
                name="Bala Ged Recovery",
                type_line="Sorcery",
                oracle_text="Return target card from your graveyard to your hand.",
                image_uris={"normal": "https://img/recovery.jpg"},
            ),
            CardFace(
                name="Bala Ged Sanctuary",
                type_line="Land",
                oracle_text="As Bala Ged Sanctuary enters, you may pay 3 life.",
                image_uris={"normal": "https://img/sanctuary.jpg"},
            ),
        ),
    )


@pytest.fixture
def cultivate() -> Card:
    return Card(
        id="cultivate",
        name="Cultivate",
        cmc=3.0,
        type_line="Sorcery",
        oracle_text=(
            "Search your library for up to two basic land cards, reveal those cards, "
            "put one onto the battlefield tapped and the other into your hand, "
            "then shuffle."
        ),
        color_identity=colors("G"),
    )


@pytest.fixture
def lightning_bolt() -> Card:
    return Card(
        id="bolt",
        name="Lightning Bolt",
        cmc=1.0,
        type_line="Instant",
        oracle_text="Lightning Bolt deals 3 damage to any target.",
        color_identity=colors("R"),
    )


@pytest.fixture
def catalog(
    forest: Card,
    llanowar_elves: Card,
    sol_ring: Card,
    ornithopter: Card,
    hallowed_fountain: Card,
    pathway: Card,
    bala_ged: Card,
    cultivate: Card,
    lightning_bolt: Card,
) -> list[Card]:
    return [
        forest,
        llanowar_elves,
        sol_ring,
        ornithopter,
        hallowed_fountain,
        pathway,
        bala_ged,
        cultivate,
        lightning_bolt,
    ]
