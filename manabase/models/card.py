"""
Card record model.

Normalized, immutable view of one Scryfall oracle card. Cards are built
once by the catalog loader and only ever read by the classification
engine.
"""

from dataclasses import dataclass, field
from enum import Enum

from manabase.models.color import Color

# Image size used for card display
IMAGE_SIZE = "normal"


class Legality(str, Enum):
    """Legality of a card in one format."""

    NOT_LEGAL = "not_legal"
    LEGAL = "legal"
    RESTRICTED = "restricted"
    BANNED = "banned"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class Format(str, Enum):
    """Constructed formats tracked in legality maps."""

    STANDARD = "standard"
    HISTORIC = "historic"
    PIONEER = "pioneer"
    MODERN = "modern"
    LEGACY = "legacy"
    VINTAGE = "vintage"
    PAUPER = "pauper"
    COMMANDER = "commander"
    BRAWL = "brawl"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> "Format":
        # Scryfall adds formats over time; unknown keys collapse to OTHER
        return cls.OTHER

    @property
    def label(self) -> str:
        return self.value.title()


class SetType(str, Enum):
    """Set types that get special display treatment."""

    FUNNY = "funny"
    MEMORABILIA = "memorabilia"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> "SetType":
        return cls.OTHER

    @property
    def filter_class(self) -> str:
        """CSS class used to hide silver-bordered cards by default."""
        return "" if self is SetType.OTHER else "mtg-filter-silver-border"


class CardType(str, Enum):
    """Primary card types, declared in display order."""

    LAND = "Land"
    ARTIFACT = "Artifact"
    CREATURE = "Creature"
    ENCHANTMENT = "Enchantment"
    INSTANT = "Instant"
    SORCERY = "Sorcery"
    PLANESWALKER = "Planeswalker"

    @classmethod
    def from_type_line(cls, type_line: str) -> frozenset["CardType"]:
        """Every card type named anywhere in a (possibly joined) type line."""
        return frozenset(card_type for card_type in cls if card_type.value in type_line)

    @property
    def base_uri(self) -> str:
        plural = "sorceries" if self is CardType.SORCERY else f"{self.value.lower()}s"
        return f"{plural}.html"

    @property
    def filter_class(self) -> str:
        return f"mtg-filter-{self.value.lower()}"

    @property
    def order(self) -> int:
        return list(CardType).index(self)


@dataclass(frozen=True, slots=True)
class CardFace:
    """
    One printed side of a multi-faced card.

    Attributes:
        name: Face name
        type_line: Face type line, absent on some layouts
        oracle_text: Face rules text, absent on vanilla faces
        image_uris: Image size -> URI, only on genuinely two-sided layouts
    """

    name: str
    type_line: str | None = None
    oracle_text: str | None = None
    image_uris: dict[str, str] | None = None


@dataclass(frozen=True, slots=True)
class Card:
    """
    One oracle card from the catalog.

    Attributes:
        id: Scryfall card ID
        name: Card name (for split/double-faced cards, "A // B")
        cmc: Converted mana cost, compared exactly
        color_identity: Colors the card belongs to
        type_line: Full type line, absent on some multi-faced layouts
        oracle_text: Rules text, absent on multi-faced layouts and vanilla cards
        card_faces: Faces in printed order (empty for single-faced cards)
        image_uris: Image size -> URI for single-image layouts
        legalities: Format -> legality
        set_type: Set type for silver-border filtering
        scryfall_uri: Link to the card page, display only
    """

    id: str
    name: str
    cmc: float = 0.0
    color_identity: frozenset[Color] = frozenset()
    type_line: str | None = None
    oracle_text: str | None = None
    card_faces: tuple[CardFace, ...] = ()
    image_uris: dict[str, str] | None = None
    legalities: dict[Format, Legality] = field(default_factory=dict)
    set_type: SetType = SetType.OTHER
    scryfall_uri: str = ""

    def face(self, index: int) -> CardFace | None:
        """Face at index, or None if the card has no such face."""
        if 0 <= index < len(self.card_faces):
            return self.card_faces[index]
        return None

    def legality(self, format: Format) -> Legality:
        return self.legalities.get(format, Legality.NOT_LEGAL)

    @property
    def full_type_line(self) -> str:
        """Card type line joined with every face type line."""
        parts = [self.type_line] if self.type_line else []
        parts.extend(face.type_line for face in self.card_faces if face.type_line)
        return " ".join(parts)

    @property
    def card_types(self) -> frozenset[CardType]:
        return CardType.from_type_line(self.full_type_line)

    @property
    def front_image_uri(self) -> str:
        """Front image; uses face 0 only when the card has a real back side."""
        if self.back_image_uri is not None:
            front = self.card_faces[0].image_uris or {}
            return front.get(IMAGE_SIZE, "")
        return (self.image_uris or {}).get(IMAGE_SIZE, "")

    @property
    def back_image_uri(self) -> str | None:
        """
        Back image for two-sided layouts.

        Cards with top-level images (split, adventure, alternate art) have
        no separate back even when they list faces.
        """
        if self.image_uris is not None:
            return None
        back = self.face(1)
        if back is None or back.image_uris is None:
            return None
        return back.image_uris.get(IMAGE_SIZE)
