"""
Color identity model.

Maps every subset of the five Magic colors to a named archetype
(Azorius, Jund, Non-Green, ...) and defines the display ordering used
when color-identity tags are listed.

INVARIANTS:
- The archetype table covers all 32 color subsets exactly once
- archetype_of() is order-insensitive and total
- The table is validated at import; a gap is a defect, not a runtime case
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from itertools import combinations


class Color(str, Enum):
    """The five primitive colors, declared in WUBRG order."""

    WHITE = "W"
    BLUE = "U"
    BLACK = "B"
    RED = "R"
    GREEN = "G"

    @property
    def position(self) -> int:
        """Position of the color in WUBRG order."""
        return _WUBRG.index(self)

    @classmethod
    def parse(cls, symbols: Iterable[str]) -> frozenset["Color"]:
        """
        Parse color letters into a color set.

        Accepts any iterable of single letters, including a plain string
        such as "WU". Letters are case-insensitive.

        Raises:
            ValueError: If a letter is not one of W, U, B, R, G
        """
        return frozenset(cls(symbol.upper()) for symbol in symbols)


_WUBRG: tuple[Color, ...] = tuple(Color)


class ColorType(str, Enum):
    """Size bucket of a color identity."""

    COLORLESS = "colorless"
    MONO = "mono"
    DUAL = "dual"
    TRI = "tri"
    FOUR = "four"
    DOMAIN = "domain"


class ColorSubType(str, Enum):
    """Relationship of colors within a dual or tri identity."""

    ALLIED = "allied"
    ENEMY = "enemy"
    SHARD = "shard"
    WEDGE = "wedge"


_TYPE_BY_SIZE = {
    0: ColorType.COLORLESS,
    1: ColorType.MONO,
    2: ColorType.DUAL,
    3: ColorType.TRI,
    4: ColorType.FOUR,
    5: ColorType.DOMAIN,
}


@dataclass(frozen=True, slots=True)
class Archetype:
    """
    A named color identity.

    Attributes:
        name: Display name (e.g., "Azorius")
        colors: Constituent colors in WUBRG order
        subtype: Allied/enemy for duals, shard/wedge for tri, else None
    """

    name: str
    colors: tuple[Color, ...]
    subtype: ColorSubType | None = None

    @property
    def color_type(self) -> ColorType:
        return _TYPE_BY_SIZE[len(self.colors)]

    @property
    def color_set(self) -> frozenset[Color]:
        return frozenset(self.colors)

    @property
    def symbols(self) -> str:
        """Color letters in WUBRG order, e.g. "WU"."""
        return "".join(color.value for color in self.colors)

    def sort_key(self) -> tuple[int, tuple[int, ...]]:
        """
        Canonical display order.

        Colorless < mono < dual < tri < four < domain, then by the WUBRG
        positions of the colors within each bucket.
        """
        return (len(self.colors), tuple(color.position for color in self.colors))


def _archetype(
    name: str, symbols: str, subtype: ColorSubType | None = None
) -> Archetype:
    colors = tuple(sorted(Color.parse(symbols), key=lambda c: c.position))
    return Archetype(name=name, colors=colors, subtype=subtype)


ARCHETYPES: tuple[Archetype, ...] = (
    _archetype("Colorless", ""),
    _archetype("White", "W"),
    _archetype("Blue", "U"),
    _archetype("Black", "B"),
    _archetype("Red", "R"),
    _archetype("Green", "G"),
    # Guilds
    _archetype("Azorius", "WU", ColorSubType.ALLIED),
    _archetype("Dimir", "UB", ColorSubType.ALLIED),
    _archetype("Rakdos", "BR", ColorSubType.ALLIED),
    _archetype("Gruul", "RG", ColorSubType.ALLIED),
    _archetype("Selesnya", "GW", ColorSubType.ALLIED),
    _archetype("Orzhov", "WB", ColorSubType.ENEMY),
    _archetype("Izzet", "UR", ColorSubType.ENEMY),
    _archetype("Golgari", "BG", ColorSubType.ENEMY),
    _archetype("Boros", "RW", ColorSubType.ENEMY),
    _archetype("Simic", "GU", ColorSubType.ENEMY),
    # Shards
    _archetype("Bant", "GWU", ColorSubType.SHARD),
    _archetype("Esper", "WUB", ColorSubType.SHARD),
    _archetype("Grixis", "UBR", ColorSubType.SHARD),
    _archetype("Jund", "BRG", ColorSubType.SHARD),
    _archetype("Naya", "RGW", ColorSubType.SHARD),
    # Wedges
    _archetype("Abzan", "WBG", ColorSubType.WEDGE),
    _archetype("Jeskai", "URW", ColorSubType.WEDGE),
    _archetype("Sultai", "BGU", ColorSubType.WEDGE),
    _archetype("Mardu", "RWB", ColorSubType.WEDGE),
    _archetype("Temur", "GUR", ColorSubType.WEDGE),
    # Four color, named by the missing color
    _archetype("Non-White", "UBRG"),
    _archetype("Non-Blue", "WBRG"),
    _archetype("Non-Black", "WURG"),
    _archetype("Non-Red", "WUBG"),
    _archetype("Non-Green", "WUBR"),
    _archetype("Domain", "WUBRG"),
)


def _build_archetype_table(
    archetypes: Iterable[Archetype],
) -> dict[frozenset[Color], Archetype]:
    """
    Index archetypes by color set and check the table is exhaustive.

    Raises:
        ValueError: If a color subset is mapped twice or not at all
    """
    table: dict[frozenset[Color], Archetype] = {}
    for archetype in archetypes:
        key = archetype.color_set
        if key in table:
            raise ValueError(
                f"Colors {archetype.symbols or 'C'} mapped to both "
                f"{table[key].name} and {archetype.name}"
            )
        table[key] = archetype

    missing = [
        "".join(color.value for color in subset) or "C"
        for size in range(len(_WUBRG) + 1)
        for subset in combinations(_WUBRG, size)
        if frozenset(subset) not in table
    ]
    if missing:
        raise ValueError(f"No archetype defined for color sets: {', '.join(missing)}")

    return table


_ARCHETYPES_BY_COLORS = _build_archetype_table(ARCHETYPES)
_ARCHETYPES_BY_NAME = {archetype.name.lower(): archetype for archetype in ARCHETYPES}


def archetype_of(colors: Iterable[Color]) -> Archetype:
    """Return the archetype for a collection of colors, in any order."""
    return _ARCHETYPES_BY_COLORS[frozenset(colors)]


def archetype_named(name: str) -> Archetype | None:
    """Look up an archetype by display name (case-insensitive)."""
    return _ARCHETYPES_BY_NAME.get(name.lower())
