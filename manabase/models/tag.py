"""
Tag model.

A Tag is a named classification rule made of one or more TagConditions.
Conditions are ANDed internally and ORed across the tag. Every condition
belongs to a Category, whose mandatory type-line pattern (if any) is
implicitly ANDed with the condition.

Tags are compiled once by manabase.tags.compiler and are immutable
afterwards. A tag's name is its handle: indexes key tags by name.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from manabase.models.card import Format, Legality
from manabase.models.color import Archetype, Color, archetype_of

# Characters not allowed in file/URL names derived from tag names
_CANONICAL_NAME_STRIP = re.compile(r"[^-\w]")


class Category(str, Enum):
    """Top-level site categories, declared in navigation order."""

    LANDS = "lands"
    ROCKS = "rocks"
    DORKS = "dorks"
    RAMP = "ramp"

    @property
    def label(self) -> str:
        return self.value.title()

    @property
    def base_uri(self) -> str:
        return f"{self.value}.html"

    @property
    def filter_class(self) -> str:
        return f"mtg-filter-{self.value}"

    @classmethod
    def parse(cls, value: str) -> "Category":
        """
        Parse a category from its name, case-insensitive.

        Raises:
            ValueError: If the name is not a known category
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            known = ", ".join(c.value for c in cls)
            raise ValueError(f"Unknown category '{value}' (expected one of: {known})") from None


# Mandatory type-line pattern per category. Categories absent here
# (Ramp) have no implicit filter.
DEFAULT_CATEGORY_PATTERNS: dict[Category, str] = {
    Category.LANDS: r"\bLand\b",
    Category.ROCKS: r"\bArtifact\b",
    Category.DORKS: r"\bCreature\b",
}


@dataclass(frozen=True)
class CategoryRules:
    """
    Compiled category type-line filters.

    Built once at startup and passed explicitly to the compiler and the
    classification engine.
    """

    patterns: dict[Category, re.Pattern[str]] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "CategoryRules":
        return cls.from_strings(DEFAULT_CATEGORY_PATTERNS)

    @classmethod
    def from_strings(cls, patterns: dict[Category, str]) -> "CategoryRules":
        return cls({category: re.compile(p) for category, p in patterns.items()})

    def type_filter(self, category: Category) -> re.Pattern[str] | None:
        return self.patterns.get(category)

    def has_type_filter(self, category: Category) -> bool:
        return category in self.patterns

    def implicit_categories(self, type_line: str | None) -> set[Category]:
        """Categories whose mandatory type filter matches the type line."""
        if type_line is None:
            return set()
        return {
            category
            for category, pattern in self.patterns.items()
            if pattern.search(type_line)
        }


class TagKind(str, Enum):
    """Display grouping of a tag. Has no effect on matching."""

    COLOR_IDENTITY = "color-identity"
    MANA_POOL = "mana-pool"
    COST = "cost"
    TYPE_LINE = "type-line"
    FORMAT = "format"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()


@dataclass(frozen=True, slots=True)
class TagCondition:
    """
    One alternative match rule of a tag.

    Every populated field must pass. Unset fields (None) are not checked.

    Attributes:
        category: Category the condition assigns on a match
        cmc: Exact converted mana cost
        color_identity_len: Exact number of colors in the color identity
        color_identity: Exact color identity set
        names: Allow-list of card names
        card_face: Face index that textual checks are applied to
        type_regex: Searched in the type line
        name_regex: Searched in the name
        text_regex: Searched in the oracle text
        format: Format whose legality is checked
        legality: Required legality in format
    """

    category: Category
    cmc: float | None = None
    color_identity_len: int | None = None
    color_identity: frozenset[Color] | None = None
    names: frozenset[str] | None = None
    card_face: int | None = None
    type_regex: re.Pattern[str] | None = None
    name_regex: re.Pattern[str] | None = None
    text_regex: re.Pattern[str] | None = None
    format: Format | None = None
    legality: Legality = Legality.LEGAL

    def is_unconstrained(self) -> bool:
        """True if no field is populated, i.e. only the category filter applies."""
        return (
            self.cmc is None
            and self.color_identity_len is None
            and self.color_identity is None
            and self.names is None
            and self.card_face is None
            and self.type_regex is None
            and self.name_regex is None
            and self.text_regex is None
            and self.format is None
        )


def canonical_tag_name(name: str) -> str:
    """File/URL-safe tag name: anything but word characters and '-' becomes '_'."""
    return _CANONICAL_NAME_STRIP.sub("_", name)


@dataclass(frozen=True, slots=True)
class Tag:
    """
    A compiled tag.

    Attributes:
        name: Unique display name, also the tag's handle
        kind: Display grouping
        conditions: Alternative match rules (OR)
        alt_names: Search aliases, not used for matching
        subtags: Names of refining tags, resolved at display time
    """

    name: str
    kind: TagKind = TagKind.OTHER
    conditions: tuple[TagCondition, ...] = ()
    alt_names: tuple[str, ...] = ()
    subtags: tuple[str, ...] = ()

    @property
    def canonical_name(self) -> str:
        return canonical_tag_name(self.name)

    @property
    def categories(self) -> frozenset[Category]:
        return frozenset(condition.category for condition in self.conditions)

    @property
    def archetype(self) -> Archetype | None:
        """Archetype of the first condition that pins a color identity."""
        for condition in self.conditions:
            if condition.color_identity is not None:
                return archetype_of(condition.color_identity)
        return None

    @property
    def cmc(self) -> float | None:
        """Cost of the first condition that pins a CMC."""
        for condition in self.conditions:
            if condition.cmc is not None:
                return condition.cmc
        return None
