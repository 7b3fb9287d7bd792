from manabase.models.card import Card, CardFace, CardType, Format, Legality, SetType
from manabase.models.color import (
    ARCHETYPES,
    Archetype,
    Color,
    ColorSubType,
    ColorType,
    archetype_named,
    archetype_of,
)
from manabase.models.failure import (
    CatalogError,
    DownloadError,
    FailureKind,
    ManabaseError,
    MissingDataError,
    OverrideConfigError,
    TagConfigError,
)
from manabase.models.tag import (
    Category,
    CategoryRules,
    Tag,
    TagCondition,
    TagKind,
    canonical_tag_name,
)

__all__ = [
    "ARCHETYPES",
    "Archetype",
    "Card",
    "CardFace",
    "CardType",
    "CatalogError",
    "Category",
    "CategoryRules",
    "Color",
    "ColorSubType",
    "ColorType",
    "DownloadError",
    "FailureKind",
    "Format",
    "Legality",
    "ManabaseError",
    "MissingDataError",
    "OverrideConfigError",
    "SetType",
    "Tag",
    "TagCondition",
    "TagConfigError",
    "TagKind",
    "archetype_named",
    "archetype_of",
    "canonical_tag_name",
]
