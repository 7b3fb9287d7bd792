"""
Tag Rule Compiler.

Turns raw tag documents from one or more configuration sources into a
TagIndex of compiled, immutable Tags.

Merge semantics: when a tag name appears in more than one source, the
later definition becomes an additional condition of the existing tag
(OR), alt names and subtags are unioned, and the first kind wins.

Any invalid document aborts the whole compilation with TagConfigError.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from manabase.models.color import Color
from manabase.models.failure import FailureKind, TagConfigError
from manabase.models.tag import Category, CategoryRules, Tag, TagCondition, TagKind
from manabase.tags.documents import TagDocument
from manabase.tags.index import TagIndex

logger = logging.getLogger(__name__)

# Document field name for each compiled regex, used in error messages
_REGEX_FIELDS = {
    "type_regex": "type",
    "text_regex": "text",
    "name_regex": "name",
}


@dataclass(frozen=True)
class TagSource:
    """
    One configuration source: raw tag documents that all assign one category.

    Attributes:
        category: Category every condition from this source assigns
        documents: Tag name -> raw rule document
        origin: Where the documents came from, for error messages
    """

    category: Category
    documents: Mapping[str, Mapping[str, Any]]
    origin: str = ""


@dataclass
class _TagBuilder:
    """Mutable accumulator for one tag while sources are merged."""

    name: str
    kind: TagKind
    conditions: list[TagCondition] = field(default_factory=list)
    alt_names: set[str] = field(default_factory=set)
    subtags: set[str] = field(default_factory=set)

    def merge(self, document: TagDocument, condition: TagCondition) -> None:
        if document.kind != self.kind and document.kind is not TagKind.OTHER:
            logger.warning(
                "Tag '%s' redefined with kind %s, keeping %s",
                self.name,
                document.kind.value,
                self.kind.value,
            )
        self.conditions.append(condition)
        self.alt_names.update(document.alt_names)
        self.subtags.update(document.subtags)

    def build(self) -> Tag:
        return Tag(
            name=self.name,
            kind=self.kind,
            conditions=tuple(self.conditions),
            alt_names=tuple(sorted(self.alt_names)),
            subtags=tuple(sorted(self.subtags)),
        )


def _field_name(error: dict[str, Any]) -> str:
    loc = error.get("loc") or ("document",)
    return ".".join(str(part) for part in loc)


def parse_document(name: str, raw: Mapping[str, Any], origin: str = "") -> TagDocument:
    """
    Validate one raw tag document.

    Raises:
        TagConfigError: If the document is not a mapping or fails validation
    """
    if not isinstance(raw, Mapping):
        raise TagConfigError(
            name, "document", f"expected a table, got {type(raw).__name__}", source=origin or None
        )
    try:
        return TagDocument.model_validate(dict(raw))
    except ValidationError as e:
        first = e.errors()[0]
        raise TagConfigError(
            name, _field_name(first), first["msg"], source=origin or None
        ) from e


def _compile_regex(name: str, attr: str, pattern: str | None, origin: str) -> re.Pattern[str] | None:
    if pattern is None:
        return None
    try:
        return re.compile(pattern, re.DOTALL)
    except re.error as e:
        raise TagConfigError(
            name,
            _REGEX_FIELDS[attr],
            f"{e} in pattern {pattern!r}",
            kind=FailureKind.INVALID_REGEX,
            source=origin or None,
        ) from e


def _color_constraints(
    name: str, document: TagDocument, origin: str
) -> tuple[int | None, frozenset[Color] | None]:
    """Split the color-identity field into a length and/or an exact set."""
    length = document.color_identity_len
    colors: frozenset[Color] | None = None
    value = document.color_identity

    if isinstance(value, int):
        if length is not None and length != value:
            raise TagConfigError(
                name,
                "color-identity",
                f"length {value} conflicts with color-identity-len {length}",
                source=origin or None,
            )
        length = value
    elif value is not None:
        try:
            colors = Color.parse(value)
        except ValueError as e:
            raise TagConfigError(name, "color-identity", str(e), source=origin or None) from e

    return length, colors


def compile_condition(
    name: str,
    category: Category,
    document: TagDocument,
    rules: CategoryRules,
    origin: str = "",
) -> TagCondition:
    """
    Compile one document into a condition of the given category.

    Raises:
        TagConfigError: On invalid regexes, colors, or an unguarded condition
    """
    color_identity_len, color_identity = _color_constraints(name, document, origin)

    condition = TagCondition(
        category=category,
        cmc=document.cmc,
        color_identity_len=color_identity_len,
        color_identity=color_identity,
        names=frozenset(document.names) if document.names is not None else None,
        card_face=document.card_face,
        type_regex=_compile_regex(name, "type_regex", document.type_regex, origin),
        name_regex=_compile_regex(name, "name_regex", document.name_regex, origin),
        text_regex=_compile_regex(name, "text_regex", document.text_regex, origin),
        format=document.format,
        legality=document.legality,
    )

    # A condition with nothing to check would tag the whole catalog
    if condition.is_unconstrained() and not rules.has_type_filter(category):
        raise TagConfigError(
            name,
            "document",
            f"condition has no match fields and category '{category.value}' "
            "has no type-line filter, so it would match every card",
            kind=FailureKind.UNGUARDED_CONDITION,
            source=origin or None,
        )

    return condition


def compile_tags(sources: Iterable[TagSource], rules: CategoryRules | None = None) -> TagIndex:
    """
    Compile and merge tag sources into a TagIndex.

    Sources are processed in order; within a source, documents are
    processed in mapping order.

    Args:
        sources: Configuration sources
        rules: Category type-line filters. Defaults to CategoryRules.default()

    Returns:
        TagIndex of compiled tags

    Raises:
        TagConfigError: On the first invalid document
    """
    rules = rules or CategoryRules.default()
    builders: dict[str, _TagBuilder] = {}

    for source in sources:
        logger.debug(
            "Compiling %d %s tag definitions from %s",
            len(source.documents),
            source.category.value,
            source.origin or "<memory>",
        )
        for name, raw in source.documents.items():
            document = parse_document(name, raw, source.origin)
            condition = compile_condition(name, source.category, document, rules, source.origin)

            builder = builders.get(name)
            if builder is None:
                builder = _TagBuilder(name=name, kind=document.kind)
                builders[name] = builder
            builder.merge(document, condition)

    index = TagIndex(builder.build() for builder in builders.values())
    logger.info("Compiled %d tags", len(index))
    return index
