"""
Tag metadata index.

Owns the compiled tags and groups them by kind for display. Grouping is
independent of the classification pass.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from manabase.models.tag import Category, Tag, TagKind

_LAST = float("inf")


def _by_color_identity(tag: Tag) -> tuple[Any, ...]:
    archetype = tag.archetype
    if archetype is None:
        return (1, (), tag.name)
    return (0, archetype.sort_key(), tag.name)


def _by_cost(tag: Tag) -> tuple[Any, ...]:
    cmc = tag.cmc
    return (int(cmc) if cmc is not None else _LAST, tag.name)


def _by_name(tag: Tag) -> tuple[Any, ...]:
    return (tag.name,)


# Sort key per kind; kinds not listed sort alphabetically
KIND_SORT_KEYS: dict[TagKind, Callable[[Tag], tuple[Any, ...]]] = {
    TagKind.COLOR_IDENTITY: _by_color_identity,
    TagKind.COST: _by_cost,
}


def kind_sort_key(kind: TagKind) -> Callable[[Tag], tuple[Any, ...]]:
    return KIND_SORT_KEYS.get(kind, _by_name)


class TagIndex(Mapping[str, Tag]):
    """
    Tag name -> compiled Tag.

    Lookups of the same name always return the same Tag object.
    """

    def __init__(self, tags: Iterable[Tag] = ()) -> None:
        self._tags: dict[str, Tag] = {}
        for tag in tags:
            if tag.name in self._tags:
                raise ValueError(f"Duplicate tag name: {tag.name}")
            self._tags[tag.name] = tag

    def __getitem__(self, name: str) -> Tag:
        return self._tags[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"TagIndex({len(self._tags)} tags)"

    def tags(self) -> Iterator[Tag]:
        return iter(self._tags.values())

    def resolve_subtags(self, tag: Tag) -> list[Tag]:
        """Subtags of a tag that exist in the index; unknown names are skipped."""
        return [self._tags[name] for name in tag.subtags if name in self._tags]

    def by_kind(self, category: Category | None = None) -> dict[TagKind, list[Tag]]:
        """
        Group tags by kind, each group sorted by its kind's sort key.

        Args:
            category: Only include tags with a condition in this category

        Returns:
            Kind -> sorted tags, kinds in declaration order, empty kinds omitted
        """
        groups: dict[TagKind, list[Tag]] = {}
        for kind in TagKind:
            tags = [
                tag
                for tag in self._tags.values()
                if tag.kind is kind and (category is None or category in tag.categories)
            ]
            if tags:
                groups[kind] = sorted(tags, key=kind_sort_key(kind))
        return groups
