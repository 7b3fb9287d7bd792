from manabase.classify.engine import TaggedCard, TaggedCardDb, classify_card
from manabase.classify.matcher import is_condition_match, is_tag_match
from manabase.classify.subtags import SubtagBucket, subtag_buckets

__all__ = [
    "SubtagBucket",
    "TaggedCard",
    "TaggedCardDb",
    "classify_card",
    "is_condition_match",
    "is_tag_match",
    "subtag_buckets",
]
