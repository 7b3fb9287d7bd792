"""
Failure classification.

Every error manabase raises on purpose is a ManabaseError carrying a
FailureKind, so the build job can report what went wrong without a
traceback. Configuration failures are fatal and are raised before any
card is classified.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Configuration failures
    MALFORMED_CONFIG = "malformed_config"
    INVALID_REGEX = "invalid_regex"
    UNGUARDED_CONDITION = "unguarded_condition"
    UNKNOWN_CATEGORY = "unknown_category"

    # Input data failures
    MALFORMED_CARD = "malformed_card"
    MISSING_DATA = "missing_data"

    # Service failures
    DOWNLOAD_FAILED = "download_failed"


class ManabaseError(Exception):
    """
    Base class for known, explainable failures.

    Attributes:
        kind: Failure classification
        message: Human-readable explanation
        detail: Optional technical detail (e.g. the underlying error)
    """

    def __init__(self, kind: FailureKind, message: str, detail: str | None = None):
        self.kind = kind
        self.message = message
        self.detail = detail
        super().__init__(message if detail is None else f"{message}: {detail}")


class TagConfigError(ManabaseError):
    """A tag definition cannot be compiled. Names the tag and the field."""

    def __init__(
        self,
        tag: str,
        field: str,
        detail: str,
        kind: FailureKind = FailureKind.MALFORMED_CONFIG,
        source: str | None = None,
    ):
        self.tag = tag
        self.field = field
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(kind, f"Invalid tag '{tag}' field '{field}'{where}", detail)


class OverrideConfigError(ManabaseError):
    """The manual category list is malformed or names an unknown category."""

    def __init__(self, card_name: str, detail: str, kind: FailureKind = FailureKind.MALFORMED_CONFIG):
        self.card_name = card_name
        super().__init__(kind, f"Invalid category override for '{card_name}'", detail)


class CatalogError(ManabaseError):
    """A card record cannot be read from the bulk data."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(FailureKind.MALFORMED_CARD, message, detail)


class DownloadError(ManabaseError):
    """Fetching bulk data from Scryfall failed."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(FailureKind.DOWNLOAD_FAILED, message, detail)


class MissingDataError(ManabaseError):
    """A required input file or directory does not exist."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(FailureKind.MISSING_DATA, message, detail)
