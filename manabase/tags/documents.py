"""
Raw tag rule documents.

Validates the untrusted mapping read from a configuration file before it
is compiled. Keys are kebab-case, unknown keys are rejected.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from manabase.models.card import Format, Legality
from manabase.models.tag import TagKind


class TagDocument(BaseModel):
    """One raw definition of a tag from one configuration source."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    type_regex: str | None = Field(default=None, alias="type")
    text_regex: str | None = Field(default=None, alias="text")
    name_regex: str | None = Field(default=None, alias="name")
    cmc: float | None = None
    color_identity: int | list[str] | str | None = Field(default=None, alias="color-identity")
    color_identity_len: int | None = Field(default=None, ge=0, le=5, alias="color-identity-len")
    names: list[str] | None = None
    card_face: int | None = Field(default=None, ge=0, alias="card-face")
    format: Format | None = None
    legality: Legality = Legality.LEGAL
    kind: TagKind = TagKind.OTHER
    alt_names: list[str] = Field(default_factory=list, alias="alt-names")
    subtags: list[str] = Field(default_factory=list)

    @field_validator("color_identity")
    @classmethod
    def _check_color_count(cls, value: int | list[str] | str | None) -> int | list[str] | str | None:
        if isinstance(value, int) and not 0 <= value <= 5:
            raise ValueError("color identity length must be between 0 and 5")
        return value

    @field_validator("format", mode="before")
    @classmethod
    def _strict_format(cls, value: object) -> object:
        # Format() maps unknown keys to OTHER for card data; config must name a real one
        if isinstance(value, str) and value not in {f.value for f in Format} - {"other"}:
            raise ValueError(f"unknown format '{value}'")
        return value
