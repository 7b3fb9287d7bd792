"""
Scryfall bulk data loader.

Downloads Scryfall's oracle-cards bulk data and parses it into Card
records. The whole catalog is materialized in memory before any
classification happens.

Bulk data: https://scryfall.com/docs/api/bulk-data
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx

from manabase.models.card import Card, CardFace, Format, Legality, SetType
from manabase.models.color import Color
from manabase.models.failure import CatalogError, DownloadError, MissingDataError

logger = logging.getLogger(__name__)

SCRYFALL_BULK_API = "https://api.scryfall.com/bulk-data"

# Bulk data entry with one record per oracle card
BULK_DATA_TYPE = "oracle_cards"

USER_AGENT = "manabase/1.0"


def get_bulk_data_url(bulk_api_url: str = SCRYFALL_BULK_API) -> str:
    """
    Fetch the download URL for Scryfall's oracle-cards bulk data.

    Raises:
        DownloadError: If the API request fails or has no oracle_cards entry
    """
    try:
        response = httpx.get(bulk_api_url, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise DownloadError(
            "Failed to fetch bulk data index", f"HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise DownloadError("Failed to fetch bulk data index", str(e)) from e

    for entry in data.get("data", []):
        if entry.get("type") == BULK_DATA_TYPE:
            return str(entry["download_uri"])

    raise DownloadError(f"Could not find {BULK_DATA_TYPE} bulk data URL")


def download_bulk_data(output_path: Path, url: str | None = None) -> Path:
    """
    Download Scryfall bulk data to a file.

    Args:
        output_path: Where to save the JSON file
        url: Direct download URL. Looked up from the bulk data API if omitted

    Returns:
        output_path

    Raises:
        DownloadError: If the download fails
    """
    url = url or get_bulk_data_url()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading Scryfall bulk data from %s", url)

    # Stream download due to file size
    try:
        with httpx.stream(
            "GET",
            url,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            timeout=300.0,
        ) as response:
            response.raise_for_status()
            with open(output_path, "wb") as f:
                for chunk in response.iter_bytes(chunk_size=8192):
                    f.write(chunk)
    except httpx.HTTPStatusError as e:
        raise DownloadError(
            f"Failed to download {url}", f"HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise DownloadError(f"Failed to download {url}", str(e)) from e

    return output_path


def _parse_face(raw: dict[str, Any]) -> CardFace:
    return CardFace(
        name=raw["name"],
        type_line=raw.get("type_line"),
        oracle_text=raw.get("oracle_text"),
        image_uris=raw.get("image_uris"),
    )


def _parse_legalities(raw: dict[str, str] | None) -> dict[Format, Legality]:
    legalities: dict[Format, Legality] = {}
    for format_name, status in (raw or {}).items():
        format = Format(format_name)
        if format is Format.OTHER:
            continue
        legalities[format] = Legality(status)
    return legalities


def parse_card(raw: dict[str, Any]) -> Card:
    """
    Build a Card from one Scryfall card object.

    Raises:
        CatalogError: If a required field is missing or a value is invalid
    """
    card_id = raw.get("id", "<no id>") if isinstance(raw, dict) else "<not an object>"
    try:
        return Card(
            id=raw["id"],
            name=raw["name"],
            cmc=float(raw.get("cmc", 0.0)),
            color_identity=Color.parse(raw.get("color_identity", [])),
            type_line=raw.get("type_line"),
            oracle_text=raw.get("oracle_text"),
            card_faces=tuple(_parse_face(face) for face in raw.get("card_faces") or ()),
            image_uris=raw.get("image_uris"),
            legalities=_parse_legalities(raw.get("legalities")),
            set_type=SetType(raw.get("set_type", "other")),
            scryfall_uri=raw.get("scryfall_uri", ""),
        )
    except KeyError as e:
        raise CatalogError(f"Card {card_id} is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Card {card_id} has an invalid value", str(e)) from e


def parse_cards(records: Iterable[dict[str, Any]]) -> tuple[Card, ...]:
    return tuple(parse_card(record) for record in records)


def load_cards(bulk_data_path: Path) -> tuple[Card, ...]:
    """
    Load the card catalog from a downloaded bulk data file.

    Args:
        bulk_data_path: Path to Scryfall bulk JSON

    Returns:
        Cards in file order

    Raises:
        MissingDataError: If the file does not exist
        CatalogError: If the file is not a JSON list of card objects
    """
    if not bulk_data_path.is_file():
        raise MissingDataError(f"Card data file not found: {bulk_data_path}")

    with open(bulk_data_path, encoding="utf-8") as f:
        try:
            records = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in {bulk_data_path}", str(e)) from e

    if not isinstance(records, list):
        raise CatalogError(
            f"Expected a list of cards in {bulk_data_path}, got {type(records).__name__}"
        )

    cards = parse_cards(records)
    logger.info("Loaded %d cards from %s", len(cards), bulk_data_path)
    return cards
