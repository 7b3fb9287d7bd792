from manabase.parsers.scryfall import (
    download_bulk_data,
    get_bulk_data_url,
    load_cards,
    parse_card,
    parse_cards,
)

__all__ = [
    "download_bulk_data",
    "get_bulk_data_url",
    "load_cards",
    "parse_card",
    "parse_cards",
]
