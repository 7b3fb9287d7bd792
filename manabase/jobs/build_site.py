"""
Build the classified card site.

Loads the tag configuration, loads (or downloads) the card catalog,
classifies every card and writes the page models.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from manabase.classify.engine import TaggedCardDb
from manabase.config import Settings, settings
from manabase.models.failure import ManabaseError
from manabase.models.tag import CategoryRules
from manabase.parsers.scryfall import download_bulk_data, get_bulk_data_url, load_cards
from manabase.render.pages import write_output
from manabase.services.config_loader import load_overrides, load_tags
from manabase.services.overrides import find_missing_cards

logger = logging.getLogger(__name__)

BULK_DATA_FILENAME = "oracle-cards.json"


@dataclass
class BuildResult:
    """Summary of one build."""

    tag_count: int
    card_count: int
    retained_count: int
    pages: list[Path]
    missing_overrides: list[str]


def _resolve_data_path(config: Settings) -> Path:
    if config.data_path is not None:
        logger.info("Loading Scryfall bulk card data from %s", config.data_path)
        return config.data_path

    path = config.output_dir.parent / BULK_DATA_FILENAME
    download_bulk_data(path, get_bulk_data_url(config.bulk_data_api))
    return path


def run_build(config: Settings = settings) -> BuildResult:
    """
    Run one full classification build.

    Configuration is loaded and validated before the catalog is read, so a
    bad tag file fails fast.

    Raises:
        ManabaseError: On invalid configuration, bad card data, missing input or a failed download
    """
    rules = CategoryRules.default()

    logger.info("Loading config files from %s", config.config_dir)
    tag_index = load_tags(config.config_dir, rules)
    overrides = load_overrides(config.config_dir)

    cards = load_cards(_resolve_data_path(config))
    missing = find_missing_cards(overrides, cards)

    logger.info("Tagging cards")
    db = TaggedCardDb.build(tag_index, cards, rules, overrides, workers=config.workers)

    logger.info("Creating pages in %s", config.output_dir)
    pages = write_output(db, config.output_dir)

    logger.info("Complete")
    return BuildResult(
        tag_count=len(tag_index),
        card_count=len(cards),
        retained_count=len(db),
        pages=pages,
        missing_overrides=missing,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify Scryfall cards into tag pages")
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=settings.output_dir,
        help=f"Output directory (default: {settings.output_dir})",
    )
    parser.add_argument(
        "-d",
        "--data",
        type=Path,
        default=settings.data_path,
        help="Local Scryfall bulk data file (default: download)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=settings.config_dir,
        help=f"Tag config directory (default: {settings.config_dir})",
    )
    parser.add_argument(
        "-j",
        "--workers",
        type=int,
        default=settings.workers,
        help="Classification threads (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
    args = parse_args(argv)
    config = settings.model_copy(
        update={
            "output_dir": args.output,
            "data_path": args.data,
            "config_dir": args.config,
            "workers": max(1, args.workers),
        }
    )

    try:
        result = run_build(config)
    except ManabaseError as e:
        logger.error("Build failed: %s", e)
        return 1

    logger.info(
        "Wrote %d pages for %d of %d cards",
        len(result.pages),
        result.retained_count,
        result.card_count,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
