"""
Configuration directory loader.

Reads one TOML file of tag definitions per category plus the optional
manual override list. All files are read before compilation starts.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

from manabase.models.failure import FailureKind, ManabaseError, MissingDataError
from manabase.models.tag import Category, CategoryRules
from manabase.services.overrides import CategoryOverrides, parse_overrides
from manabase.tags.compiler import TagSource, compile_tags
from manabase.tags.index import TagIndex

logger = logging.getLogger(__name__)

# Tag definition file per category, loaded in this order
CATEGORY_FILES: dict[Category, str] = {
    Category.LANDS: "lands.toml",
    Category.ROCKS: "rocks.toml",
    Category.DORKS: "dorks.toml",
    Category.RAMP: "ramp.toml",
}

OVERRIDES_FILE = "categories.toml"


def read_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file.

    Raises:
        ManabaseError: If the file is not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ManabaseError(FailureKind.MALFORMED_CONFIG, f"Invalid TOML in {path}", str(e)) from e


def load_tag_sources(config_dir: Path) -> list[TagSource]:
    """
    Read every category file present in config_dir.

    Missing category files are skipped.
    """
    sources: list[TagSource] = []
    for category, filename in CATEGORY_FILES.items():
        path = config_dir / filename
        if not path.exists():
            logger.debug("No %s tags config file at %s", category.value, path)
            continue
        logger.debug("Loading %s tags config file", category.value)
        sources.append(TagSource(category=category, documents=read_toml(path), origin=str(path)))
    return sources


def load_tags(config_dir: Path, rules: CategoryRules | None = None) -> TagIndex:
    """
    Load and compile every tag definition in config_dir.

    Raises:
        MissingDataError: If config_dir does not exist
        ManabaseError: On any malformed file or tag definition
    """
    if not config_dir.is_dir():
        raise MissingDataError(f"Config directory not found: {config_dir}")

    sources = load_tag_sources(config_dir)
    if not sources:
        logger.warning("No tag config files found in %s", config_dir)
    return compile_tags(sources, rules)


def load_overrides(config_dir: Path) -> CategoryOverrides:
    """Load the manual override list, or an empty mapping if there is none."""
    path = config_dir / OVERRIDES_FILE
    if not path.exists():
        return {}
    overrides = parse_overrides(read_toml(path))
    logger.info("Loaded %d category overrides", len(overrides))
    return overrides
