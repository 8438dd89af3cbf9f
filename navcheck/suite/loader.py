"""Script discovery — finds navigation test scripts with a complete manifest."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from navcheck.models.config import TestConfig

logger = logging.getLogger(__name__)

# Keys every script must declare to be picked up by a suite run
MANIFEST_KEYS = ("script_id", "name", "description")


def load_script(path: Path) -> Optional[TestConfig]:
    """Parse a script file, returning None if it is not a valid test script."""
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.debug("Skipping %s: not a JSON object", path)
        return None

    missing = [key for key in MANIFEST_KEYS if key not in data]
    if missing:
        logger.info("Incomplete manifest in %s (missing %s)", path, ", ".join(missing))
        return None

    try:
        return TestConfig(**data)
    except ValidationError as e:
        logger.warning("Invalid script %s: %s", path, e)
        return None


def discover_scripts(folder: str | Path) -> list[TestConfig]:
    """Walk ``folder`` and return every valid script, in path order."""
    folder = Path(folder)
    if not folder.is_dir():
        raise FileNotFoundError(f"Script folder not found: {folder}")

    scripts = []
    for path in sorted(folder.rglob("*")):
        if path.is_dir() or path.suffix.lower() != ".json":
            continue
        config = load_script(path)
        if config is not None:
            logger.info("Adding valid test script: %s", config.name or config.script_id)
            scripts.append(config)

    logger.debug("Discovered %d scripts in %s", len(scripts), folder)
    return scripts
