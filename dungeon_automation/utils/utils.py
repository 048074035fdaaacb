import logging
from pathlib import Path
from typing import Any

import yaml

LOGGER = logging.getLogger(__name__)


def dedupe_preserving_order(names: list[str]) -> list[str]:
    return list(dict.fromkeys(names))


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    with file_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    LOGGER.info("Loaded YAML file: %s", str(file_path))
    return data if data is not None else {}
