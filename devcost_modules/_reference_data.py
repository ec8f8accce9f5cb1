"""
Reference data loading shared by the modules.

Static reference data (baseline statement, budget templates) ships as
YAML next to the module that owns it and is parsed with
``yaml.safe_load``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from devcost_kernel.logging_config import get_logger

logger = get_logger("modules.reference_data")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    logger.debug("reference_data_loaded", extra={
        "path": str(path),
        "keys": sorted(data.keys()),
    })
    return data
