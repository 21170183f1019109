"""
I/O utilities for Europass CV.

Provides functions for:
- Loading CV config JSON files (validated before use)
- Saving CV configs collected interactively
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from .errors import ConfigurationError, ValidationError
from .model import CvConfig, validate_config

logger = logging.getLogger(__name__)


def load_cv_json(filepath: Path) -> Dict[str, Any]:
    """
    Load raw CV data from a JSON file.

    Raises:
        ConfigurationError: If the file doesn't exist or cannot be read.
        ValidationError: If the JSON is invalid.
    """
    if not filepath.exists():
        raise ConfigurationError(f"CV config file not found: {filepath}")

    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {filepath.name}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Error reading {filepath.name}: {e}")

    logger.debug(f"Loaded CV data from {filepath.name}")
    return data


def load_cv_config(filepath: Union[str, Path]) -> CvConfig:
    """
    Load and validate a CV config file.

    Raises:
        ConfigurationError: If the file cannot be read.
        ValidationError: If the JSON is invalid or personal.name is missing/blank.
    """
    filepath = Path(filepath)
    data = load_cv_json(filepath)
    if not validate_config(data):
        raise ValidationError(
            f'Invalid config {filepath.name}: "personal.name" is required and must be non-empty'
        )
    return CvConfig.from_dict(data)


def save_cv_config(config: CvConfig, filepath: Union[str, Path]) -> Path:
    """
    Write a CV config as pretty-printed JSON, creating parent directories.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    filepath = Path(filepath)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise ConfigurationError(f"Cannot write config {filepath}: {e}")

    logger.info(f"Config saved to {filepath.resolve()}")
    return filepath
