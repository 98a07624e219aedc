"""Loading scoring configuration from JSON files.

A config file only needs the fields it changes; everything else keeps the
defaults from ``orghealth.consts``. Nested mappings are merged key by key, so
``{"technical_weights": {"weights": {"performance": 0.3, "codeQuality": 0.15}}}``
adjusts two weights and keeps the other three.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from orghealth.consts import CONFIG_ENV_VAR
from orghealth.models.model_eval import ScoringConfig

logger = logging.getLogger(__name__)


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def config_from_dict(overrides: dict[str, Any]) -> ScoringConfig:
    """Build a config from partial overrides on top of the defaults.

    Raises:
        pydantic.ValidationError: If the merged config is invalid, e.g. weights
            that no longer sum to 1.0.
    """
    defaults = ScoringConfig().model_dump(mode="json")
    return ScoringConfig.model_validate(_merge(defaults, overrides))


def load_config(path: Path | str | None = None) -> ScoringConfig:
    """Load scoring configuration.

    Resolution order:
    1. ``path`` if given
    2. The file named by the ORGHEALTH_CONFIG environment variable
    3. Built-in defaults

    Args:
        path: Optional path to a JSON config file.

    Returns:
        Validated ScoringConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        json.JSONDecodeError: If the config file is not valid JSON.
        ValueError: If the file is not a JSON object.
        pydantic.ValidationError: If the resulting config is invalid.
    """
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR, "").strip()
        if not env_path:
            logger.debug("No config file given, using defaults")
            return ScoringConfig()
        path = env_path
        logger.debug(f"Using config from {CONFIG_ENV_VAR}: {path}")

    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")

    config = config_from_dict(data)
    logger.info(f"Loaded scoring config: {path}")
    return config
