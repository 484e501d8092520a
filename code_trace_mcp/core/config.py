"""Configuration file management utilities.

Loads .code-trace.yml. Loading is tolerant: a missing file means
defaults, an unreadable or invalid file is reported and also means defaults,
so a bad config never blocks a build.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from ..constants import CONFIG_FILENAME
from ..schemas.config import TraceConfig, validate_config
from .errors import warn


def load_config(project_path: Path) -> TraceConfig:
    """Load and validate .code-trace.yml, falling back to defaults."""
    config_path = project_path / CONFIG_FILENAME
    if not config_path.exists():
        return TraceConfig()

    try:
        with open(config_path, encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        warn(f"Failed to read {config_path}: {e}. Using defaults.")
        return TraceConfig()

    if data is not None and not isinstance(data, dict):
        warn(f"{config_path} must contain a mapping. Using defaults.")
        return TraceConfig()

    try:
        return validate_config(data)
    except ValidationError as e:
        warn(f"Invalid configuration in {config_path}: {e.error_count()} error(s). Using defaults.")
        return TraceConfig()

