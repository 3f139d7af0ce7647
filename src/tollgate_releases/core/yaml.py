"""YAML configuration loading.

Provides safe YAML file loading using ``yaml.safe_load`` so that config
files can never instantiate arbitrary Python objects. Used by
[BaseService.from_yaml()][tollgate_releases.core.base_service.BaseService.from_yaml]
and the CLI to load the browser configuration.

Examples:
    ```python
    from tollgate_releases.core.yaml import load_yaml

    config = load_yaml("config/browser.yaml")
    config["subscription"]["relays"]
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    Args:
        config_path: Path to the YAML file (absolute or relative).

    Returns:
        Parsed configuration as a nested dictionary. Returns an empty dict
        if the file exists but contains no data.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file is not valid YAML or its top level
            is not a mapping.

    Warning:
        The structure of the returned dictionary is not validated here.
        Callers pass it to a Pydantic model such as
        [BrowserConfig][tollgate_releases.services.browser.configs.BrowserConfig].
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    return data
