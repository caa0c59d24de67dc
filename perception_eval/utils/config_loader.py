"""
Scenario and frame file loading utilities.

Scenario files are YAML mappings. A string value of the form
``"!include other.yaml"`` is replaced by the content of that file, resolved
against the directory of the file that includes it, so a threshold block
shared by several scenarios can live in its own file. Includes may nest and
may appear inside lists (e.g. one entry of ``Evaluation.Datasets``).
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

INCLUDE_PREFIX = "!include "


class ConfigLoader:
    """Load YAML scenario files with ``!include`` support."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory relative scenario paths are resolved against.
        """
        self.config_dir = Path(config_dir) if config_dir else Path("configs")

    def resolve(self, config_path: Union[str, Path]) -> Path:
        """Use ``config_path`` as given when it exists, else look in ``config_dir``."""
        config_path = Path(config_path)
        if config_path.is_absolute() or config_path.exists():
            return config_path
        return self.config_dir / config_path

    def load(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a YAML mapping and expand its includes.

        Args:
            config_path: Path to the file.

        Returns:
            Parsed mapping.

        Raises:
            FileNotFoundError: The file or one of its includes is missing.
            ValueError: The file is not a mapping, or includes form a cycle.
        """
        path = self.resolve(config_path)

        config = _read_yaml(path)
        if not isinstance(config, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

        return self._expand(config, path.parent, (path.resolve(),))

    def _expand(self, value: Any, base_dir: Path, chain: Tuple[Path, ...]) -> Any:
        """Replace include strings anywhere below ``value``."""
        if isinstance(value, dict):
            return {key: self._expand(item, base_dir, chain) for key, item in value.items()}

        if isinstance(value, list):
            return [self._expand(item, base_dir, chain) for item in value]

        if isinstance(value, str) and value.startswith(INCLUDE_PREFIX):
            include_path = base_dir / value[len(INCLUDE_PREFIX):].strip()
            if include_path.resolve() in chain:
                raise ValueError(f"Include cycle: {' -> '.join(str(p) for p in chain)} -> {include_path}")
            included = _read_yaml(include_path)
            return self._expand(included, include_path.parent, chain + (include_path.resolve(),))

        return value

    def merge(
        self,
        base: Dict[str, Any],
        override: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Deep merge two mappings.

        Nested mappings are merged key by key. Anything else in ``override``,
        lists included, replaces the base value.

        Args:
            base: Base mapping.
            override: Values that take precedence.

        Returns:
            Merged mapping.
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.merge(result[key], value)
            else:
                result[key] = value

        return result


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        return yaml.safe_load(f)


def load_config(
    config_path: Union[str, Path],
    overrides: Optional[Dict[str, Any]] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Load a scenario file and merge ``overrides`` over it.

    Args:
        config_path: Path to the file.
        overrides: Optional values merged over the file content.
        config_dir: Directory relative paths are resolved against.

    Returns:
        Parsed mapping.
    """
    loader = ConfigLoader(config_dir)
    config = loader.load(config_path)

    if overrides:
        config = loader.merge(config, overrides)

    return config


def get_nested(
    config: Dict[str, Any],
    key: str,
    default: Any = None,
) -> Any:
    """
    Get a nested value using dot notation.

    Args:
        config: Parsed mapping.
        key: Dot-separated key (e.g. ``'Evaluation.Datasets'``).
        default: Value returned when the key is missing.

    Returns:
        Value or default.
    """
    value = config

    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value
