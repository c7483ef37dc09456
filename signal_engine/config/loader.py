"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from ..logging.config import get_logger
from .defaults import DefaultConfig, get_default_config
from .validation import ConfigValidator

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_market_config(self, market_id: str) -> dict[str, Any]:
        """Load market-specific configuration overrides."""
        markets_file = self.config_dir / "markets.yaml"

        if not markets_file.exists():
            return {}

        with open(markets_file) as f:
            markets_config = yaml.safe_load(f) or {}

        return markets_config.get("markets", {}).get(market_id, {}) or {}

    def merge_config(
        self,
        market_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Market-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        market_config = self.load_market_config(market_id)
        config = self._deep_merge(config, market_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        market_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Load a validated, typed configuration for one market.

        Raises:
            ConfigurationError: If the merged configuration fails validation
        """
        merged = self.merge_config(market_id, overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value!r})" for err in errors]
            logger.error("Configuration validation failed", market_id=market_id, errors=error_msgs)
            raise ConfigurationError(
                f"Invalid configuration for market {market_id}: {'; '.join(error_msgs)}",
                errors=errors,
            )

        logger.debug("Configuration loaded", market_id=market_id)
        return build_config(merged)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def build_config(merged: dict[str, Any]) -> DefaultConfig:
    """
    Rebuild a typed DefaultConfig from a merged configuration dictionary.

    Sections absent from the dictionary keep their defaults. YAML lists are
    converted back to tuples for tuple-typed parameters.
    """
    defaults = get_default_config()
    sections = {}

    for section in fields(DefaultConfig):
        default_section = getattr(defaults, section.name)
        values = dict(merged.get(section.name, {}))
        for key, value in values.items():
            if isinstance(value, list):
                values[key] = tuple(value)
        sections[section.name] = replace(default_section, **values)

    return DefaultConfig(**sections)
