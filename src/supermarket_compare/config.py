"""Configuration management for Supermarket Compare."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class CatalogConfig:
    """Catalog synthesis configuration."""

    seed: int | None = None
    promotion_probability: float = 0.2
    promotion_discount: float = 0.15
    promotion_days: int = 7
    unavailable_probability: float = 0.1


@dataclass
class HistoryConfig:
    """Price history synthesis configuration."""

    days: int = 30
    max_variation: float = 0.15
    promotion_probability: float = 0.1
    default_price: float = 5.0


@dataclass
class DeliveryConfig:
    """Third-party delivery simulation configuration."""

    third_party_probability: float = 0.7


@dataclass
class SearchConfig:
    """Store search configuration."""

    default_radius_km: float = 10.0


@dataclass
class Config:
    """Complete application configuration."""

    catalog: CatalogConfig
    history: HistoryConfig
    delivery: DeliveryConfig
    search: SearchConfig


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def catalog(self) -> CatalogConfig:
        """Get catalog configuration."""
        return self._config.catalog

    @property
    def history(self) -> HistoryConfig:
        """Get history configuration."""
        return self._config.history

    @property
    def delivery(self) -> DeliveryConfig:
        """Get delivery configuration."""
        return self._config.delivery

    @property
    def search(self) -> SearchConfig:
        """Get search configuration."""
        return self._config.search

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "config.toml",
            Path.home() / ".config" / "supermarket-compare" / "config.toml",
            Path.home() / ".supermarket-compare" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        # Return default location if none found
        return Path.home() / ".config" / "supermarket-compare" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            return self._default_config()

        with open(self.config_path, "rb") as f:
            data = tomllib.load(f)

        catalog = data.get("catalog", {})
        history = data.get("history", {})

        return Config(
            catalog=CatalogConfig(
                seed=catalog.get("seed"),
                promotion_probability=catalog.get("promotion_probability", 0.2),
                promotion_discount=catalog.get("promotion_discount", 0.15),
                promotion_days=catalog.get("promotion_days", 7),
                unavailable_probability=catalog.get("unavailable_probability", 0.1),
            ),
            history=HistoryConfig(
                days=history.get("days", 30),
                max_variation=history.get("max_variation", 0.15),
                promotion_probability=history.get("promotion_probability", 0.1),
                default_price=history.get("default_price", 5.0),
            ),
            delivery=DeliveryConfig(
                third_party_probability=data.get("delivery", {}).get(
                    "third_party_probability", 0.7
                ),
            ),
            search=SearchConfig(
                default_radius_km=data.get("search", {}).get("default_radius_km", 10.0),
            ),
        )

    def _default_config(self) -> Config:
        """Return default configuration."""
        return Config(
            catalog=CatalogConfig(),
            history=HistoryConfig(),
            delivery=DeliveryConfig(),
            search=SearchConfig(),
        )

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path.

        Args:
            key_path: Dot-separated path like 'catalog.seed'
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value: Any = self._config

        for key in keys:
            if hasattr(value, key):
                value = getattr(value, key)
            elif isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default
