"""Dataclass-based domain configuration pattern.

Each vertical defines its limits and defaults as a frozen dataclass:
- Type safety (IDE autocompletion, mypy checking)
- Default values (sensible out-of-the-box)
- Immutability (frozen=True prevents accidental mutation)
- Overrides from environment variables

Domain: the library catalog.
"""

import os
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationConfig:
    """Form validation limits."""

    max_name_length: int = 100


@dataclass(frozen=True)
class InventoryConfig:
    """Book copy settings."""

    statuses: tuple[str, ...] = ("Available", "Maintenance", "Loaned", "Reserved")
    default_status: str = "Maintenance"


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CatalogConfig:
    """Complete configuration for the catalog vertical.

    Usage::

        config = CatalogConfig.from_env()
        max_length(config.validation.max_name_length)
    """

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)

    @classmethod
    def default(cls) -> "CatalogConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "CATALOG_") -> "CatalogConfig":
        """Create config from environment variables.

        Example: CATALOG_MAX_NAME_LENGTH=120
        """
        validation = ValidationConfig()
        max_name = os.getenv(f"{prefix}MAX_NAME_LENGTH")
        if max_name:
            validation = ValidationConfig(max_name_length=int(max_name))

        inventory = InventoryConfig()
        default_status = os.getenv(f"{prefix}DEFAULT_STATUS")
        if default_status:
            if default_status not in inventory.statuses:
                raise ValueError(
                    f"{prefix}DEFAULT_STATUS must be one of {list(inventory.statuses)}"
                )
            inventory = InventoryConfig(default_status=default_status)

        return cls(validation=validation, inventory=inventory)
