"""Catalog vertical configuration.

Loads the CatalogConfig from the environment once at import time.
"""

from patterns.domain_config import CatalogConfig

config = CatalogConfig.from_env()
