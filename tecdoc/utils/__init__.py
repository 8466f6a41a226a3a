"""
Utility modules for the catalog client
"""
from .config_loader import CatalogConfig, TransportConfig, load_catalog_config

__all__ = [
    'CatalogConfig',
    'TransportConfig',
    'load_catalog_config',
]
