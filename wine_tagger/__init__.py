"""
Wine Auto-Tagger Modules
"""
from .config import Config
from .logger import setup_logger
from .errors import WineTaggerError, ConfigError, InventoryError
from .taxonomy import WineTaxonomy
from .auto_tagger import (
    WineTextInput,
    extract_flavor_tags,
    auto_tag_wine,
    sanitize_tags,
    format_tags_for_display,
    get_suggested_tags,
)
from .inventory_client import InventoryClient
from .csv_inventory import CsvInventory
from .batch_auto_tag import (
    BatchAutoTagger,
    BatchAutoTagResult,
    PreviewResult,
    TagPreview,
    batch_auto_tag_inventory,
    preview_auto_tags,
)

__all__ = [
    'Config',
    'setup_logger',
    'WineTaggerError',
    'ConfigError',
    'InventoryError',
    'WineTaxonomy',
    'WineTextInput',
    'extract_flavor_tags',
    'auto_tag_wine',
    'sanitize_tags',
    'format_tags_for_display',
    'get_suggested_tags',
    'InventoryClient',
    'CsvInventory',
    'BatchAutoTagger',
    'BatchAutoTagResult',
    'PreviewResult',
    'TagPreview',
    'batch_auto_tag_inventory',
    'preview_auto_tags',
]
