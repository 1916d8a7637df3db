"""
Exceptions raised by storage collaborators and configuration.

Only exceptions that cross a layer boundary live here: storage raises them,
the batch driver and CLI catch them.
"""
from typing import Optional


class WineTaggerError(Exception):
    """Base class for wine tagger errors."""


class ConfigError(WineTaggerError):
    """Raised when configuration is invalid."""


class InventoryError(WineTaggerError):
    """Raised when the inventory store cannot be read or updated."""

    def __init__(self, message: str, status_code: Optional[int] = None, record_id=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.record_id = record_id
