"""Config package exporting loader helpers."""

from .loader import LedgerConfig, Settings, StoreConfig, load_settings

__all__ = ["LedgerConfig", "Settings", "StoreConfig", "load_settings"]
