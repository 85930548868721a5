"""
Storage Package

Storage protocol and the JSON file adapter.
"""

from .base import FormStore, StorageError
from .json_store import JsonFormStore

__all__ = ["FormStore", "StorageError", "JsonFormStore"]
