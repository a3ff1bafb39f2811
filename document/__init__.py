"""Document module: configuration store, mutation API and persistence."""

from .configuration_store import ConfigurationStore
from .store import PhoenixDocumentStore
from .persistence import new_document, load_document, save_document

__all__ = [
    "ConfigurationStore",
    "PhoenixDocumentStore",
    "new_document",
    "load_document",
    "save_document",
]
