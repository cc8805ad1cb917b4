"""Core business logic for kvshort."""

from .slug import SlugGenerator
from .service import RecordStore

__version__ = "1.0.0"

__all__ = ["SlugGenerator", "RecordStore"]
