"""goxsd: generate Go XML decoding structs from XSD schemas."""

__version__ = "0.1.0"

from .builder import TreeBuilder
from .config import Config
from .converter import Converter
from .registry import TypeRegistry

__all__ = ["Config", "Converter", "TreeBuilder", "TypeRegistry"]
