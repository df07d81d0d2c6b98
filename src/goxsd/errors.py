"""Exception types raised by goxsd."""

from typing import List, Optional


class GoxsdError(Exception):
    """Base class for all goxsd errors."""


class SchemaLoadError(GoxsdError):
    """An XSD document could not be loaded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load schema {source}: {reason}")


class AttributeTypeError(GoxsdError):
    """An attribute is typed by a complex type.

    Attributes always carry scalar values, so this is a malformed schema
    rather than something the builder can degrade around.
    """

    def __init__(self, attribute: str, type_name: str, owner: Optional[str] = None):
        self.attribute = attribute
        self.type_name = type_name
        self.owner = owner
        where = f" on {owner}" if owner else ""
        super().__init__(
            f"Attribute {attribute}{where} is typed by complex type {type_name}"
        )


class TypeCycleError(GoxsdError):
    """A named type is expanded again while already being expanded."""

    def __init__(self, path: List[str]):
        self.path = list(path)
        super().__init__("Recursive type expansion: " + " -> ".join(self.path))
