"""Name-keyed index of the declarations of all loaded schema documents."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from .logger import LogLevel, create_logger
from .schema_model import ComplexType, Element, Schema, SimpleType


PRIMITIVE_TYPES: Dict[str, str] = {
    "boolean": "bool",
    "language": "string",
    "dateTime": "string",
    "Name": "string",
    "token": "string",
    "long": "int",
    "short": "int",
    "integer": "int",
    "int": "int",
    "decimal": "float64",
}


@dataclass(frozen=True)
class PrimitiveName:
    """A built-in XSD type mapped to its output scalar name."""
    name: str


@dataclass(frozen=True)
class RawName:
    """A type name nothing is known about, passed through verbatim."""
    name: str


Resolved = Union[ComplexType, SimpleType, PrimitiveName, RawName]


def strip_namespace(name: str) -> str:
    """Drop the namespace prefix of a qualified name: ``xs:int`` -> ``int``."""
    return name.rsplit(":", 1)[-1]


def map_primitive(name: str) -> str:
    """Map an XSD primitive type name to the output scalar type.

    Names missing from the table are returned unchanged.
    """
    return PRIMITIVE_TYPES.get(name, name)


class TypeRegistry:
    """Complex types, simple types and top-level elements indexed by name.

    A registry is filled once by :meth:`register` and only read afterwards.
    Declarations sharing a name across documents override each other: the
    last one registered wins.
    """

    def __init__(self, schemas: Optional[Iterable[Schema]] = None, log_level: LogLevel = LogLevel.INFO):
        self.logger = create_logger(level=log_level, component="registry")
        self.complex_types: Dict[str, ComplexType] = {}
        self.simple_types: Dict[str, SimpleType] = {}
        self.elements: Dict[str, Element] = {}
        self.roots: List[Element] = []

        if schemas is not None:
            self.register(schemas)

    def register(self, schemas: Iterable[Schema]) -> "TypeRegistry":
        """Index every top-level declaration of ``schemas``."""
        for schema in schemas:
            for element in schema.elements:
                self.roots.append(element)
                self.elements[element.name] = element
            for complex_type in schema.complex_types:
                if complex_type.name in self.complex_types:
                    self.logger.declaration_override("complexType", complex_type.name, schema.source)
                self.complex_types[complex_type.name] = complex_type
            for simple_type in schema.simple_types:
                if simple_type.name in self.simple_types:
                    self.logger.declaration_override("simpleType", simple_type.name, schema.source)
                self.simple_types[simple_type.name] = simple_type

        self.logger.debug(
            "Registered declarations",
            roots=len(self.roots),
            complexTypes=len(self.complex_types),
            simpleTypes=len(self.simple_types),
        )
        return self

    def resolve(self, type_name: str) -> Resolved:
        """Resolve a type reference.

        Registered complex types take precedence over simple types, which
        take precedence over the primitive table. Anything else comes back
        as a :class:`RawName`; resolution never fails.
        """
        name = strip_namespace(type_name)
        if name in self.complex_types:
            return self.complex_types[name]
        if name in self.simple_types:
            return self.simple_types[name]
        if name in PRIMITIVE_TYPES:
            return PrimitiveName(PRIMITIVE_TYPES[name])
        return RawName(name)

    def lookup_element(self, name: str) -> Optional[Element]:
        """Return the top-level element called ``name`` (prefix ignored)."""
        return self.elements.get(strip_namespace(name))
