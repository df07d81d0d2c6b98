"""Declaration records read from XSD documents.

These objects mirror the raw declarations of a schema document: type
references are kept as the strings written in the document (for example
``"xs:string"`` or ``"tns:AddressType"``) and are only resolved later by
the :class:`~goxsd.registry.TypeRegistry`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class ElementOccurrence:
    """Represents minOccurs/maxOccurs for elements."""

    def __init__(self, min_occurs: int = 1, max_occurs: Union[int, str] = 1):
        self.min = max(0, int(min_occurs))
        self.max = max_occurs if max_occurs == "unbounded" else max(0, int(max_occurs))

    @property
    def is_array(self) -> bool:
        """Whether element can occur multiple times."""
        return self.max == "unbounded" or self.max > 1

    def __eq__(self, other) -> bool:
        if not isinstance(other, ElementOccurrence):
            return NotImplemented
        return (self.min, self.max) == (other.min, other.max)

    def __str__(self) -> str:
        return f"[{self.min}..{self.max}]"

    def __repr__(self) -> str:
        return f"ElementOccurrence({self.min!r}, {self.max!r})"


class AttributeUse(str, Enum):
    """Attribute usage types."""
    REQUIRED = "required"
    OPTIONAL = "optional"
    PROHIBITED = "prohibited"


class SimpleTypeVariety(str, Enum):
    """Simple type varieties."""
    ATOMIC = "atomic"
    LIST = "list"
    UNION = "union"


@dataclass
class Attribute:
    """XSD attribute declaration."""
    name: str
    type_name: str = ""
    use: AttributeUse = AttributeUse.OPTIONAL


@dataclass
class Derivation:
    """Extension or restriction of a base type.

    ``sequence`` is only populated for complex content; simple content
    derivations carry a base and attributes.
    """
    base: str
    sequence: List["Element"] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)


@dataclass
class ComplexContent:
    """xs:complexContent with either an extension or a restriction."""
    extension: Optional[Derivation] = None
    restriction: Optional[Derivation] = None


@dataclass
class SimpleContent:
    """xs:simpleContent with either an extension or a restriction."""
    extension: Optional[Derivation] = None
    restriction: Optional[Derivation] = None


@dataclass
class SimpleType:
    """XSD simple type, reduced to the base it restricts."""
    name: str
    restriction_base: str = ""
    variety: SimpleTypeVariety = SimpleTypeVariety.ATOMIC


@dataclass
class ComplexType:
    """XSD complex type declaration."""
    name: str
    sequence: List["Element"] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)
    complex_content: Optional[ComplexContent] = None
    simple_content: Optional[SimpleContent] = None
    mixed: bool = False


@dataclass
class Element:
    """XSD element declaration.

    ``type_name`` is empty when the type is declared inline or not at all.
    ``ref`` names a top-level element this declaration stands in for.
    """
    name: str
    type_name: str = ""
    occurs: ElementOccurrence = field(default_factory=ElementOccurrence)
    complex_type: Optional[ComplexType] = None
    simple_type: Optional[SimpleType] = None
    ref: str = ""

    @property
    def is_list(self) -> bool:
        return self.occurs.is_array

    @property
    def has_named_type(self) -> bool:
        return bool(self.type_name)


class Schema:
    """Declarations of one schema document, in document order."""

    def __init__(self, target_namespace: Optional[str] = None, source: Optional[str] = None):
        self.target_namespace = target_namespace
        self.source = source
        self.elements: List[Element] = []
        self.complex_types: List[ComplexType] = []
        self.simple_types: List[SimpleType] = []

    def add_element(self, element: Element) -> None:
        self.elements.append(element)

    def add_complex_type(self, complex_type: ComplexType) -> None:
        self.complex_types.append(complex_type)

    def add_simple_type(self, simple_type: SimpleType) -> None:
        self.simple_types.append(simple_type)

    def __repr__(self) -> str:
        return (
            f"Schema(target_namespace={self.target_namespace!r}, source={self.source!r}, "
            f"elements={len(self.elements)}, complex_types={len(self.complex_types)}, "
            f"simple_types={len(self.simple_types)})"
        )
