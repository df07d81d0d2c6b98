"""Output tree produced by the tree builder."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class AttributeNode:
    """An attribute of an output element, with its resolved scalar type."""
    name: str
    type: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type}


@dataclass
class ElementNode:
    """An element of the output tree.

    A node is either a leaf scalar, flagged by ``is_scalar`` and whose
    ``type`` is a scalar type name, or a structural node whose ``type``
    equals its ``name`` and which owns children and/or attributes. The
    shape is recorded rather than inferred from the names, since a scalar
    element may be called after its own type (``<date>`` of ``xs:date``).
    ``is_cdata`` marks the synthetic child that carries the text of a
    simple-content element, ``is_mixed`` a structural node whose own text is
    interleaved with its children.
    """
    name: str
    type: str = ""
    is_list: bool = False
    is_cdata: bool = False
    is_scalar: bool = False
    is_mixed: bool = False
    attributes: List[AttributeNode] = field(default_factory=list)
    children: List["ElementNode"] = field(default_factory=list)

    @property
    def is_structural(self) -> bool:
        return bool(self.children or self.attributes) or not self.is_scalar

    def set_scalar(self, type_name: str) -> None:
        """Make this node a leaf of scalar type ``type_name``."""
        self.type = type_name
        self.is_scalar = True

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form, used for the JSON dump."""
        return {
            "name": self.name,
            "type": self.type,
            "list": self.is_list,
            "cdata": self.is_cdata,
            "scalar": self.is_scalar,
            "mixed": self.is_mixed,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "children": [child.to_dict() for child in self.children],
        }
