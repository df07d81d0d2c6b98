"""Tree builder: turns root element declarations into typed element trees.

The builder walks every root element and recursively resolves its type
through the :class:`~goxsd.registry.TypeRegistry`. Complex types contribute
children and attributes, simple types collapse to a scalar type name, and
derivations are flattened into the node being built::

    registry = TypeRegistry(schemas)
    nodes = TreeBuilder(registry).build()

Unresolvable names never fail: they are carried through as raw type names.
Two conditions are fatal: an attribute typed by a complex type
(:class:`~goxsd.errors.AttributeTypeError`) and a named type that is
expanded again inside its own expansion (:class:`~goxsd.errors.TypeCycleError`).
"""

import dataclasses
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from .errors import AttributeTypeError, TypeCycleError
from .logger import LogLevel, create_logger
from .registry import TypeRegistry, strip_namespace
from .schema_model import (
    Attribute, ComplexContent, ComplexType, Element, SimpleContent, SimpleType,
)
from .tree import AttributeNode, ElementNode


class TreeBuilder:
    """Builds :class:`~goxsd.tree.ElementNode` trees from a registry."""

    def __init__(self, registry: TypeRegistry, log_level: LogLevel = LogLevel.INFO):
        self.registry = registry
        self.logger = create_logger(level=log_level, component="builder")
        self._path: List[str] = []

    def build(self, roots: Optional[Sequence[Element]] = None) -> List[ElementNode]:
        """Build one tree per root element, in declaration order.

        Defaults to the top-level elements of every registered document.
        """
        if roots is None:
            roots = self.registry.roots

        nodes = [self.build_from_element(element) for element in roots]
        self.logger.info("Built element trees", roots=len(nodes))
        return nodes

    def build_from_element(self, element: Element) -> ElementNode:
        """Build the node for ``element`` and, recursively, its descendants."""
        if element.ref:
            return self._build_from_ref(element)

        node = ElementNode(name=element.name, type=element.name, is_list=element.is_list)

        if element.has_named_type:
            resolved = self.registry.resolve(element.type_name)
            if isinstance(resolved, ComplexType):
                self.build_from_complex_type(node, resolved)
            elif isinstance(resolved, SimpleType):
                self.build_from_simple_type(node, resolved)
            else:
                self.logger.resolution_decision(element.type_name, type(resolved).__name__, elementName=element.name)
                node.set_scalar(resolved.name)
            return node

        if element.complex_type is not None:
            self.build_from_complex_type(node, element.complex_type)
        elif element.simple_type is not None:
            self.build_from_simple_type(node, element.simple_type)
        else:
            self.logger.debug("Element has no type", elementName=element.name)

        return node

    def build_from_complex_type(self, node: ElementNode, complex_type: ComplexType) -> None:
        """Merge the structure of ``complex_type`` into ``node``."""
        with self._expanding("complexType", complex_type.name):
            if complex_type.mixed:
                node.is_mixed = True

            for child in complex_type.sequence:
                node.children.append(self.build_from_element(child))

            self.build_from_attributes(node, complex_type.attributes)

            if complex_type.complex_content is not None:
                self.build_from_complex_content(node, complex_type.complex_content)

            if complex_type.simple_content is not None:
                self.build_from_simple_content(node, complex_type.simple_content)

    def build_from_complex_content(self, node: ElementNode, content: ComplexContent) -> None:
        """Flatten a complex content derivation into ``node``.

        An extension merges its base first, then adds its own children and
        attributes. A restriction restates the content model, so only its
        own children and attributes are used.
        """
        extension = content.extension
        if extension is not None:
            base = self.registry.resolve(extension.base)
            if isinstance(base, ComplexType):
                self.build_from_complex_type(node, base)
            else:
                self.logger.debug("Extension base is not a complex type", elementName=node.name, base=extension.base)

            for child in extension.sequence:
                node.children.append(self.build_from_element(child))
            self.build_from_attributes(node, extension.attributes)

        restriction = content.restriction
        if restriction is not None:
            for child in restriction.sequence:
                node.children.append(self.build_from_element(child))
            self.build_from_attributes(node, restriction.attributes)

    def build_from_simple_content(self, node: ElementNode, content: SimpleContent) -> None:
        """Handle text-only content, optionally carrying attributes.

        An extension keeps ``node`` structural: the attributes go on the node
        and the text becomes a single character-data child.
        """
        extension = content.extension
        if extension is not None:
            self.build_from_attributes(node, extension.attributes)

            base = self.registry.resolve(extension.base)
            if isinstance(base, ComplexType):
                self.build_from_complex_type(node, base)
            else:
                child = ElementNode(name=node.name, is_cdata=True)
                if isinstance(base, SimpleType):
                    self.build_from_simple_type(child, base)
                else:
                    child.set_scalar(base.name)
                node.children = [child]

        restriction = content.restriction
        if restriction is not None:
            base = self.registry.resolve(restriction.base)
            if isinstance(base, ComplexType):
                self.build_from_complex_type(node, base)
            elif isinstance(base, SimpleType):
                self.build_from_simple_type(node, base)
            else:
                node.set_scalar(base.name)

    def build_from_simple_type(self, node: ElementNode, simple_type: SimpleType) -> None:
        """Give ``node`` the scalar type ``simple_type`` restricts."""
        node.set_scalar(self._scalar_type(simple_type))

    def build_from_attributes(self, node: ElementNode, attributes: Sequence[Attribute]) -> None:
        """Append ``attributes`` to ``node`` with their scalar types."""
        for attribute in attributes:
            node.attributes.append(AttributeNode(attribute.name, self._attribute_type(node, attribute)))

    def _build_from_ref(self, element: Element) -> ElementNode:
        target = self.registry.lookup_element(element.ref)
        if target is None:
            name = strip_namespace(element.ref)
            self.logger.warn("Unresolved element reference", elementName=name, ref=element.ref)
            return ElementNode(name=name, type=name, is_list=element.is_list)

        # the occurrence belongs to the referencing particle
        local = dataclasses.replace(target, occurs=element.occurs)
        with self._expanding("element", target.name):
            return self.build_from_element(local)

    def _attribute_type(self, node: ElementNode, attribute: Attribute) -> str:
        # untyped attributes are xs:anySimpleType
        if not attribute.type_name:
            return "string"

        resolved = self.registry.resolve(attribute.type_name)
        if isinstance(resolved, ComplexType):
            raise AttributeTypeError(attribute.name, resolved.name, owner=node.name)
        if isinstance(resolved, SimpleType):
            base = self.registry.resolve(resolved.restriction_base)
            if isinstance(base, ComplexType):
                raise AttributeTypeError(attribute.name, base.name, owner=node.name)
            if isinstance(base, SimpleType):
                return self._scalar_type(base)
            return base.name
        return resolved.name

    def _scalar_type(self, simple_type: SimpleType) -> str:
        """Follow restriction bases down to a primitive or raw name."""
        with self._expanding("simpleType", simple_type.name):
            base = self.registry.resolve(simple_type.restriction_base)
            if isinstance(base, SimpleType):
                return self._scalar_type(base)
            if isinstance(base, ComplexType):
                # not a valid restriction, keep the name
                self.logger.warn("Simple type restricts a complex type", typeName=simple_type.name, base=base.name)
            return base.name

    @contextmanager
    def _expanding(self, kind: str, name: str) -> Iterator[None]:
        # anonymous types cannot be referenced again, so they cannot loop
        if not name:
            yield
            return

        key = f"{kind} {name}"
        if key in self._path:
            cycle = self._path[self._path.index(key):] + [key]
            self.logger.type_cycle(cycle)
            raise TypeCycleError(cycle)

        self._path.append(key)
        try:
            yield
        finally:
            self._path.pop()
