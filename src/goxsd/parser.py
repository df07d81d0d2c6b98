"""XSD loader: reads schema documents into declaration records.

xmlschema does the loading: it parses the main document and follows its
``xs:include`` and ``xs:import`` directives. Declarations are then read
from the raw XSD tree of every loaded document so that type references
stay exactly as written and derivations are not pre-merged.
"""

from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union
from xml.etree.ElementTree import Element as XMLElement

import xmlschema

from .errors import SchemaLoadError
from .logger import LogLevel, create_logger
from .registry import strip_namespace
from .schema_model import (
    Attribute, AttributeUse, ComplexContent, ComplexType, Derivation, Element,
    ElementOccurrence, Schema, SimpleContent, SimpleType, SimpleTypeVariety,
)


XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"
XS = f"{{{XSD_NAMESPACE}}}"

# documents in these namespaces only declare built-ins
BUILTIN_NAMESPACES = {
    XSD_NAMESPACE,
    "http://www.w3.org/XML/1998/namespace",
    "http://www.w3.org/2001/XMLSchema-instance",
}

MODEL_GROUPS = {XS + "sequence", XS + "choice", XS + "all"}
ATTRIBUTE_USES = {XS + "attribute", XS + "attributeGroup"}


class XSDParser:
    """Loads an XSD file, and everything it pulls in, as :class:`Schema` records."""

    def __init__(self, log_level: LogLevel = LogLevel.INFO):
        self.logger = create_logger(level=log_level, component="parser")
        self._attribute_groups: Dict[str, XMLElement] = {}

    def parse(self, xsd_path: Union[str, Path]) -> List[Schema]:
        """Parse an XSD file and the documents it includes or imports."""
        xsd_path = Path(xsd_path)
        self.logger.info("Starting XSD parsing", xsdFile=str(xsd_path))

        if not xsd_path.exists():
            self.logger.error("XSD file does not exist", xsdFile=str(xsd_path))
            raise SchemaLoadError(str(xsd_path), "file does not exist")

        return self._load(str(xsd_path), str(xsd_path))

    def parse_string(self, xsd_text: str) -> List[Schema]:
        """Parse XSD source text. Relative imports cannot be followed."""
        return self._load(xsd_text, "<string>")

    def _load(self, source: str, label: str) -> List[Schema]:
        try:
            # lax: unresolved references are the builder's business
            xmlschema_obj = xmlschema.XMLSchema(source, validation="lax")
        except (xmlschema.XMLSchemaException, SyntaxError, OSError) as e:
            self.logger.error("XMLSchema parsing error", error=str(e), errorType=type(e).__name__)
            raise SchemaLoadError(label, str(e)) from e

        for error in xmlschema_obj.all_errors:
            self.logger.warn("Schema error tolerated", schema=label, error=getattr(error, "message", str(error)))

        documents = self._collect_documents(xmlschema_obj)
        self._index_attribute_groups(documents)
        schemas = [self._convert_document(document) for document in documents]
        self.logger.info(
            "Schema loading completed",
            documents=len(schemas),
            elements=sum(len(s.elements) for s in schemas),
            complexTypes=sum(len(s.complex_types) for s in schemas),
            simpleTypes=sum(len(s.simple_types) for s in schemas),
        )
        return schemas

    def _collect_documents(self, main: xmlschema.XMLSchema) -> List[xmlschema.XMLSchema]:
        """Main document first, then included and imported ones, depth first."""
        documents = []
        seen: Set[int] = set()

        def visit(document: Optional[xmlschema.XMLSchema]) -> None:
            if document is None or id(document) in seen:
                return
            seen.add(id(document))
            if document.target_namespace in BUILTIN_NAMESPACES:
                return

            documents.append(document)
            self.logger.schema_event("loaded", document.url or "<string>")
            for included in document.includes.values():
                visit(included)
            for imported in document.imports.values():
                visit(imported)

        visit(main)
        return documents

    def _index_attribute_groups(self, documents: List[xmlschema.XMLSchema]) -> None:
        """Named attribute groups of all documents; a later document overrides."""
        self._attribute_groups = {}
        for document in documents:
            for child in document.root.iterfind(XS + "attributeGroup"):
                name = child.get("name")
                if name:
                    self._attribute_groups[name] = child

    def _convert_document(self, document: xmlschema.XMLSchema) -> Schema:
        schema = Schema(target_namespace=document.target_namespace or None, source=document.url)

        for child in document.root:
            if child.tag == XS + "element":
                schema.add_element(self._read_element(child))
            elif child.tag == XS + "complexType":
                schema.add_complex_type(self._read_complex_type(child))
            elif child.tag == XS + "simpleType":
                schema.add_simple_type(self._read_simple_type(child))

        return schema

    def _read_element(self, node: XMLElement, repeated: bool = False) -> Element:
        ref = node.get("ref", "")
        occurs = ElementOccurrence(int(node.get("minOccurs", "1")), self._max_occurs(node.get("maxOccurs", "1")))
        if repeated and not occurs.is_array:
            occurs = ElementOccurrence(occurs.min, "unbounded")

        element = Element(
            name=node.get("name") or strip_namespace(ref),
            type_name=node.get("type", ""),
            occurs=occurs,
            ref=ref,
        )

        complex_type = node.find(XS + "complexType")
        if complex_type is not None:
            element.complex_type = self._read_complex_type(complex_type)

        simple_type = node.find(XS + "simpleType")
        if simple_type is not None:
            element.simple_type = self._read_simple_type(simple_type)

        return element

    def _read_particles(self, group: XMLElement, repeated: bool = False) -> List[Element]:
        """Flatten a model group into its element particles, in order.

        Elements of a group that may repeat are themselves repeated.
        """
        repeated = repeated or ElementOccurrence(1, self._max_occurs(group.get("maxOccurs", "1"))).is_array
        elements = []

        for child in group:
            if child.tag == XS + "element":
                elements.append(self._read_element(child, repeated))
            elif child.tag in MODEL_GROUPS:
                elements.extend(self._read_particles(child, repeated))
            elif child.tag == XS + "group":
                self.logger.skipped_construct("group", "model group references are not expanded", ref=child.get("ref"))
            elif child.tag == XS + "any":
                self.logger.skipped_construct("any", "wildcard particle")

        return elements

    def _read_complex_type(self, node: XMLElement) -> ComplexType:
        complex_type = ComplexType(name=node.get("name", ""), mixed=node.get("mixed") == "true")

        for child in node:
            if child.tag in MODEL_GROUPS:
                complex_type.sequence.extend(self._read_particles(child))
            elif child.tag in ATTRIBUTE_USES:
                complex_type.attributes.extend(self._attribute_uses(child))
            elif child.tag == XS + "complexContent":
                if child.get("mixed") == "true":
                    complex_type.mixed = True
                complex_type.complex_content = ComplexContent(
                    extension=self._read_derivation(child.find(XS + "extension")),
                    restriction=self._read_derivation(child.find(XS + "restriction")),
                )
            elif child.tag == XS + "simpleContent":
                complex_type.simple_content = SimpleContent(
                    extension=self._read_derivation(child.find(XS + "extension")),
                    restriction=self._read_derivation(child.find(XS + "restriction")),
                )

        return complex_type

    def _read_derivation(self, node: Optional[XMLElement]) -> Optional[Derivation]:
        if node is None:
            return None

        derivation = Derivation(base=node.get("base", ""))
        for child in node:
            if child.tag in MODEL_GROUPS:
                derivation.sequence.extend(self._read_particles(child))
            elif child.tag in ATTRIBUTE_USES:
                derivation.attributes.extend(self._attribute_uses(child))
        return derivation

    def _attribute_uses(self, node: XMLElement, active: Tuple[str, ...] = ()) -> List[Attribute]:
        """Attributes declared by ``node``, with attribute group references expanded in place."""
        if node.tag == XS + "attribute":
            return [self._read_attribute(node)]

        ref = node.get("ref", "")
        name = strip_namespace(ref)
        group = self._attribute_groups.get(name)
        if group is None:
            self.logger.warn("Unresolved attribute group", construct="attributeGroup", ref=ref)
            return []
        if name in active:
            self.logger.warn("Circular attribute group", construct="attributeGroup", path=[*active, name])
            return []

        attributes = []
        for child in group:
            if child.tag in ATTRIBUTE_USES:
                attributes.extend(self._attribute_uses(child, active + (name,)))
        return attributes

    def _read_attribute(self, node: XMLElement) -> Attribute:
        type_name = node.get("type", "")
        if not type_name:
            inline = node.find(XS + "simpleType")
            if inline is not None:
                type_name = self._read_simple_type(inline).restriction_base

        try:
            use = AttributeUse(node.get("use", "optional"))
        except ValueError:
            use = AttributeUse.OPTIONAL

        return Attribute(
            name=node.get("name") or strip_namespace(node.get("ref", "")),
            type_name=type_name,
            use=use,
        )

    def _read_simple_type(self, node: XMLElement) -> SimpleType:
        simple_type = SimpleType(name=node.get("name", ""))

        restriction = node.find(XS + "restriction")
        if restriction is not None:
            base = restriction.get("base", "")
            inline = restriction.find(XS + "simpleType")
            if not base and inline is not None:
                base = self._read_simple_type(inline).restriction_base
            simple_type.restriction_base = base
        elif node.find(XS + "list") is not None:
            # list and union values are decoded as their lexical form
            simple_type.variety = SimpleTypeVariety.LIST
            simple_type.restriction_base = "string"
        elif node.find(XS + "union") is not None:
            simple_type.variety = SimpleTypeVariety.UNION
            simple_type.restriction_base = "string"

        return simple_type

    @staticmethod
    def _max_occurs(value: str) -> Union[int, str]:
        return value if value == "unbounded" else int(value)
