"""Rendering of element trees as Go source or JSON."""

import json
import re
from typing import Iterable, List, Sequence, Set, Tuple

from .logger import LogLevel, create_logger
from .tree import ElementNode

_WORD = re.compile(r"[0-9A-Za-z]+")

Field = Tuple[str, str, str]


def go_identifier(name: str, exported: bool) -> str:
    """Turn an XML name into a Go identifier: ``zip-code`` -> ``ZipCode``."""
    words = _WORD.findall(name)
    if not words:
        return "X" if exported else "x"

    ident = words[0] + "".join(word[:1].upper() + word[1:] for word in words[1:])
    if ident[0].isdigit():
        ident = "X" + ident if exported else "x" + ident
    head = ident[0].upper() if exported else ident[0].lower()
    return head + ident[1:]


class GoEmitter:
    """Emits one Go struct per distinct structural node.

    Root elements get an ``XMLName`` field, attributes become ``,attr``
    fields and the text of simple-content or mixed elements a ``,chardata``
    field. When two nodes share a name the first definition wins.
    """

    def __init__(
        self,
        package: str = "main",
        export: bool = False,
        prefix: str = "",
        log_level: LogLevel = LogLevel.INFO,
    ):
        self.package = package
        self.export = export
        self.prefix = prefix
        self.logger = create_logger(level=log_level, component="emitter")

    def type_name(self, name: str) -> str:
        return go_identifier(self.prefix + name, self.export)

    def emit(self, nodes: Sequence[ElementNode]) -> str:
        structs: List[str] = []
        seen: Set[str] = set()
        for node in nodes:
            self._collect(node, True, structs, seen)

        parts = [f"package {self.package}\n"]
        if structs:
            parts.append('import "encoding/xml"\n')
            parts.extend(structs)

        self.logger.info("Emitted Go structs", structs=len(structs))
        return "\n".join(parts)

    def _collect(self, node: ElementNode, root: bool, structs: List[str], seen: Set[str]) -> None:
        if not root and not node.is_structural:
            return

        name = self.type_name(node.name)
        if name in seen:
            self.logger.debug("Struct already emitted", typeName=name, elementName=node.name)
        else:
            seen.add(name)
            structs.append(self._render_struct(name, self._fields(node, root)))

        for child in node.children:
            if not child.is_cdata:
                self._collect(child, False, structs, seen)

    def _fields(self, node: ElementNode, root: bool) -> List[Field]:
        fields: List[Field] = []
        used: Set[str] = set()

        def add(field_name: str, go_type: str, tag: str) -> None:
            candidate, n = field_name, 1
            while candidate in used:
                n += 1
                candidate = f"{field_name}{n}"
            used.add(candidate)
            fields.append((candidate, go_type, f'`xml:"{tag}"`'))

        if root:
            add("XMLName", "xml.Name", node.name)

        for attribute in node.attributes:
            add(go_identifier(attribute.name, True), attribute.type, f"{attribute.name},attr")

        if root and not node.is_structural:
            add("Value", node.type, ",chardata")

        for child in node.children:
            if child.is_cdata:
                add("Value", child.type, ",chardata")
                continue
            go_type = self.type_name(child.name) if child.is_structural else child.type
            if child.is_list:
                go_type = "[]" + go_type
            add(go_identifier(child.name, True), go_type, child.name)

        if node.is_mixed and not any(child.is_cdata for child in node.children):
            add("Value", "string", ",chardata")

        return fields

    @staticmethod
    def _render_struct(name: str, fields: Iterable[Field]) -> str:
        fields = list(fields)
        if not fields:
            return f"type {name} struct{{}}\n"

        name_width = max(len(f[0]) for f in fields)
        type_width = max(len(f[1]) for f in fields)
        lines = [f"type {name} struct {{"]
        for field_name, go_type, tag in fields:
            lines.append(f"\t{field_name.ljust(name_width)} {go_type.ljust(type_width)} {tag}")
        lines.append("}")
        return "\n".join(lines) + "\n"


def dump_json(nodes: Sequence[ElementNode], pretty: bool = True) -> str:
    """Serialize element trees as a JSON array."""
    return json.dumps([node.to_dict() for node in nodes], indent=2 if pretty else None)
