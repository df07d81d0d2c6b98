"""Main converter class: XSD file to Go structs (or a JSON tree dump)."""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .builder import TreeBuilder
from .config import Config, OutputFormat
from .emitter import GoEmitter, dump_json
from .errors import GoxsdError
from .logger import create_logger
from .parser import XSDParser
from .registry import TypeRegistry
from .tree import ElementNode


@dataclass
class ConversionResult:
    """Result of an XSD conversion."""
    success: bool
    output: str
    output_file: Optional[Path]
    processing_time: float
    errors: List[str] = field(default_factory=list)
    statistics: Dict[str, int] = field(default_factory=dict)


class Converter:
    """Runs the load, register, build and emit steps for one input file."""

    def __init__(self, config: Config):
        self.config = config
        level = config.logging.level
        self.logger = create_logger(level=level, component="converter")

        self.parser = XSDParser(log_level=level)
        self.emitter = GoEmitter(
            package=config.package_name,
            export=config.export,
            prefix=config.prefix,
            log_level=level,
        )

        self.logger.info("Converter initialized", outputFormat=config.output_format)

    def convert(self) -> ConversionResult:
        """Convert the configured input file."""
        start_time = time.time()

        try:
            self.logger.info("Starting XSD conversion", inputFile=str(self.config.input_file))
            schemas = self.parser.parse(self.config.input_file)

            registry = TypeRegistry(schemas, log_level=self.config.logging.level)
            nodes = TreeBuilder(registry, log_level=self.config.logging.level).build()

            output = self.render(nodes)
            if self.config.output_file is not None:
                self.config.output_file.write_text(output, encoding="utf-8")
                self.logger.info("Wrote output file", outputFile=str(self.config.output_file))

            statistics = {
                "documents": len(schemas),
                "roots": len(nodes),
                "complexTypes": len(registry.complex_types),
                "simpleTypes": len(registry.simple_types),
                "nodes": sum(_count_nodes(node) for node in nodes),
            }
            processing_time = time.time() - start_time
            self.logger.stage_timing("conversion", processing_time, **statistics)

            return ConversionResult(
                success=True,
                output=output,
                output_file=self.config.output_file,
                processing_time=processing_time,
                statistics=statistics,
            )

        except (GoxsdError, OSError) as e:
            self.logger.error("Conversion failed", error=str(e), type=type(e).__name__)
            return ConversionResult(
                success=False,
                output="",
                output_file=None,
                processing_time=time.time() - start_time,
                errors=[f"Conversion failed: {e}"],
            )

    def render(self, nodes: List[ElementNode]) -> str:
        """Render element trees in the configured output format."""
        if self.config.output_format == OutputFormat.JSON:
            return dump_json(nodes, pretty=self.config.serializer.pretty) + "\n"
        return self.emitter.emit(nodes)


def _count_nodes(node: ElementNode) -> int:
    return 1 + sum(_count_nodes(child) for child in node.children)
