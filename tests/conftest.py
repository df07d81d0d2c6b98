"""Pytest configuration and fixtures for goxsd tests."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from goxsd.config import Config
from goxsd.logger import LogLevel
from goxsd.registry import TypeRegistry
from goxsd.schema_model import ComplexType, Element, Schema, SimpleType


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def address_xsd_content() -> str:
    """XSD with a named simple type, a named complex type and one root."""
    return '''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://example.com/address"
           xmlns:tns="http://example.com/address"
           elementFormDefault="qualified">

    <xs:simpleType name="ZipCode">
        <xs:restriction base="xs:token">
            <xs:pattern value="[0-9]{5}"/>
        </xs:restriction>
    </xs:simpleType>

    <xs:complexType name="Address">
        <xs:sequence>
            <xs:element name="Street" type="xs:string"/>
            <xs:element name="Zip" type="tns:ZipCode"/>
            <xs:element name="Note" type="xs:string" minOccurs="0" maxOccurs="unbounded"/>
        </xs:sequence>
        <xs:attribute name="id" type="xs:int" use="required"/>
    </xs:complexType>

    <xs:element name="Address" type="tns:Address"/>

</xs:schema>'''


@pytest.fixture
def address_xsd_file(temp_dir: Path, address_xsd_content: str) -> Path:
    """Create the address XSD file for testing."""
    xsd_file = temp_dir / "address.xsd"
    xsd_file.write_text(address_xsd_content, encoding='utf-8')
    return xsd_file


@pytest.fixture
def derived_xsd_content() -> str:
    """XSD exercising extension, simple content and inline types."""
    return '''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://example.com/derived"
           xmlns:tns="http://example.com/derived"
           elementFormDefault="qualified">

    <xs:complexType name="BaseType">
        <xs:sequence>
            <xs:element name="id" type="xs:string"/>
        </xs:sequence>
    </xs:complexType>

    <xs:complexType name="ExtendedType">
        <xs:complexContent>
            <xs:extension base="tns:BaseType">
                <xs:sequence>
                    <xs:element name="extra" type="xs:integer"/>
                </xs:sequence>
            </xs:extension>
        </xs:complexContent>
    </xs:complexType>

    <xs:complexType name="PriceType">
        <xs:simpleContent>
            <xs:extension base="xs:decimal">
                <xs:attribute name="currency" type="xs:token"/>
            </xs:extension>
        </xs:simpleContent>
    </xs:complexType>

    <xs:element name="order">
        <xs:complexType>
            <xs:sequence>
                <xs:element name="item" type="tns:ExtendedType" maxOccurs="unbounded"/>
                <xs:element name="price" type="tns:PriceType"/>
                <xs:element name="express">
                    <xs:simpleType>
                        <xs:restriction base="xs:boolean"/>
                    </xs:simpleType>
                </xs:element>
                <xs:choice maxOccurs="unbounded">
                    <xs:element name="gift" type="xs:string"/>
                    <xs:element name="coupon" type="xs:string"/>
                </xs:choice>
            </xs:sequence>
        </xs:complexType>
    </xs:element>

</xs:schema>'''


@pytest.fixture
def derived_xsd_file(temp_dir: Path, derived_xsd_content: str) -> Path:
    """Create the derived-types XSD file for testing."""
    xsd_file = temp_dir / "derived.xsd"
    xsd_file.write_text(derived_xsd_content, encoding='utf-8')
    return xsd_file


@pytest.fixture
def importing_xsd_file(temp_dir: Path) -> Path:
    """Main XSD importing a second namespace and including a sibling file."""
    (temp_dir / "common.xsd").write_text('''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://example.com/common">
    <xs:simpleType name="Code">
        <xs:restriction base="xs:short"/>
    </xs:simpleType>
</xs:schema>''', encoding='utf-8')

    (temp_dir / "parts.xsd").write_text('''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://example.com/main"
           xmlns:c="http://example.com/common">
    <xs:import namespace="http://example.com/common" schemaLocation="common.xsd"/>
    <xs:complexType name="Part">
        <xs:sequence>
            <xs:element name="code" type="c:Code"/>
        </xs:sequence>
    </xs:complexType>
</xs:schema>''', encoding='utf-8')

    main = temp_dir / "main.xsd"
    main.write_text('''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://example.com/main"
           xmlns:m="http://example.com/main"
           xmlns:c="http://example.com/common">
    <xs:import namespace="http://example.com/common" schemaLocation="common.xsd"/>
    <xs:include schemaLocation="parts.xsd"/>
    <xs:element name="part" type="m:Part"/>
</xs:schema>''', encoding='utf-8')
    return main


@pytest.fixture
def address_schema() -> Schema:
    """Declaration records equivalent to the address XSD."""
    schema = Schema("http://example.com/address", "address.xsd")
    schema.add_simple_type(SimpleType("ZipCode", restriction_base="xs:token"))
    schema.add_complex_type(ComplexType(
        "Address",
        sequence=[
            Element("Street", type_name="StreetName"),
            Element("Zip", type_name="tns:ZipCode"),
        ],
    ))
    schema.add_element(Element("Address", type_name="tns:Address"))
    return schema


@pytest.fixture
def address_registry(address_schema: Schema) -> TypeRegistry:
    return TypeRegistry([address_schema], log_level=LogLevel.ERROR)


@pytest.fixture
def default_config(temp_dir: Path) -> Config:
    """Default configuration for testing."""
    config = Config(input_file=None, output_file=None)
    config.logging.level = LogLevel.ERROR  # Suppress logs in tests
    return config
