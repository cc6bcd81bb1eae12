"""
EDMX metadata parser that builds raw declaration nodes.

Phase 1 of the pipeline: parse the XML document into typed raw
declarations without resolving any type reference.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET

from ...errors import InvalidMetadataError
from .nodes import (
    OperationKind,
    RawActionImport,
    RawComplexType,
    RawEntityContainer,
    RawEntitySet,
    RawEntityType,
    RawEnumMember,
    RawEnumType,
    RawFunctionImport,
    RawNavigationProperty,
    RawNavigationPropertyBinding,
    RawOperation,
    RawParameter,
    RawProperty,
    RawSchema,
    RawServiceDescription,
    RawSingleton,
)

logger = logging.getLogger(__name__)


def _local_name(element: Element) -> str:
    """Strip the XML namespace from an element tag."""
    tag = element.tag
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _children(element: Element, name: str) -> Iterator[Element]:
    """Iterate direct children with the given local name."""
    for child in element:
        if _local_name(child) == name:
            yield child


def _child(element: Element, name: str) -> Element | None:
    return next(_children(element, name), None)


def _flag(element: Element, attr: str) -> bool:
    return element.attrib.get(attr, "false").lower() == "true"


class EdmxParser:
    """Parses an EDMX document into a RawServiceDescription."""

    def parse(self, text: str | bytes) -> RawServiceDescription:
        """
        Parse EDMX metadata.

        Args:
            text: The XML document

        Returns:
            RawServiceDescription with one RawSchema per Schema element

        Raises:
            InvalidMetadataError: If the document is not EDMX metadata
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise InvalidMetadataError(f"Metadata is not well-formed XML: {e}") from e

        if _local_name(root) != "Edmx":
            raise InvalidMetadataError("Response is not valid oData metadata")

        data_services = _child(root, "DataServices")
        if data_services is None:
            raise InvalidMetadataError("Metadata document has no DataServices element")

        service = RawServiceDescription(version=root.attrib.get("Version", ""))
        for schema_elem in _children(data_services, "Schema"):
            service.schemas.append(self._parse_schema(schema_elem))

        logger.debug("Parsed %d schemas", len(service.schemas))
        return service

    def _parse_schema(self, elem: Element) -> RawSchema:
        schema = RawSchema(
            namespace=elem.attrib.get("Namespace", ""),
            alias=elem.attrib.get("Alias"),
        )
        for child in elem:
            name = _local_name(child)
            if name == "EntityType":
                schema.entity_types.append(self._parse_entity_type(child))
            elif name == "ComplexType":
                schema.complex_types.append(self._parse_complex_type(child))
            elif name == "EnumType":
                schema.enum_types.append(self._parse_enum_type(child))
            elif name == "Action":
                schema.actions.append(self._parse_operation(child, OperationKind.ACTION))
            elif name == "Function":
                schema.functions.append(self._parse_operation(child, OperationKind.FUNCTION))
            elif name == "EntityContainer" and schema.entity_container is None:
                schema.entity_container = self._parse_entity_container(child)
        return schema

    def _parse_property(self, elem: Element) -> RawProperty:
        return RawProperty(
            name=elem.attrib.get("Name", ""),
            type=elem.attrib.get("Type", ""),
            nullable=elem.attrib.get("Nullable"),
        )

    def _parse_entity_type(self, elem: Element) -> RawEntityType:
        entity_type = RawEntityType(
            name=elem.attrib.get("Name", ""),
            base_type=elem.attrib.get("BaseType"),
            open_type=_flag(elem, "OpenType"),
            abstract=_flag(elem, "Abstract"),
        )
        key = _child(elem, "Key")
        if key is not None:
            entity_type.key_refs = [ref.attrib.get("Name", "") for ref in _children(key, "PropertyRef")]
        entity_type.properties = [self._parse_property(p) for p in _children(elem, "Property")]
        entity_type.navigation_properties = [
            RawNavigationProperty(
                name=nav.attrib.get("Name", ""),
                type=nav.attrib.get("Type", ""),
                partner=nav.attrib.get("Partner"),
            )
            for nav in _children(elem, "NavigationProperty")
        ]
        return entity_type

    def _parse_complex_type(self, elem: Element) -> RawComplexType:
        return RawComplexType(
            name=elem.attrib.get("Name", ""),
            base_type=elem.attrib.get("BaseType"),
            open_type=_flag(elem, "OpenType"),
            abstract=_flag(elem, "Abstract"),
            properties=[self._parse_property(p) for p in _children(elem, "Property")],
        )

    def _parse_enum_type(self, elem: Element) -> RawEnumType:
        return RawEnumType(
            name=elem.attrib.get("Name", ""),
            underlying_type=elem.attrib.get("UnderlyingType"),
            is_flags=_flag(elem, "IsFlags"),
            members=[
                RawEnumMember(name=m.attrib.get("Name", ""), value=m.attrib.get("Value"))
                for m in _children(elem, "Member")
            ],
        )

    def _parse_operation(self, elem: Element, kind: OperationKind) -> RawOperation:
        operation = RawOperation(
            kind=kind,
            name=elem.attrib.get("Name", ""),
            is_bound=_flag(elem, "IsBound"),
            is_composable=_flag(elem, "IsComposable"),
        )
        for param in _children(elem, "Parameter"):
            operation.parameters.append(
                RawParameter(
                    name=param.attrib.get("Name", ""),
                    type=param.attrib.get("Type", ""),
                    nullable=param.attrib.get("Nullable"),
                    unicode=param.attrib.get("Unicode"),
                    max_length=param.attrib.get("MaxLength"),
                    precision=param.attrib.get("Precision"),
                    scale=param.attrib.get("Scale"),
                    srid=param.attrib.get("SRID"),
                )
            )
        return_type = _child(elem, "ReturnType")
        if return_type is not None:
            operation.return_type = return_type.attrib.get("Type")
        return operation

    def _parse_bindings(self, elem: Element) -> list[RawNavigationPropertyBinding]:
        return [
            RawNavigationPropertyBinding(path=b.attrib.get("Path", ""), target=b.attrib.get("Target", ""))
            for b in _children(elem, "NavigationPropertyBinding")
        ]

    def _parse_entity_container(self, elem: Element) -> RawEntityContainer:
        container = RawEntityContainer(name=elem.attrib.get("Name", ""))
        for child in elem:
            name = _local_name(child)
            if name == "EntitySet":
                container.entity_sets.append(
                    RawEntitySet(
                        name=child.attrib.get("Name", ""),
                        entity_type=child.attrib.get("EntityType", ""),
                        navigation_property_bindings=self._parse_bindings(child),
                    )
                )
            elif name == "Singleton":
                container.singletons.append(
                    RawSingleton(
                        name=child.attrib.get("Name", ""),
                        type=child.attrib.get("Type", ""),
                        navigation_property_bindings=self._parse_bindings(child),
                    )
                )
            elif name == "FunctionImport":
                container.function_imports.append(
                    RawFunctionImport(
                        name=child.attrib.get("Name", ""),
                        function=child.attrib.get("Function", ""),
                        entity_set=child.attrib.get("EntitySet"),
                        include_in_service_document=_flag(child, "IncludeInServiceDocument"),
                    )
                )
            elif name == "ActionImport":
                container.action_imports.append(
                    RawActionImport(
                        name=child.attrib.get("Name", ""),
                        action=child.attrib.get("Action", ""),
                        entity_set=child.attrib.get("EntitySet"),
                    )
                )
        return container
