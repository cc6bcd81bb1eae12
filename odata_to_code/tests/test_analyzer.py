"""
End-to-end tests for the service analyzer.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from odata_to_code.errors import (
    CyclicInheritance,
    MissingEntityContainer,
    UnknownEntityType,
    UnknownOperation,
)
from odata_to_code.pipeline.analyzer import ServiceAnalyzer
from odata_to_code.pipeline.config import ResolverConfig
from odata_to_code.pipeline.schema_ast import (
    EdmxParser,
    RawActionImport,
    RawEntityContainer,
    RawEntitySet,
    RawEntityType,
    RawFunctionImport,
    RawProperty,
    RawSchema,
    RawServiceDescription,
)

TEST_DATA = Path(__file__).parent / "test_data"


def parse(name: str) -> RawServiceDescription:
    with open(TEST_DATA / name, "rb") as f:
        return EdmxParser().parse(f.read())


@pytest.fixture
def model():
    return ServiceAnalyzer().analyze(parse("orders.xml"))


def simple_service(container: RawEntityContainer | None = None) -> RawServiceDescription:
    return RawServiceDescription(
        schemas=[
            RawSchema(
                namespace="NS",
                entity_types=[RawEntityType(name="Item", key_refs=["Id"], properties=[RawProperty(name="Id", type="Edm.Int32")])],
                entity_container=container,
            )
        ]
    )


class TestResolvedModel:
    def test_inheritance_across_schemas(self, model):
        order = model.entity_type("Orders.Order")
        document = model.entity_type("Company.Base.Document")
        assert order.base_type is document
        assert model.entity_type("Orders.SpecialOrder").base_type is order

        address = model.find_schema("Orders").complex_types[0]
        location = model.find_schema("Company.Base").complex_types[0]
        assert address.base_type is location

    def test_instance_bound_operations(self, model):
        order = model.entity_type("Orders.Order")
        assert [f.name for f in order.functions] == ["GetTotal"]
        get_total = order.functions[0]
        assert [p.name for p in get_total.parameters] == ["Id", "currency"]
        assert get_total.parameters[0].nullable is False
        assert get_total.return_type.qualified_name == "Edm.Decimal"
        assert [a.name for a in order.actions] == ["Cancel"]
        assert [p.name for p in order.actions[0].parameters] == ["Id", "reason"]

    def test_inherited_key_injected(self, model):
        special = model.entity_type("Orders.SpecialOrder")
        assert special.key is None
        assert [a.name for a in special.actions] == ["Expedite"]
        assert [p.name for p in special.actions[0].parameters] == ["Id"]

    def test_collection_bound_operations(self, model):
        container = model.require_entity_container("Orders")
        for set_name in ("Orders", "ArchivedOrders"):
            entity_set = container.entity_set(set_name)
            assert [a.name for a in entity_set.actions] == ["ArchiveAll"]
            assert [p.name for p in entity_set.actions[0].parameters] == ["before"]
            assert [f.name for f in entity_set.functions] == ["CountOpen"]
            assert entity_set.functions[0].parameters == []
        customers = container.entity_set("Customers")
        assert customers.actions == [] and customers.functions == []

    def test_operation_attached_in_one_form_only(self, model):
        order = model.entity_type("Orders.Order")
        type_attached = {o.name for o in order.actions + order.functions}
        container = model.require_entity_container("Orders")
        set_attached = {o.name for s in container.entity_sets for o in s.actions + s.functions}
        assert type_attached.isdisjoint(set_attached)

    def test_dangling_binding_recorded(self, model):
        assert len(model.diagnostics) == 1
        error = model.diagnostics[0]
        assert isinstance(error, UnknownEntityType)
        assert error.type_name == "Orders.Invoice"
        # Still available in the schema catalog
        assert "Approve" in [a.name for a in model.find_schema("Orders").actions]

    def test_container(self, model):
        container = model.require_entity_container("Orders")
        assert container.full_name == "Orders.Container"
        orders = container.entity_set("Orders")
        assert orders.entity_type is model.entity_type("Orders.Order")
        assert orders.full_name == "Orders.Orders"
        assert [(b.path, b.target) for b in orders.navigation_property_bindings] == [
            ("Customer", "Customers"),
            ("Lines", "OrderLines"),
        ]
        singleton = container.singletons[0]
        assert singleton.name == "LatestOrder"
        assert singleton.entity_type is model.entity_type("Orders.Order")

    def test_imports(self, model):
        container = model.require_entity_container("Orders")
        function_import = container.function_imports[0]
        assert function_import.function is model.unbound_operations["Orders.TopCustomers"]
        assert function_import.entity_set is container.entity_set("Customers")
        assert function_import.include_in_service_document
        action_import = container.action_imports[0]
        assert action_import.action.name == "ResetAll"
        assert action_import.entity_set is None
        assert sorted(model.unbound_operations) == ["Orders.ResetAll", "Orders.TopCustomers"]

    def test_schema_without_container(self, model):
        assert model.find_schema("Company.Base").entity_container is None
        with pytest.raises(MissingEntityContainer):
            model.require_entity_container("Company.Base")

    def test_to_dict(self, model):
        d = model.to_dict()
        assert [s["namespace"] for s in d["schemas"]] == ["Orders", "Company.Base"]
        order = d["schemas"][0]["entity_types"][0]
        assert order["base_type"] == "Company.Base.Document"
        assert order["key"]["name"] == "Id"
        assert d["schemas"][0]["entity_container"]["entity_sets"][0]["entity_type"] == "Orders.Order"
        assert len(d["diagnostics"]) == 1


class TestResolutionRules:
    def test_schema_order_does_not_matter(self):
        service = parse("orders.xml")
        service.schemas.reverse()
        model = ServiceAnalyzer().analyze(service)
        assert model.entity_type("Orders.Order").base_type is model.entity_type("Company.Base.Document")
        assert [f.name for f in model.entity_type("Orders.Order").functions] == ["GetTotal"]

    def test_runs_are_independent(self):
        service = parse("orders.xml")
        first = ServiceAnalyzer().analyze(service)
        second = ServiceAnalyzer().analyze(service)
        assert first.entity_type("Orders.Order") is not second.entity_type("Orders.Order")
        assert len(second.entity_type("Orders.Order").functions) == 1

    def test_plain_schema(self):
        model = ServiceAnalyzer().analyze(simple_service())
        item = model.entity_type("NS.Item")
        assert item.base_type is None
        assert item.actions == [] and item.functions == []
        assert model.diagnostics == []

    def test_no_schemas(self):
        with pytest.raises(MissingEntityContainer):
            ServiceAnalyzer().analyze(RawServiceDescription())

    def test_cyclic_inheritance(self):
        with pytest.raises(CyclicInheritance):
            ServiceAnalyzer().analyze(parse("cyclic.xml"))

    def test_unknown_entity_set_type(self):
        container = RawEntityContainer(name="C", entity_sets=[RawEntitySet(name="Things", entity_type="NS.Thing")])
        with pytest.raises(UnknownEntityType):
            ServiceAnalyzer().analyze(simple_service(container))

    def test_unknown_function_import(self):
        container = RawEntityContainer(name="C", function_imports=[RawFunctionImport(name="F", function="NS.Missing")])
        with pytest.raises(UnknownOperation):
            ServiceAnalyzer().analyze(simple_service(container))

    def test_unknown_action_import(self):
        container = RawEntityContainer(name="C", action_imports=[RawActionImport(name="A", action="NS.Missing")])
        with pytest.raises(UnknownOperation):
            ServiceAnalyzer().analyze(simple_service(container))

    def test_strict_mode(self):
        with pytest.raises(UnknownEntityType):
            ServiceAnalyzer(ResolverConfig(strict=True)).analyze(parse("orders.xml"))

    def test_header_passed_through(self):
        model = ServiceAnalyzer().analyze(simple_service(), header="/* header */")
        assert model.header == "/* header */"
