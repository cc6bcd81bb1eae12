"""
Tests for bound operation attachment.
"""

from __future__ import annotations

import pytest

from odata_to_code.errors import KeyNotFound, UnknownEntityType
from odata_to_code.pipeline.analyzer.diagnostics import Diagnostics
from odata_to_code.pipeline.analyzer.ir_nodes import (
    BindingKind,
    EntitySet,
    EntityType,
    Operation,
    Parameter,
    Property,
)
from odata_to_code.pipeline.analyzer.operation_binder import OperationBinder, trim_binding_parameter
from odata_to_code.pipeline.analyzer.type_descriptor import get_type
from odata_to_code.pipeline.schema_ast.nodes import OperationKind


def order_type() -> EntityType:
    key = Property(name="Id", type=get_type("Edm.Int32"), nullable=False)
    return EntityType(namespace="Orders", full_name="Orders.Order", name="Order", properties=[key], key=key)


def bound(name: str, kind: OperationKind, binding_type: str, *extra: Parameter) -> Operation:
    descriptor = get_type(binding_type)
    return Operation(
        kind=kind,
        name=name,
        full_name=f"Orders.{name}",
        binding=BindingKind.COLLECTION if descriptor.is_collection else BindingKind.INSTANCE,
        bound_type=descriptor.qualified_name,
        parameters=[Parameter(name="bindingParameter", type=descriptor), *extra],
    )


class TestInstanceBinding:
    def test_function_gets_key_parameter(self):
        order = order_type()
        currency = Parameter(name="currency", type=get_type("Edm.String"))
        get_total = bound("GetTotal", OperationKind.FUNCTION, "Orders.Order", currency)

        attached = OperationBinder(Diagnostics()).bind_to_entity_types([get_total], [order])

        assert attached == 1
        assert order.actions == []
        assert [f.name for f in order.functions] == ["GetTotal"]
        params = order.functions[0].parameters
        assert [p.name for p in params] == ["Id", "currency"]
        assert params[0].type.qualified_name == "Edm.Int32"
        assert params[0].nullable is False
        # The catalog entry keeps its binding parameter
        assert get_total.parameters[0].name == "bindingParameter"

    def test_action_lands_in_actions(self):
        order = order_type()
        OperationBinder(Diagnostics()).bind_to_entity_types([bound("Cancel", OperationKind.ACTION, "Orders.Order")], [order])
        assert [a.name for a in order.actions] == ["Cancel"]
        assert order.functions == []

    def test_inherited_key(self):
        base = order_type()
        special = EntityType(namespace="Orders", full_name="Orders.Special", name="Special", base_type=base)
        OperationBinder(Diagnostics()).bind_to_entity_types([bound("Expedite", OperationKind.ACTION, "Orders.Special")], [base, special])
        assert special.actions[0].parameters[0].name == "Id"
        assert base.actions == []

    def test_owner_without_key_is_recorded(self):
        keyless = EntityType(namespace="Orders", full_name="Orders.Order", name="Order")
        diagnostics = Diagnostics()
        OperationBinder(diagnostics).bind_to_entity_types([bound("Cancel", OperationKind.ACTION, "Orders.Order")], [keyless])
        assert keyless.actions == []
        assert isinstance(diagnostics.errors[0], KeyNotFound)

    def test_dangling_binding_is_recorded(self):
        order = order_type()
        diagnostics = Diagnostics()
        attached = OperationBinder(diagnostics).bind_to_entity_types([bound("Approve", OperationKind.ACTION, "Orders.Invoice")], [order])
        assert attached == 0
        assert order.actions == []
        assert isinstance(diagnostics.errors[0], UnknownEntityType)
        assert diagnostics.errors[0].referenced_by == "Orders.Approve"

    def test_dangling_binding_raises_when_strict(self):
        with pytest.raises(UnknownEntityType):
            OperationBinder(Diagnostics(strict=True)).bind_to_entity_types(
                [bound("Approve", OperationKind.ACTION, "Orders.Invoice")], [order_type()]
            )

    def test_collection_bound_is_ignored(self):
        order = order_type()
        attached = OperationBinder(Diagnostics()).bind_to_entity_types([bound("ArchiveAll", OperationKind.ACTION, "Collection(Orders.Order)")], [order])
        assert attached == 0
        assert order.actions == []


class TestCollectionBinding:
    def test_every_matching_set(self):
        order = order_type()
        live = EntitySet(name="Orders", full_name="Orders.Orders", namespace="Orders", entity_type=order)
        archived = EntitySet(name="Archived", full_name="Orders.Archived", namespace="Orders", entity_type=order)
        before = Parameter(name="before", type=get_type("Edm.DateTimeOffset"))
        archive_all = bound("ArchiveAll", OperationKind.ACTION, "Collection(Orders.Order)", before)

        attached = OperationBinder(Diagnostics()).bind_to_entity_sets([archive_all], [live, archived])

        assert attached == 2
        for entity_set in (live, archived):
            assert [a.name for a in entity_set.actions] == ["ArchiveAll"]
            assert [p.name for p in entity_set.actions[0].parameters] == ["before"]
        assert live.actions[0] is not archived.actions[0]
        assert live.actions[0].parameters is not archived.actions[0].parameters
        assert order.actions == []

    def test_function_lands_in_functions(self):
        order = order_type()
        entity_set = EntitySet(name="Orders", full_name="Orders.Orders", namespace="Orders", entity_type=order)
        OperationBinder(Diagnostics()).bind_to_entity_sets([bound("CountOpen", OperationKind.FUNCTION, "Collection(Orders.Order)")], [entity_set])
        assert [f.name for f in entity_set.functions] == ["CountOpen"]
        assert entity_set.functions[0].parameters == []

    def test_no_matching_set_is_recorded(self):
        diagnostics = Diagnostics()
        OperationBinder(diagnostics).bind_to_entity_sets([bound("ArchiveAll", OperationKind.ACTION, "Collection(Orders.Order)")], [])
        assert len(diagnostics) == 1


def test_trim_binding_parameter_does_not_mutate():
    operation = bound("Op", OperationKind.ACTION, "Orders.Order", Parameter(name="x"))
    trimmed = trim_binding_parameter(operation)
    assert [p.name for p in trimmed.parameters] == ["x"]
    assert [p.name for p in operation.parameters] == ["bindingParameter", "x"]
