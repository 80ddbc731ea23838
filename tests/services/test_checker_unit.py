"""
Unit tests for the pair analysis (`checker.analyze_pair`) and the missing-property
scanners (`scanners`).

The suite covers:
1. Scanners: exclusions, input order, deduplication, aliases.
2. analyze_pair on a detail view model (flattening, derived, missing on both sides).
3. analyze_pair on a create view model (navigation, compatible primitives).
4. Alias pairing, type mismatches and the exclusivity of the result lists.
"""

import pytest

from mapcheck.core.errors import InvalidDescriptor
from mapcheck.services.mapping.checker import analyze_pair
from mapcheck.services.mapping.models import (
    EntitySchema,
    MappingStatus,
    ViewModelCategory,
    ViewModelSchema,
)
from mapcheck.services.mapping.scanners import find_missing_in_entity, find_missing_in_view_model

# ==================================================================================
#                                   TEST: SCANNERS
# ==================================================================================

def test_missing_in_entity_skips_computed_flattened_and_aliases(prop):
    entity_props = [prop("Id", "Guid"), prop("Price", "Money", is_value_object=True)]
    vm_props = [
        prop("ID", "Guid"),
        prop("PriceAmount", "decimal"),
        prop("TotalDisplay", "string", is_computed=True),
        prop("Notes", "string"),
    ]
    assert find_missing_in_entity(entity_props, vm_props) == ["Notes"]


def test_missing_in_entity_preserves_order_without_duplicates(prop):
    vm_props = [prop("Zeta"), prop("Alpha"), prop("Zeta")]
    assert find_missing_in_entity([prop("Name")], vm_props) == ["Zeta", "Alpha"]


def test_missing_in_entity_reports_entity_prefixed_names(prop):
    """Only the self-alias table reconciles names: CustomerId has no entity counterpart."""
    entity_props = [prop("Id", "Guid")]
    vm_props = [prop("CustomerId", "Guid")]
    assert find_missing_in_entity(entity_props, vm_props) == ["CustomerId"]
    assert find_missing_in_view_model(entity_props, vm_props) == ["Id"]


def test_missing_in_view_model_skips_inherited_and_navigation(prop):
    """Inherited Id/CreatedAt and navigation properties are never reported as missing."""
    entity_props = [
        prop("Id", "Guid", is_inherited=True),
        prop("CreatedAt", "DateTime", is_inherited=True),
        prop("Orders", "List<Order>", is_navigation=True, is_collection=True),
        prop("Email", "string"),
        prop("Phone", "Phone", is_value_object=True),
    ]
    assert find_missing_in_view_model(entity_props, []) == ["Email", "Phone"]


def test_missing_in_view_model_accepts_aliases(prop):
    entity_props = [prop("Code", "string"), prop("Id", "Guid"), prop("Number", "string")]
    vm_props = [prop("CODE", "string"), prop("ID", "Guid"), prop("OrderNumber", "string")]
    assert find_missing_in_view_model(entity_props, vm_props) == ["Number"]


def test_missing_in_view_model_deduplicates(prop):
    entity_props = [prop("Email"), prop("Email")]
    assert find_missing_in_view_model(entity_props, [prop("Name")]) == ["Email"]


def test_scanners_reject_empty_names(prop):
    with pytest.raises(InvalidDescriptor):
        find_missing_in_entity([prop("")], [prop("Name")])
    with pytest.raises(InvalidDescriptor):
        find_missing_in_view_model([prop("Name")], [prop("")])

# ==================================================================================
#                               TEST: ANALYZE PAIR (DETAIL)
# ==================================================================================

def test_analyze_detail_view_model(customer_entity, customer_detail_vm):
    result = analyze_pair(customer_entity, customer_detail_vm)

    assert result.entity_name == "Customer"
    assert result.view_model_name == "CustomerDetailViewModel"
    assert result.view_model_category == ViewModelCategory.DETAIL

    assert result.matched_properties == ("Id", "FirstName", "LastName", "CreditLimit")
    assert result.derived_properties == ("FullName",)
    assert result.flattened_properties == ("City", "ZipCode", "PhoneNumber")
    assert result.navigation_properties == ()
    assert result.type_mismatches == ()

    assert result.missing_in_entity == ("Email",)
    assert result.missing_in_view_model == ("Address", "Phone")


def test_analyze_detail_flattening_notes(customer_entity, customer_detail_vm):
    result = analyze_pair(customer_entity, customer_detail_vm)
    notes = {m.view_model_property: m.notes for m in result.mappings}

    assert notes["City"] == "Value object Address flattened to City"
    assert notes["PhoneNumber"] == "Value object Phone? flattened to PhoneNumber"
    assert notes["FullName"] == "Computed/derived property"


def test_analyze_detail_derived_mapping_has_no_entity_side(customer_entity, customer_detail_vm):
    result = analyze_pair(customer_entity, customer_detail_vm)
    derived = [m for m in result.mappings if m.status == MappingStatus.DERIVED]

    assert len(derived) == 1
    assert derived[0].entity_property == ""

# ==================================================================================
#                               TEST: ANALYZE PAIR (CREATE)
# ==================================================================================

def test_analyze_create_view_model(customer_entity, customer_create_vm):
    """The AssignedStaff key (Guid?) against the Staff? navigation is a Navigation, not a mismatch."""
    result = analyze_pair(customer_entity, customer_create_vm)

    assert result.matched_properties == ("FirstName", "LastName", "CreditLimit")
    assert result.navigation_properties == ("AssignedStaff",)
    assert result.type_mismatches == ()
    assert result.missing_in_entity == ()
    assert result.missing_in_view_model == ("Address", "Phone")

# ==================================================================================
#                           TEST: ALIASES, MISMATCHES, EXCLUSIVITY
# ==================================================================================

def test_analyze_pairs_entity_prefixed_alias(prop):
    entity = EntitySchema("Customer", (prop("Id", "Guid"), prop("Email")))
    vm = ViewModelSchema("CustomerViewModel", (prop("CustomerId", "Guid"), prop("Email")))

    result = analyze_pair(entity, vm)
    alias_mapping = result.mappings[0]

    assert (alias_mapping.entity_property, alias_mapping.view_model_property) == ("Id", "CustomerId")
    assert alias_mapping.status == MappingStatus.MATCHED
    assert alias_mapping.notes == "Entity name aliasing: Id -> CustomerId"
    assert result.matched_properties == ("Id", "Email")
    assert result.missing_in_entity == ("CustomerId",)
    assert result.missing_in_view_model == ()


def test_analyze_prefixed_name_present_on_both_sides(prop):
    """When the entity owns CustomerId too, Id is not paired by alias and stays missing."""
    entity = EntitySchema("Customer", (prop("Id", "Guid"), prop("CustomerId", "Guid")))
    vm = ViewModelSchema("CustomerViewModel", (prop("CustomerId", "Guid"),))

    result = analyze_pair(entity, vm)

    assert result.matched_properties == ("CustomerId",)
    assert result.missing_in_view_model == ("Id",)
    assert result.missing_in_entity == ()


def test_analyze_reports_type_mismatch(prop):
    entity = EntitySchema("Invoice", (prop("Total", "decimal"), prop("IssuedOn", "DateTime")))
    vm = ViewModelSchema("InvoiceViewModel", (prop("Total", "string"), prop("IssuedOn", "DateOnly")))

    result = analyze_pair(entity, vm)

    assert result.type_mismatches == ("Total (decimal) vs Total (string)",)
    assert result.matched_properties == ("IssuedOn",)


def test_analyze_result_lists_are_exclusive(customer_entity, customer_detail_vm, customer_create_vm):
    for vm in (customer_detail_vm, customer_create_vm):
        result = analyze_pair(customer_entity, vm)
        buckets = [
            set(result.matched_properties),
            set(result.derived_properties),
            set(result.flattened_properties),
            set(result.navigation_properties),
        ]
        total = sum(len(b) for b in buckets)
        assert len(set().union(*buckets)) == total
        assert len(result.mappings) == total + len(result.type_mismatches)


def _exclusive_cases(prop, customer_entity, customer_detail_vm, customer_create_vm):
    return [
        (customer_entity, customer_detail_vm),
        (customer_entity, customer_create_vm),
        (
            EntitySchema("Customer", (prop("Id", "Guid"), prop("Email"))),
            ViewModelSchema("CustomerViewModel", (prop("CustomerId", "Guid"), prop("Email"))),
        ),
        (
            EntitySchema("Customer", (prop("Id", "Guid"), prop("CustomerId", "Guid"))),
            ViewModelSchema("CustomerViewModel", (prop("CustomerId", "Guid"),)),
        ),
        (
            EntitySchema("Order", (prop("Code"), prop("Id", "Guid"), prop("Total", "Money", is_value_object=True))),
            ViewModelSchema("OrderViewModel", (prop("CODE"), prop("ID", "Guid"), prop("TotalAmount", "decimal"))),
        ),
    ]


def test_matched_names_never_reported_missing(prop, customer_entity, customer_detail_vm, customer_create_vm):
    """No name may sit in the matched list and in a missing list of the same pair."""
    for entity, vm in _exclusive_cases(prop, customer_entity, customer_detail_vm, customer_create_vm):
        result = analyze_pair(entity, vm)
        matched = set(result.matched_properties)

        assert not matched & set(result.missing_in_entity), (entity.name, vm.name)
        assert not matched & set(result.missing_in_view_model), (entity.name, vm.name)


def test_every_entity_property_is_accounted_for(prop):
    """A non-inherited, non-navigation entity property is either mapped or missing."""
    entity = EntitySchema("Customer", (prop("Id", "Guid"), prop("CustomerId", "Guid"), prop("Email")))
    vm = ViewModelSchema("CustomerViewModel", (prop("CustomerId", "Guid"),))

    result = analyze_pair(entity, vm)
    mapped = {m.entity_property for m in result.mappings}

    for name in ("Id", "CustomerId", "Email"):
        assert name in mapped or name in result.missing_in_view_model


def test_analyze_empty_view_model(customer_entity):
    result = analyze_pair(customer_entity, ViewModelSchema("CustomerViewModel"))

    assert result.mappings == ()
    assert result.missing_in_entity == ()
    assert result.missing_in_view_model == ("FirstName", "LastName", "Address", "Phone", "CreditLimit")


def test_analyze_rejects_unnamed_schema(customer_entity, prop):
    with pytest.raises(InvalidDescriptor, match="Schema name must not be empty"):
        analyze_pair(customer_entity, ViewModelSchema("", (prop("Name"),)))


def test_analyze_rejects_unnamed_property(customer_entity, prop):
    with pytest.raises(InvalidDescriptor) as exc:
        analyze_pair(customer_entity, ViewModelSchema("CustomerViewModel", (prop("Name"), prop(""))))
    assert exc.value.schema == "CustomerViewModel"

# ==================================================================================
#                               TEST: REFERENCE SCENARIOS
# ==================================================================================

def test_scenario_matched_decimal(prop):
    result = analyze_pair(
        EntitySchema("Invoice", (prop("Amount", "decimal"),)),
        ViewModelSchema("InvoiceViewModel", (prop("Amount", "decimal"),)),
    )
    assert result.matched_properties == ("Amount",)
    assert result.mappings[0].notes == ""


def test_scenario_money_flattened_to_price_amount(prop):
    result = analyze_pair(
        EntitySchema("Product", (prop("Price", "Money", is_value_object=True),)),
        ViewModelSchema("ProductViewModel", (prop("PriceAmount", "decimal"),)),
    )
    assert result.flattened_properties == ("PriceAmount",)
    assert result.missing_in_entity == ()


def test_scenario_navigation_created_by_not_missing(prop):
    entity = EntitySchema("Payment", (prop("CreatedBy", "User", is_navigation=True), prop("Amount", "decimal")))
    vm = ViewModelSchema("PaymentViewModel", (prop("Amount", "decimal"),))
    assert analyze_pair(entity, vm).missing_in_view_model == ()


def test_scenario_inherited_id_not_missing(prop):
    entity = EntitySchema("Payment", (prop("Id", "Guid", is_inherited=True), prop("Amount", "decimal")))
    vm = ViewModelSchema("PaymentViewModel", (prop("Amount", "decimal"),))
    assert analyze_pair(entity, vm).missing_in_view_model == ()


def test_scenario_integer_vs_string_mismatch(prop):
    result = analyze_pair(
        EntitySchema("Account", (prop("Count", "int"),)),
        ViewModelSchema("AccountViewModel", (prop("Count", "string"),)),
    )
    assert result.type_mismatches == ("Count (int) vs Count (string)",)
    assert result.mappings[0].notes == "Type mismatch: int vs string"


def test_scenario_computed_total_display_not_missing(prop):
    result = analyze_pair(
        EntitySchema("Order", (prop("Total", "decimal"),)),
        ViewModelSchema("OrderViewModel", (prop("Total", "decimal"), prop("TotalDisplay", "string", is_computed=True))),
    )
    assert result.missing_in_entity == ()
    assert result.derived_properties == ("TotalDisplay",)
