"""
Shared fixtures for the mapping analysis test suite.

The fixtures model a small slice of a collections domain: a Customer entity with
value objects (Address, Phone) and navigation properties, and a few view models
projecting it.
"""

import pytest

from mapcheck.services.mapping.models import (
    EntitySchema,
    PropertyDescriptor,
    ViewModelCategory,
    ViewModelSchema,
)


@pytest.fixture
def prop():
    """Factory for PropertyDescriptor with all facets defaulting to False."""
    def _make(name, type_="string", **facets):
        return PropertyDescriptor(name=name, type=type_, **facets)
    return _make


@pytest.fixture
def customer_entity(prop):
    return EntitySchema(
        name="Customer",
        properties=(
            prop("Id", "Guid", is_inherited=True),
            prop("CreatedAt", "DateTime", is_inherited=True),
            prop("UpdatedAt", "DateTime?", is_inherited=True, is_nullable=True),
            prop("FirstName", "string"),
            prop("LastName", "string"),
            prop("Address", "Address", is_value_object=True),
            prop("Phone", "Phone?", is_value_object=True, is_nullable=True),
            prop("CreditLimit", "decimal"),
            prop("AssignedStaff", "Staff?", is_navigation=True, is_nullable=True),
            prop("Contracts", "List<Contract>", is_navigation=True, is_collection=True),
        ),
    )


@pytest.fixture
def customer_detail_vm(prop):
    return ViewModelSchema(
        name="CustomerDetailViewModel",
        category=ViewModelCategory.DETAIL,
        properties=(
            prop("Id", "Guid"),
            prop("FirstName", "string"),
            prop("LastName", "string"),
            prop("FullName", "string", is_computed=True),
            prop("City", "string", is_flattened=True),
            prop("ZipCode", "string", is_flattened=True),
            prop("PhoneNumber", "string", is_flattened=True),
            prop("CreditLimit", "double"),
            prop("Email", "string"),
        ),
    )


@pytest.fixture
def customer_create_vm(prop):
    return ViewModelSchema(
        name="CreateCustomerVM",
        category=ViewModelCategory.CREATE,
        properties=(
            prop("FirstName", "string"),
            prop("LastName", "string"),
            prop("CreditLimit", "int"),
            prop("AssignedStaff", "Guid?", is_nullable=True),
        ),
    )
