"""
Missing-property scanners.

- find_missing_in_entity: view-model properties with no justified entity counterpart
- find_missing_in_view_model: entity properties with no justified view-model counterpart

Both scan the full property lists (not only the name-matched pairs) and return
names in input order, without duplicates.
"""

from typing import List, Sequence

from .matchers import find_flattening_source, is_aliased
from .models import PropertyDescriptor, validate_properties


def find_missing_in_entity(
    entity_properties: Sequence[PropertyDescriptor],
    view_model_properties: Sequence[PropertyDescriptor],
) -> List[str]:
    """
    Returns the view-model properties that the entity does not provide.

    A view-model property is not reported when it is computed, when it is a
    flattened part of an entity value object, or when it is an accepted alias of
    an entity property.
    """
    validate_properties(entity_properties)
    validate_properties(view_model_properties)

    entity_names = {p.name for p in entity_properties}
    value_objects = [p for p in entity_properties if p.is_value_object]
    missing: List[str] = []

    for vm_property in view_model_properties:
        if vm_property.is_computed:
            continue
        if find_flattening_source(value_objects, vm_property.name) is not None:
            continue
        if is_aliased(vm_property.name, entity_properties):
            continue
        if vm_property.name not in entity_names and vm_property.name not in missing:
            missing.append(vm_property.name)

    return missing


def find_missing_in_view_model(
    entity_properties: Sequence[PropertyDescriptor],
    view_model_properties: Sequence[PropertyDescriptor],
) -> List[str]:
    """
    Returns the entity properties that the view model does not expose.

    Inherited properties (Id, CreatedAt, UpdatedAt from the base entity) and
    navigation properties are optional in projections and never reported, nor
    are properties the view model exposes under an accepted alias.
    """
    validate_properties(entity_properties)
    validate_properties(view_model_properties)

    vm_names = {p.name for p in view_model_properties}
    missing: List[str] = []

    for entity_property in entity_properties:
        if entity_property.is_inherited:
            continue
        if entity_property.is_navigation:
            continue
        if is_aliased(entity_property.name, view_model_properties):
            continue
        if entity_property.name not in vm_names and entity_property.name not in missing:
            missing.append(entity_property.name)

    return missing
