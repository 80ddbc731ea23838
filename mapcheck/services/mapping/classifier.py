"""
This module classifies one paired entity property / view-model property.

Rules are applied in a fixed order and the first one that holds wins:
1. Flattened   - the entity property is a value object and the view-model name is one of its parts
2. Derived     - the view-model property is computed
3. Navigation  - either side is a navigation property
4. TypeMismatch - the two types are not compatible
5. Matched
The order matters because a property can satisfy several rules at once: a
flattened field whose type differs from the value object is still Flattened.
"""

from .matchers import flattened_fragment
from .models import (
    Derived,
    Flattened,
    Matched,
    Navigation,
    PropertyDescriptor,
    PropertyMapping,
    TypeMismatch,
    validate_properties,
)
from .type_utils import are_types_compatible


def classify(entity_property: PropertyDescriptor, view_model_property: PropertyDescriptor) -> PropertyMapping:
    """
    Produces the PropertyMapping of an already paired couple of properties.

    Args:
        entity_property (PropertyDescriptor): Property of the domain entity.
        view_model_property (PropertyDescriptor): Property of the view model.

    Returns:
        PropertyMapping: the classification outcome plus a diagnostic note.

    Raises:
        InvalidDescriptor: if either descriptor has an empty name.
    """
    validate_properties((entity_property, view_model_property))

    fragment = flattened_fragment(entity_property, view_model_property.name)
    if fragment is not None:
        outcome = Flattened(fragment=fragment, value_object_type=entity_property.type)
        notes = f"Value object {entity_property.type} flattened to {view_model_property.name}"
    elif view_model_property.is_computed:
        outcome = Derived()
        notes = "Computed/derived property"
    elif entity_property.is_navigation or view_model_property.is_navigation:
        outcome = Navigation()
        notes = "Navigation property mapping"
    elif not are_types_compatible(entity_property.type, view_model_property.type):
        outcome = TypeMismatch(entity_type=entity_property.type, view_model_type=view_model_property.type)
        notes = f"Type mismatch: {entity_property.type} vs {view_model_property.type}"
    else:
        outcome = Matched()
        notes = ""

    return PropertyMapping(
        entity_property=entity_property.name,
        view_model_property=view_model_property.name,
        entity_property_type=entity_property.type,
        view_model_property_type=view_model_property.type,
        outcome=outcome,
        notes=notes,
    )


def derived_mapping(view_model_property: PropertyDescriptor) -> PropertyMapping:
    """Mapping for a computed view-model property that has no entity counterpart."""
    validate_properties((view_model_property,))
    return PropertyMapping(
        entity_property="",
        view_model_property=view_model_property.name,
        entity_property_type="",
        view_model_property_type=view_model_property.type,
        outcome=Derived(),
        notes="Computed/derived property",
    )
