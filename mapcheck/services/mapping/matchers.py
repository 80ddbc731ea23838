"""
Name-based matchers used to pair properties that do not share the same name.

- Value-object flattening: a view model exposes the parts of an entity value
  object as separate properties (Price: Money -> PriceAmount, PriceCurrency).
- Aliasing: two properties use differently cased or entity-prefixed names for the
  same field (Id / ID, Id / CustomerId).
"""

from typing import Iterable, Optional

from .models import PropertyDescriptor
from .rules import get_rules


def flattened_fragment(entity_property: PropertyDescriptor, candidate_name: str) -> Optional[str]:
    """
    Returns the value-object fragment contained in `candidate_name`, if any.

    The entity property must be a value object whose type (without the trailing
    nullable marker) is registered in the rules. Fragments are tested in registry
    order with a case-sensitive substring check, so "CityName" matches "City".
    Unregistered value objects never match.
    """
    if not entity_property.is_value_object:
        return None
    value_object_type = entity_property.type.replace("?", "").strip()
    fragments = get_rules().value_objects.get(value_object_type)
    if not fragments:
        return None
    for fragment in fragments:
        if fragment in candidate_name:
            return fragment
    return None


def is_value_object_flattening(entity_property: PropertyDescriptor, candidate_name: str) -> bool:
    return flattened_fragment(entity_property, candidate_name) is not None


def find_flattening_source(
    entity_properties: Iterable[PropertyDescriptor], candidate_name: str
) -> Optional[PropertyDescriptor]:
    """First entity value-object property that `candidate_name` is a flattened part of."""
    for prop in entity_properties:
        if is_value_object_flattening(prop, candidate_name):
            return prop
    return None


def find_alias(
    property_name: str,
    target_properties: Iterable[PropertyDescriptor],
    entity_name: Optional[str] = None,
) -> Optional[PropertyDescriptor]:
    """
    Looks for a target property accepted as an alias of `property_name`.

    Comparisons are case-insensitive. For a canonical name of the alias table
    (Id, Name, Number, Code) any of its aliases is accepted; with `entity_name`
    the entity-prefixed form is accepted as well, in both directions
    (Id <-> CustomerId for entity Customer).
    """
    targets = list(target_properties)
    by_name = {}
    for prop in targets:
        by_name.setdefault(prop.name.lower(), prop)

    lowered = property_name.lower()
    prefix = entity_name.lower() if entity_name else None

    for canonical, aliases in get_rules().aliases.items():
        canonical_l = canonical.lower()
        if lowered == canonical_l:
            candidates = [a.lower() for a in aliases]
            if prefix:
                candidates.append(prefix + canonical_l)
            for candidate in candidates:
                if candidate in by_name:
                    return by_name[candidate]
        elif prefix and lowered == prefix + canonical_l:
            if canonical_l in by_name:
                return by_name[canonical_l]
    return None


def is_aliased(
    property_name: str,
    target_properties: Iterable[PropertyDescriptor],
    entity_name: Optional[str] = None,
) -> bool:
    return find_alias(property_name, target_properties, entity_name) is not None


def looks_computed(property_name: str) -> bool:
    """True if the name follows a computed-property convention (TotalDisplay, FullName, ...)."""
    lowered = property_name.lower()
    return any(pattern.lower() in lowered for pattern in get_rules().computed_patterns)
