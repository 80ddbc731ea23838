"""
Facet inference for descriptors supplied without facet flags.

The extraction step normally sets the facets itself. When it only provides
names and types, these helpers fill the flags from the same naming conventions
the extractor uses:
- entity side: inherited base-entity fields, value objects, navigation references
- view-model side: computed and flattened names, navigation references
Flags already set on a descriptor are kept.
"""

from dataclasses import replace
from typing import AbstractSet, Iterable, Tuple

from .matchers import looks_computed
from .models import EntitySchema, PropertyDescriptor, ViewModelSchema
from .rules import get_rules
from .type_utils import element_type, is_collection_type


def _references_entity(type_expr: str, entity_names: AbstractSet[str]) -> bool:
    if is_collection_type(type_expr):
        return element_type(type_expr) in entity_names
    return type_expr.replace("?", "").strip() in entity_names


def _looks_flattened(name: str) -> bool:
    rules = get_rules()
    markers = set(rules.value_objects)
    for fragments in rules.value_objects.values():
        markers.update(fragments)
    lowered = name.lower()
    return any(marker.lower() in lowered for marker in markers)


def infer_entity_property(prop: PropertyDescriptor, entity_names: AbstractSet[str] = frozenset()) -> PropertyDescriptor:
    rules = get_rules()
    return replace(
        prop,
        is_nullable=prop.is_nullable or prop.type.endswith("?"),
        is_collection=prop.is_collection or is_collection_type(prop.type),
        is_value_object=prop.is_value_object or any(vo in prop.type for vo in rules.value_objects),
        is_navigation=prop.is_navigation or _references_entity(prop.type, entity_names),
        is_inherited=prop.is_inherited or prop.name in rules.base_entity_properties,
    )


def infer_view_model_property(
    prop: PropertyDescriptor, entity_names: AbstractSet[str] = frozenset()
) -> PropertyDescriptor:
    return replace(
        prop,
        is_nullable=prop.is_nullable or prop.type.endswith("?"),
        is_collection=prop.is_collection or is_collection_type(prop.type),
        is_navigation=prop.is_navigation or _references_entity(prop.type, entity_names),
        is_computed=prop.is_computed or looks_computed(prop.name),
        is_flattened=prop.is_flattened or _looks_flattened(prop.name),
    )


def infer_facets(
    entities: Iterable[EntitySchema], view_models: Iterable[ViewModelSchema]
) -> Tuple[Tuple[EntitySchema, ...], Tuple[ViewModelSchema, ...]]:
    """
    Returns copies of the schemas with inferred facets.

    Navigation detection needs the names of all entities, so both sides are
    processed together.
    """
    entities = tuple(entities)
    entity_names = frozenset(e.name for e in entities)
    enriched_entities = tuple(
        replace(e, properties=tuple(infer_entity_property(p, entity_names) for p in e.properties))
        for e in entities
    )
    enriched_view_models = tuple(
        replace(vm, properties=tuple(infer_view_model_property(p, entity_names) for p in vm.properties))
        for vm in view_models
    )
    return enriched_entities, enriched_view_models
