"""
This module provides the analysis of one entity / view-model pair.

Main Responsibility:
- Pairs properties by exact name, then by alias and by value-object flattening.
- Classifies every pair.
- Runs both missing-property scanners.
- Partitions the mappings into the per-status name lists of a MappingResult.
"""

import logging
from dataclasses import replace
from typing import List, Set

from .classifier import classify, derived_mapping
from .matchers import find_alias, find_flattening_source
from .models import (
    EntitySchema,
    MappingResult,
    MappingStatus,
    PropertyMapping,
    ViewModelSchema,
    validate_schema,
)
from .scanners import find_missing_in_entity, find_missing_in_view_model

logger = logging.getLogger(__name__)


def _names(mappings: List[PropertyMapping], status: MappingStatus, attr: str) -> tuple:
    return tuple(getattr(m, attr) for m in mappings if m.status == status)


def analyze_pair(entity: EntitySchema, view_model: ViewModelSchema) -> MappingResult:
    """
    Analyzes how faithfully `view_model` represents `entity`.

    Args:
        entity (EntitySchema): The domain entity.
        view_model (ViewModelSchema): A projection of that entity.

    Returns:
        MappingResult: the classified mappings, the missing properties on both
        sides and the derived/flattened/navigation patterns.

    Raises:
        InvalidDescriptor: if a schema or one of its properties has an empty name.
    """
    validate_schema(entity)
    validate_schema(view_model)

    entity_by_name = {}
    for prop in entity.properties:
        entity_by_name.setdefault(prop.name, prop)
    vm_by_name = {}
    for prop in view_model.properties:
        vm_by_name.setdefault(prop.name, prop)

    mappings: List[PropertyMapping] = []
    paired_vm: Set[str] = set()
    alias_paired: Set[str] = set()

    for entity_property in entity.properties:
        vm_property = vm_by_name.get(entity_property.name)
        if vm_property is not None:
            mappings.append(classify(entity_property, vm_property))
            paired_vm.add(vm_property.name)
            continue

        alias = find_alias(entity_property.name, view_model.properties, entity.name)
        if alias is None or alias.name in entity_by_name or alias.name in paired_vm:
            continue
        mapping = classify(entity_property, alias)
        if mapping.status == MappingStatus.MATCHED:
            mapping = replace(mapping, notes=f"Entity name aliasing: {entity_property.name} -> {alias.name}")
        mappings.append(mapping)
        paired_vm.add(alias.name)
        alias_paired.add(entity_property.name)

    value_objects = [p for p in entity.properties if p.is_value_object]
    for vm_property in view_model.properties:
        if vm_property.name in entity_by_name or vm_property.name in paired_vm:
            continue
        source = find_flattening_source(value_objects, vm_property.name)
        if source is not None:
            mappings.append(classify(source, vm_property))
        elif vm_property.is_computed:
            mappings.append(derived_mapping(vm_property))

    # scanners use the self-alias table only; an entity-prefixed alias reconciles the entity side
    missing_in_entity = find_missing_in_entity(entity.properties, view_model.properties)
    missing_in_view_model = [
        name for name in find_missing_in_view_model(entity.properties, view_model.properties)
        if name not in alias_paired
    ]

    type_mismatches = tuple(
        f"{m.entity_property} ({m.entity_property_type}) vs {m.view_model_property} ({m.view_model_property_type})"
        for m in mappings
        if m.status == MappingStatus.TYPE_MISMATCH
    )

    result = MappingResult(
        entity_name=entity.name,
        view_model_name=view_model.name,
        view_model_category=view_model.category,
        mappings=tuple(mappings),
        matched_properties=_names(mappings, MappingStatus.MATCHED, "entity_property"),
        missing_in_entity=tuple(missing_in_entity),
        missing_in_view_model=tuple(missing_in_view_model),
        type_mismatches=type_mismatches,
        derived_properties=_names(mappings, MappingStatus.DERIVED, "view_model_property"),
        flattened_properties=_names(mappings, MappingStatus.FLATTENED, "view_model_property"),
        navigation_properties=_names(mappings, MappingStatus.NAVIGATION, "entity_property"),
    )

    logger.debug(
        "Analyzed %s -> %s: %d mappings, %d missing in entity, %d missing in view model",
        entity.name, view_model.name, len(mappings), len(missing_in_entity), len(missing_in_view_model),
    )
    return result
