"""
Module `models` — data structures of the mapping analysis.

Input side:
- PropertyDescriptor: one property of an entity or view model (name, type, facets)
- EntitySchema / ViewModelSchema: named collections of descriptors

Output side:
- Outcome variants (Matched, Flattened, Derived, Navigation, TypeMismatch)
- PropertyMapping: one classified pair of properties
- MappingResult: all mappings and derived name lists for one entity/view-model pair
- AnalysisSummary: results of many pairs plus catalogs keyed by entity name

Every structure is a frozen dataclass: it is built once and never changed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Iterable, Optional, Tuple, Union

from mapcheck.core.errors import InvalidDescriptor


class MappingStatus(str, Enum):
    MATCHED = "Matched"
    MISSING_IN_ENTITY = "MissingInEntity"
    MISSING_IN_VIEW_MODEL = "MissingInViewModel"
    TYPE_MISMATCH = "TypeMismatch"
    DERIVED = "Derived"
    FLATTENED = "Flattened"
    NAVIGATION = "Navigation"


class ViewModelCategory(str, Enum):
    """Purpose of a view model. Used for reporting only, never for analysis."""
    CREATE = "create"
    UPDATE = "update"
    DETAIL = "detail"
    LIST = "list"
    ANALYTICS = "analytics"
    SUMMARY = "summary"
    GENERAL = "general"


@dataclass(frozen=True)
class PropertyDescriptor:
    name: str
    type: str
    is_nullable: bool = False
    is_collection: bool = False
    is_navigation: bool = False
    is_value_object: bool = False
    is_computed: bool = False
    is_flattened: bool = False
    is_inherited: bool = False
    source_location: Optional[str] = None
    attributes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EntitySchema:
    name: str
    properties: Tuple[PropertyDescriptor, ...] = ()
    base_classes: Tuple[str, ...] = ()
    interfaces: Tuple[str, ...] = ()
    file_path: Optional[str] = None


@dataclass(frozen=True)
class ViewModelSchema:
    name: str
    properties: Tuple[PropertyDescriptor, ...] = ()
    category: ViewModelCategory = ViewModelCategory.GENERAL
    base_classes: Tuple[str, ...] = ()
    interfaces: Tuple[str, ...] = ()
    file_path: Optional[str] = None


Schema = Union[EntitySchema, ViewModelSchema]


def validate_properties(properties: Iterable[PropertyDescriptor], owner: Optional[str] = None) -> None:
    """
    Rejects descriptors that break the input contract.

    Names are used as lookup keys everywhere, so an empty (or blank) name is
    refused instead of silently producing wrong results.

    Raises:
        InvalidDescriptor: if a descriptor has no usable name.
    """
    for index, prop in enumerate(properties):
        if not isinstance(prop.name, str) or not prop.name.strip():
            where = f" in '{owner}'" if owner else ""
            raise InvalidDescriptor(
                f"Property #{index}{where} has an empty name",
                schema=owner,
                prop=prop.name,
            )


def validate_schema(schema: Schema) -> None:
    """Validates the schema name and every property descriptor it owns."""
    if not isinstance(schema.name, str) or not schema.name.strip():
        raise InvalidDescriptor("Schema name must not be empty", schema=schema.name)
    validate_properties(schema.properties, schema.name)


# ---------------------- Classification outcome ----------------------

@dataclass(frozen=True)
class Matched:
    status: ClassVar[MappingStatus] = MappingStatus.MATCHED


@dataclass(frozen=True)
class Flattened:
    fragment: str
    value_object_type: str
    status: ClassVar[MappingStatus] = MappingStatus.FLATTENED


@dataclass(frozen=True)
class Derived:
    status: ClassVar[MappingStatus] = MappingStatus.DERIVED


@dataclass(frozen=True)
class Navigation:
    status: ClassVar[MappingStatus] = MappingStatus.NAVIGATION


@dataclass(frozen=True)
class TypeMismatch:
    entity_type: str
    view_model_type: str
    status: ClassVar[MappingStatus] = MappingStatus.TYPE_MISMATCH


Outcome = Union[Matched, Flattened, Derived, Navigation, TypeMismatch]


@dataclass(frozen=True)
class PropertyMapping:
    entity_property: str
    view_model_property: str
    entity_property_type: str
    view_model_property_type: str
    outcome: Outcome
    notes: str = ""

    @property
    def status(self) -> MappingStatus:
        return self.outcome.status

    @property
    def is_value_object_flattening(self) -> bool:
        return isinstance(self.outcome, Flattened)

    @property
    def is_computed_property(self) -> bool:
        return isinstance(self.outcome, Derived)

    @property
    def is_navigation_mapping(self) -> bool:
        return isinstance(self.outcome, Navigation)


@dataclass(frozen=True)
class MappingResult:
    entity_name: str
    view_model_name: str
    view_model_category: ViewModelCategory
    mappings: Tuple[PropertyMapping, ...] = ()
    matched_properties: Tuple[str, ...] = ()
    missing_in_entity: Tuple[str, ...] = ()
    missing_in_view_model: Tuple[str, ...] = ()
    type_mismatches: Tuple[str, ...] = ()
    derived_properties: Tuple[str, ...] = ()
    flattened_properties: Tuple[str, ...] = ()
    navigation_properties: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CatalogEntry:
    """A Flattened or Derived mapping recorded for later pattern review."""
    view_model: str
    property_name: str
    notes: str


@dataclass(frozen=True)
class AnalysisSummary:
    entities: Tuple[EntitySchema, ...] = ()
    view_models: Tuple[ViewModelSchema, ...] = ()
    mapping_results: Tuple[MappingResult, ...] = ()
    missing_properties_by_entity: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    value_object_flattening_patterns: Dict[str, Tuple[CatalogEntry, ...]] = field(default_factory=dict)
    computed_property_patterns: Dict[str, Tuple[CatalogEntry, ...]] = field(default_factory=dict)

    @property
    def statistics(self) -> Dict[str, int]:
        flattened = {e.property_name for entries in self.value_object_flattening_patterns.values() for e in entries}
        computed = {e.property_name for entries in self.computed_property_patterns.values() for e in entries}
        return {
            "total_entities": len(self.entities),
            "total_view_models": len(self.view_models),
            "total_mappings": len(self.mapping_results),
            "missing_in_entities": sum(len(v) for v in self.missing_properties_by_entity.values()),
            "missing_in_view_models": sum(len(r.missing_in_view_model) for r in self.mapping_results),
            "type_mismatches": sum(len(r.type_mismatches) for r in self.mapping_results),
            "flattening_patterns": len(flattened),
            "computed_properties": len(computed),
        }
