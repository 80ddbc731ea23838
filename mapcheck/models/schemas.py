from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from mapcheck.services.mapping.models import (
    EntitySchema,
    MappingStatus,
    PropertyDescriptor,
    ViewModelCategory,
    ViewModelSchema,
)
from mapcheck.services.mapping.pairing import infer_category


class PropertyDescriptorIn(BaseModel):
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
    attributes: List[str] = Field(default_factory=list)

    def to_descriptor(self) -> PropertyDescriptor:
        data = self.model_dump()
        data["attributes"] = tuple(self.attributes)
        return PropertyDescriptor(**data)


class EntitySchemaIn(BaseModel):
    name: str
    properties: List[PropertyDescriptorIn] = Field(default_factory=list)
    base_classes: List[str] = Field(default_factory=list)
    interfaces: List[str] = Field(default_factory=list)

    def to_schema(self) -> EntitySchema:
        return EntitySchema(
            name=self.name,
            properties=tuple(p.to_descriptor() for p in self.properties),
            base_classes=tuple(self.base_classes),
            interfaces=tuple(self.interfaces),
        )


class ViewModelSchemaIn(BaseModel):
    name: str
    properties: List[PropertyDescriptorIn] = Field(default_factory=list)
    # inferred from the class name when omitted
    category: Optional[ViewModelCategory] = None
    base_classes: List[str] = Field(default_factory=list)
    interfaces: List[str] = Field(default_factory=list)

    def to_schema(self) -> ViewModelSchema:
        return ViewModelSchema(
            name=self.name,
            properties=tuple(p.to_descriptor() for p in self.properties),
            category=self.category or infer_category(self.name),
            base_classes=tuple(self.base_classes),
            interfaces=tuple(self.interfaces),
        )


class PairIn(BaseModel):
    entity: str
    view_model: str


class AnalyzeRequest(BaseModel):
    entities: List[EntitySchemaIn]
    view_models: List[ViewModelSchemaIn]
    # explicit pairs; when omitted view models are paired by naming convention
    pairs: Optional[List[PairIn]] = None
    infer_facets: bool = False


class PropertyMappingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entity_property: str
    view_model_property: str
    entity_property_type: str
    view_model_property_type: str
    status: MappingStatus
    notes: str
    is_value_object_flattening: bool
    is_computed_property: bool
    is_navigation_mapping: bool


class MappingResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entity_name: str
    view_model_name: str
    view_model_category: ViewModelCategory
    mappings: List[PropertyMappingOut]
    matched_properties: List[str]
    missing_in_entity: List[str]
    missing_in_view_model: List[str]
    type_mismatches: List[str]
    derived_properties: List[str]
    flattened_properties: List[str]
    navigation_properties: List[str]


class CatalogEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    view_model: str
    property_name: str
    notes: str


class AnalyzeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    mapping_results: List[MappingResultOut]
    missing_properties_by_entity: Dict[str, List[str]]
    value_object_flattening_patterns: Dict[str, List[CatalogEntryOut]]
    computed_property_patterns: Dict[str, List[CatalogEntryOut]]
    statistics: Dict[str, int]
