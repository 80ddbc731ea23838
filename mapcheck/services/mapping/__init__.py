"""
Package `mapcheck.services.mapping`

This package checks whether view models faithfully, completely and type-safely
represent the domain entities they project.

Public API:
- analyze_pair(entity, view_model) -> MappingResult
- analyze_all(entities, view_models, pairs=None, max_workers=None) -> AnalysisSummary
- classify(entity_property, view_model_property) -> PropertyMapping
- are_types_compatible(type_a, type_b) -> bool

Note: the logic is split across separate modules:
- models: descriptors, mapping outcomes and results
- rules: loading of the static tables (mapping_rules.json)
- type_utils: type normalization and compatibility
- matchers: value-object flattening and naming aliases
- classifier: ordered classification of one property pair
- scanners: missing properties in both directions
- checker: analysis of one entity / view-model pair
- summary: analysis of many pairs and the merged summary
- pairing / facets: naming conventions for pairing and facet inference
"""

from .checker import analyze_pair
from .classifier import classify
from .models import (
    AnalysisSummary,
    EntitySchema,
    MappingResult,
    MappingStatus,
    PropertyDescriptor,
    PropertyMapping,
    ViewModelCategory,
    ViewModelSchema,
)
from .scanners import find_missing_in_entity, find_missing_in_view_model
from .summary import SummaryBuilder, analyze_all
from .type_utils import are_types_compatible

__all__ = [
    "AnalysisSummary",
    "EntitySchema",
    "MappingResult",
    "MappingStatus",
    "PropertyDescriptor",
    "PropertyMapping",
    "SummaryBuilder",
    "ViewModelCategory",
    "ViewModelSchema",
    "analyze_all",
    "analyze_pair",
    "are_types_compatible",
    "classify",
    "find_missing_in_entity",
    "find_missing_in_view_model",
]
