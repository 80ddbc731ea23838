"""
This module runs the analysis over many entity / view-model pairs and merges the
results into one AnalysisSummary.

Pairs are independent, so they can be analyzed by several worker threads. The
merge is done by a single reducer (SummaryBuilder.build) over the results sorted
by (entity name, view-model name): the summary is the same whatever the number
of workers or the completion order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from mapcheck.core.config import ANALYSIS_MAX_WORKERS
from .checker import analyze_pair
from .models import (
    AnalysisSummary,
    CatalogEntry,
    EntitySchema,
    MappingResult,
    MappingStatus,
    ViewModelSchema,
    validate_schema,
)
from .pairing import pair_view_models

logger = logging.getLogger(__name__)

Pair = Tuple[EntitySchema, ViewModelSchema]


def _append_unique(catalog: Dict[str, list], key: str, value) -> None:
    items = catalog.setdefault(key, [])
    if value not in items:
        items.append(value)


class SummaryBuilder:
    """Collects MappingResults and folds them into an AnalysisSummary."""

    def __init__(self, entities: Iterable[EntitySchema] = (), view_models: Iterable[ViewModelSchema] = ()):
        self._entities = tuple(entities)
        self._view_models = tuple(view_models)
        self._results: List[MappingResult] = []

    def add(self, result: MappingResult) -> None:
        self._results.append(result)

    def build(self) -> AnalysisSummary:
        results = sorted(self._results, key=lambda r: (r.entity_name, r.view_model_name))

        missing: Dict[str, list] = {entity.name: [] for entity in self._entities}
        flattening: Dict[str, list] = {}
        computed: Dict[str, list] = {}

        for result in results:
            for name in result.missing_in_entity:
                _append_unique(missing, result.entity_name, name)
            for mapping in result.mappings:
                entry = CatalogEntry(
                    view_model=result.view_model_name,
                    property_name=mapping.view_model_property,
                    notes=mapping.notes,
                )
                if mapping.status == MappingStatus.FLATTENED:
                    _append_unique(flattening, result.entity_name, entry)
                elif mapping.status == MappingStatus.DERIVED:
                    _append_unique(computed, result.entity_name, entry)

        return AnalysisSummary(
            entities=self._entities,
            view_models=self._view_models,
            mapping_results=tuple(results),
            missing_properties_by_entity={k: tuple(v) for k, v in missing.items()},
            value_object_flattening_patterns={k: tuple(v) for k, v in flattening.items()},
            computed_property_patterns={k: tuple(v) for k, v in computed.items()},
        )


def _analyze(pair: Pair) -> MappingResult:
    entity, view_model = pair
    return analyze_pair(entity, view_model)


def analyze_all(
    entities: Iterable[EntitySchema],
    view_models: Iterable[ViewModelSchema],
    pairs: Optional[Sequence[Pair]] = None,
    max_workers: Optional[int] = None,
) -> AnalysisSummary:
    """
    Analyzes every entity / view-model pair and builds the summary.

    Args:
        entities: All entity schemas.
        view_models: All view-model schemas.
        pairs: Pairs to analyze. Defaults to the pairs linked by naming convention.
        max_workers: Worker threads. Defaults to the ANALYSIS_MAX_WORKERS setting;
            1 (or less) analyzes the pairs in the calling thread.

    Returns:
        AnalysisSummary: the merged results.

    Raises:
        InvalidDescriptor: if any schema or property has an empty name.
    """
    entities = tuple(entities)
    view_models = tuple(view_models)
    for schema in entities + view_models:
        validate_schema(schema)

    if pairs is None:
        pairs = pair_view_models(entities, view_models)
    else:
        for entity, view_model in pairs:
            validate_schema(entity)
            validate_schema(view_model)
        pairs = sorted(pairs, key=lambda pair: (pair[0].name, pair[1].name))

    workers = ANALYSIS_MAX_WORKERS if max_workers is None else max_workers
    if workers > 1 and len(pairs) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(_analyze, pairs))
    else:
        results = [_analyze(pair) for pair in pairs]

    builder = SummaryBuilder(entities, view_models)
    for result in results:
        builder.add(result)
    summary = builder.build()

    logger.info(
        "Mapping analysis completed: %d entities, %d view models, %d pairs",
        len(entities), len(view_models), len(results),
    )
    return summary
