"""
This module orchestrates an analysis request: it converts the API payload into
the analysis data model, optionally infers missing facets, resolves the
entity / view-model pairs and runs the mapping analysis.
"""

import logging
from typing import List, Tuple

from mapcheck.models.schemas import AnalyzeRequest, AnalyzeResponse
from mapcheck.services.mapping import analyze_all
from mapcheck.services.mapping.facets import infer_facets
from mapcheck.services.mapping.models import EntitySchema, ViewModelSchema

logger = logging.getLogger(__name__)


def _resolve_pairs(
    request: AnalyzeRequest,
    entities: Tuple[EntitySchema, ...],
    view_models: Tuple[ViewModelSchema, ...],
) -> List[Tuple[EntitySchema, ViewModelSchema]]:
    """
    Maps the explicit (entity name, view-model name) pairs of the request onto schemas.

    Raises:
        ValueError: If a pair references an entity or view model that is not in the request.
    """
    entities_by_name = {e.name: e for e in entities}
    view_models_by_name = {vm.name: vm for vm in view_models}

    pairs = []
    for pair in request.pairs or []:
        entity = entities_by_name.get(pair.entity)
        if entity is None:
            raise ValueError(f"Unknown entity in pair: {pair.entity}")
        view_model = view_models_by_name.get(pair.view_model)
        if view_model is None:
            raise ValueError(f"Unknown view model in pair: {pair.view_model}")
        pairs.append((entity, view_model))
    return pairs


def perform_analysis(request: AnalyzeRequest) -> AnalyzeResponse:
    """
    Runs the mapping analysis described by an API request.

    Args:
        request (AnalyzeRequest): Entities, view models, optional explicit pairs
            and the facet inference flag.

    Returns:
        AnalyzeResponse: The serialized analysis summary.

    Raises:
        ValueError: If a pair is unknown or a descriptor is invalid (InvalidDescriptor).
    """
    entities = tuple(e.to_schema() for e in request.entities)
    view_models = tuple(vm.to_schema() for vm in request.view_models)

    if request.infer_facets:
        entities, view_models = infer_facets(entities, view_models)

    pairs = _resolve_pairs(request, entities, view_models) if request.pairs is not None else None

    logger.info(
        "Analysis requested: %d entities, %d view models, %s pairs",
        len(entities), len(view_models), len(pairs) if pairs is not None else "auto",
    )

    summary = analyze_all(entities, view_models, pairs=pairs)
    return AnalyzeResponse.model_validate(summary)
