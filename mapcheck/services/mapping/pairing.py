"""
Naming conventions linking view models to the entity they project.

A view model named `CustomerDetailViewModel` or `CreateCustomerVM` belongs to the
entity `Customer`: the decorations Create/Update/Detail/List/ViewModel/VM are
removed and the rest is compared with the entity name.
"""

from typing import Iterable, List, Tuple

from .models import EntitySchema, ViewModelCategory, ViewModelSchema

_NAME_DECORATIONS = ("Create", "Update", "Detail", "List", "ViewModel", "VM")

_CATEGORY_MARKERS = (
    ("Create", ViewModelCategory.CREATE),
    ("Update", ViewModelCategory.UPDATE),
    ("Detail", ViewModelCategory.DETAIL),
    ("List", ViewModelCategory.LIST),
    ("Analytics", ViewModelCategory.ANALYTICS),
    ("Summary", ViewModelCategory.SUMMARY),
)


def infer_category(view_model_name: str) -> ViewModelCategory:
    """Category suggested by the view-model class name, GENERAL when nothing matches."""
    for marker, category in _CATEGORY_MARKERS:
        if marker in view_model_name:
            return category
    return ViewModelCategory.GENERAL


def is_view_model_for_entity(view_model_name: str, entity_name: str) -> bool:
    stripped = view_model_name
    for decoration in _NAME_DECORATIONS:
        stripped = stripped.replace(decoration, "")
    stripped = stripped.lower()
    entity = entity_name.lower()
    if not stripped or not entity:
        return False
    return stripped == entity or entity in stripped or stripped in entity


def pair_view_models(
    entities: Iterable[EntitySchema], view_models: Iterable[ViewModelSchema]
) -> List[Tuple[EntitySchema, ViewModelSchema]]:
    """
    Returns every (entity, view model) pair linked by name, sorted by
    (entity name, view-model name).
    """
    view_models = list(view_models)
    pairs = [
        (entity, view_model)
        for entity in entities
        for view_model in view_models
        if is_view_model_for_entity(view_model.name, entity.name)
    ]
    return sorted(pairs, key=lambda pair: (pair[0].name, pair[1].name))
