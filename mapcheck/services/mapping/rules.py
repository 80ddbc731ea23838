"""
Module `rules` — loading of the static lookup tables used by the analysis.

The tables live in `mapping_rules.json` in this package (or in the file named by
the MAPPING_RULES_PATH setting) and are turned into a read-only `MappingRules`
object:
- value_objects: value-object type -> ordered constituent field fragments
- primitive_groups: groups of interchangeable primitive type tags
- primitive_spellings: language-specific spelling -> canonical primitive tag
- aliases: canonical property name -> accepted alias names
- collection_wrappers: generic collection type names (List, ICollection, ...)
- computed_patterns / base_entity_properties: naming conventions used by facet inference

The rules are loaded once at import (`get_rules()` returns the shared instance).
Each section missing from the file falls back to the built-in table, so a broken
file degrades the analysis instead of stopping it.
"""

import json
import logging
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from mapcheck.core.config import MAPPING_RULES_PATH

# path of the bundled rules inside the same package
_RULES_PATH = os.path.join(os.path.dirname(__file__), "mapping_rules.json")

logger = logging.getLogger(__name__)

# Built-in tables, used when the JSON is missing or a section is invalid.
_FALLBACK_RULES: Dict[str, Any] = {
    "value_objects": {
        "Address": ["Street", "City", "State", "ZipCode", "Country"],
        "Phone": ["CountryCode", "AreaCode", "Number"],
        "Money": ["Amount", "Currency"],
    },
    "primitive_groups": [
        ["integer", "long-integer", "decimal", "double", "float"],
        ["string", "character"],
        ["boolean"],
        ["date-time", "date-only"],
        ["unique-identifier"],
    ],
    "primitive_spellings": {
        "int": "integer", "Int32": "integer",
        "long": "long-integer", "Int64": "long-integer",
        "Decimal": "decimal", "Double": "double", "Single": "float",
        "String": "string", "char": "character", "Char": "character",
        "bool": "boolean", "Boolean": "boolean",
        "DateTime": "date-time", "DateOnly": "date-only", "date": "date-only",
        "Guid": "unique-identifier",
    },
    "aliases": {"Id": ["Id"], "Name": ["Name"], "Number": ["Number"], "Code": ["Code"]},
    "collection_wrappers": ["List", "ICollection", "IEnumerable"],
    "computed_patterns": ["Display", "Name", "Full", "Total", "Count", "Summary", "Formatted"],
    "base_entity_properties": ["Id", "CreatedAt", "UpdatedAt"],
}


@dataclass(frozen=True)
class MappingRules:
    value_objects: Mapping[str, Tuple[str, ...]]
    primitive_groups: Tuple[FrozenSet[str], ...]
    primitive_spellings: Mapping[str, str]
    aliases: Mapping[str, Tuple[str, ...]]
    collection_wrappers: Tuple[str, ...]
    computed_patterns: Tuple[str, ...]
    base_entity_properties: FrozenSet[str]


def _read_rules_json(path: str) -> Optional[dict]:
    """Reads the rules file, returning None if it is absent or unreadable."""
    if not os.path.exists(path):
        logger.warning("Mapping rules file not found: %s", path)
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        logger.exception("Error reading mapping rules from %s", path)
        return None
    if not isinstance(data, dict):
        logger.warning("Mapping rules in %s must be a JSON object, got %s", path, type(data).__name__)
        return None
    return data


def _section(data: dict, key: str, expected: type) -> Any:
    value = data.get(key)
    if isinstance(value, expected) and value:
        return value
    if key in data:
        logger.warning("Invalid '%s' section in mapping rules, using built-in table", key)
    return _FALLBACK_RULES[key]


def _string_list(values: Any) -> Tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(v for v in values if isinstance(v, str) and v)


def load_mapping_rules(path: Optional[str] = None) -> MappingRules:
    """
    Loads and freezes the mapping rules.

    Args:
        path (Optional[str]): JSON file to read. Defaults to the bundled `mapping_rules.json`.

    Returns:
        MappingRules: immutable tables; built-in values replace any missing or invalid section.
    """
    source = path or _RULES_PATH
    data = _read_rules_json(source)
    if data is None:
        logger.info("Using built-in mapping rules")
        data = {}
    else:
        logger.info("Mapping rules loaded from %s", source)

    value_objects = {
        str(vo): _string_list(fragments)
        for vo, fragments in _section(data, "value_objects", dict).items()
    }
    groups = tuple(
        frozenset(_string_list(group))
        for group in _section(data, "primitive_groups", list)
        if _string_list(group)
    )
    spellings = {
        str(k): str(v)
        for k, v in _section(data, "primitive_spellings", dict).items()
        if isinstance(v, str)
    }
    aliases = {
        str(name): _string_list(alias_list)
        for name, alias_list in _section(data, "aliases", dict).items()
    }

    return MappingRules(
        value_objects=MappingProxyType(value_objects),
        primitive_groups=groups,
        primitive_spellings=MappingProxyType(spellings),
        aliases=MappingProxyType(aliases),
        collection_wrappers=_string_list(_section(data, "collection_wrappers", list)),
        computed_patterns=_string_list(_section(data, "computed_patterns", list)),
        base_entity_properties=frozenset(_string_list(_section(data, "base_entity_properties", list))),
    )


# loaded once
_RULES = load_mapping_rules(MAPPING_RULES_PATH)


def get_rules() -> MappingRules:
    """Returns the rules loaded at import."""
    return _RULES
