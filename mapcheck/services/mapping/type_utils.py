"""
Module `type_utils` — type expression normalization and compatibility.

Main functions:
- normalize_type(type_expr: str) -> str
    Strips namespace qualifiers, rewrites `Nullable<T>` as `T?` and maps primitive
    spellings (int, Int32, Guid, ...) to the canonical tags of the rule tables.

- are_types_compatible(type_a: str, type_b: str) -> bool
    Decides whether an entity type and a view-model type can represent the same
    value. The check is symmetric: the argument order never changes the answer.

Type expressions are plain strings as produced by the extraction step, e.g.
"decimal", "System.Guid", "int?", "List<OrderLine>", "string[]".
"""

import re
from typing import Tuple

from .rules import get_rules

# dotted qualifiers such as "System." or "System.Collections.Generic."
_NAMESPACE_RE = re.compile(r"\b(?:[A-Za-z_]\w*\.)+(?=[A-Za-z_])")
_NULLABLE_RE = re.compile(r"^Nullable<(.+)>$")


def _split_nullable(type_expr: str) -> Tuple[str, bool]:
    if type_expr.endswith("?"):
        return type_expr[:-1], True
    return type_expr, False


def normalize_type(type_expr: str) -> str:
    """
    Normalizes a type expression to the bare shape used for comparisons.

    Examples:
        "System.Int32"                        -> "integer"
        "Nullable<System.DateTime>"           -> "date-time?"
        "System.Collections.Generic.List<Foo>" -> "List<Foo>"
    """
    if not type_expr:
        return ""
    s = "".join(type_expr.split())
    s = _NAMESPACE_RE.sub("", s)
    m = _NULLABLE_RE.match(s)
    if m:
        s = m.group(1) + "?"
    base, nullable = _split_nullable(s)
    base = get_rules().primitive_spellings.get(base, base)
    return base + "?" if nullable else base


def is_collection_type(type_expr: str) -> bool:
    """True for `Wrapper<T>` (List, ICollection, IEnumerable) and `T[]`, nullable or not."""
    base, _ = _split_nullable(normalize_type(type_expr))
    if base.endswith("[]"):
        return True
    return any(
        base.startswith(f"{wrapper}<") and base.endswith(">")
        for wrapper in get_rules().collection_wrappers
    )


def element_type(type_expr: str) -> str:
    """Returns the element type of a collection expression, or the expression itself."""
    base, _ = _split_nullable(normalize_type(type_expr))
    if "<" in base:
        start = base.index("<") + 1
        end = base.rindex(">") if ">" in base else -1
        return base[start:end] if end > start else base
    if base.endswith("[]"):
        return base[:-2]
    return base


def are_primitive_types_compatible(type_a: str, type_b: str) -> bool:
    """True when both normalized types belong to the same primitive group."""
    return any(type_a in group and type_b in group for group in get_rules().primitive_groups)


def are_types_compatible(type_a: str, type_b: str) -> bool:
    """
    Decides structural compatibility between two type expressions.

    Rules, in order:
    1. identical after normalization;
    2. one is the nullable form of the other;
    3. both are collections and their element types are compatible;
    4. both are primitives of the same group.
    Unknown type names only match themselves (and their nullable form).
    """
    norm_a = normalize_type(type_a)
    norm_b = normalize_type(type_b)

    if norm_a == norm_b:
        return True

    if norm_a == norm_b + "?" or norm_b == norm_a + "?":
        return True

    coll_a = is_collection_type(norm_a)
    coll_b = is_collection_type(norm_b)
    if coll_a and coll_b:
        return are_types_compatible(element_type(norm_a), element_type(norm_b))
    if coll_a or coll_b:
        return False

    return are_primitive_types_compatible(norm_a, norm_b)
