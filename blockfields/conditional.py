"""Conditional visibility evaluation.

A conditional ``{field, operator, value}`` decides whether its owning field
is shown, based on the current value of a sibling field. The operator set
is closed; an unknown operator fails open (the field stays visible) so a
typo in a schema never hides data.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from blockfields.models.config import Conditional, FieldConfig

logger = logging.getLogger(__name__)


class Operator(str, Enum):
    """Supported conditional operators."""

    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    IN = "in"
    NOT_IN = "not_in"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_number(value: Any) -> float:
    """Coerce to float; None and blank strings are 0, anything else non-numeric is NaN."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def _to_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_empty(value: Any) -> bool:
    """True for None, blank strings and empty collections; 0 and False are not empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def values_equal(left: Any, right: Any) -> bool:
    """Loose equality used by ``==`` and ``!=``."""
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, bool) or isinstance(right, bool):
        return bool(left) == bool(right)
    if _is_number(left) and _is_number(right):
        return left == right
    return _to_text(left).lower() == _to_text(right).lower()


def _same_value(left: Any, right: Any) -> bool:
    """Strict equality for list membership: a bool only matches a bool."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    return left == right


def _is_member(value: Any, items: Any) -> bool:
    return any(_same_value(value, item) for item in items)


def _contains(haystack: Any, needle: Any) -> bool:
    if haystack is None:
        return False
    if isinstance(haystack, (list, tuple)):
        return _is_member(needle, haystack)
    return _to_text(needle).lower() in _to_text(haystack).lower()


def _compare(left: Any, right: Any, operator: Operator) -> bool:
    a, b = _to_number(left), _to_number(right)
    if operator is Operator.GT:
        return a > b
    if operator is Operator.LT:
        return a < b
    if operator is Operator.GE:
        return a >= b
    return a <= b


def evaluate(conditional: Union[Conditional, Mapping[str, Any]], watched_value: Any) -> bool:
    """Evaluate a conditional against the watched field's current value.

    Args:
        conditional: Rule to apply (a Conditional or a raw mapping)
        watched_value: Current value of the watched sibling field

    Returns:
        True when the owning field should be visible.
    """
    if not isinstance(conditional, Conditional):
        conditional = Conditional.from_dict(conditional)

    try:
        operator = Operator(conditional.operator)
    except ValueError:
        logger.warning(f"Unknown conditional operator '{conditional.operator}', field stays visible")
        return True

    expected = conditional.value

    if operator is Operator.EQ:
        return values_equal(watched_value, expected)
    if operator is Operator.NE:
        return not values_equal(watched_value, expected)
    if operator in (Operator.GT, Operator.LT, Operator.GE, Operator.LE):
        return _compare(watched_value, expected, operator)
    if operator is Operator.CONTAINS:
        return _contains(watched_value, expected)
    if operator is Operator.NOT_CONTAINS:
        return not _contains(watched_value, expected)
    if operator in (Operator.IN, Operator.NOT_IN):
        if not isinstance(expected, (list, tuple)):
            logger.warning(f"Operator '{operator.value}' needs a list to compare against, got {type(expected).__name__}")
            matched = False
        else:
            matched = _is_member(watched_value, expected)
        return matched if operator is Operator.IN else not matched
    if operator is Operator.EMPTY:
        return is_empty(watched_value)
    return not is_empty(watched_value)


def build_dependents(fields: Mapping[str, FieldConfig]) -> Dict[str, List[str]]:
    """Map each watched field name to the names of the fields that watch it."""
    dependents: Dict[str, List[str]] = {}
    for name, config in fields.items():
        if config.conditional is not None:
            dependents.setdefault(config.conditional.field, []).append(name)
    return dependents


def resolve_visibility(fields: Mapping[str, FieldConfig], values: Mapping[str, Any]) -> Dict[str, bool]:
    """Resolve the visibility of every field in one schema level.

    A field is hidden when the sibling it watches is missing from the schema
    or is itself hidden, and otherwise follows its conditional. Chains are
    resolved to any depth.
    """
    visibility: Dict[str, bool] = {}
    in_progress: set = set()

    def visible(name: str) -> bool:
        if name in visibility:
            return visibility[name]
        conditional = fields[name].conditional
        if conditional is None:
            visibility[name] = True
            return True

        watched = conditional.field
        if watched not in fields:
            result = False
        else:
            in_progress.add(name)
            if watched in in_progress:
                logger.warning(f"Conditional cycle through '{name}' and '{watched}'; using raw value")
                watched_visible = True
            else:
                watched_visible = visible(watched)
            in_progress.discard(name)
            result = watched_visible and evaluate(conditional, values.get(watched))

        visibility[name] = result
        return result

    for field_name in fields:
        visible(field_name)
    return visibility


def is_visible(name: str, fields: Mapping[str, FieldConfig], values: Mapping[str, Any]) -> Optional[bool]:
    """Visibility of a single field, or None if it is not in the schema."""
    if name not in fields:
        return None
    return resolve_visibility(fields, values)[name]
