"""Translate filter parameters from the people listing into a profile predicate.

The predicate is a small expression tree: an ``AllOf`` conjunction whose
clauses are leaf constraints or an ``AnyOf`` of leaves. It can be compiled to
a MongoDB filter with :func:`to_mongo` or evaluated against plain documents
with :func:`matches`.
"""

import logging
import re
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel

from jodi.filters.budget import BUDGET_FIELD, BUDGET_NUMERIC_FIELD, parse_number

logger = logging.getLogger(__name__)


# --- Errors ---
class FilterError(Exception):
    """Base class for filter translation errors."""


class UnknownFilterFieldError(FilterError, ValueError):
    def __init__(self, field: str):
        super().__init__(f"Unknown filter field: {field}")
        self.field = field


class FilterTranslationError(FilterError, RuntimeError):
    """Raised when a classified field or predicate node has no handler."""


# --- Field classification ---
class FieldKind(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"
    BUDGET = "budget"
    BOUND = "bound"


PARTIAL_FIELDS = frozenset({
    "name", "gotra", "area", "state", "religion", "maritalStatus",
    "gender", "height", "complexion", "nativePlace", "age",
})

EXACT_FIELDS = frozenset({
    "caste", "country", "dob", "phoneNumber", "eatingHabits", "drinkingHabits",
    "smokingHabits", "disability", "occupation", "residence", "source",
})

# query parameter -> stored field
FIELD_ALIASES = {"search": "name"}

# range parameter -> (stored field, bound)
RANGE_BOUNDS = {
    "minAge": ("age", "low"),
    "maxAge": ("age", "high"),
    "minHeight": ("height", "low"),
    "maxHeight": ("height", "high"),
}


def classify_field(key: str, strict: bool = True) -> FieldKind:
    if key in RANGE_BOUNDS:
        return FieldKind.BOUND
    field = FIELD_ALIASES.get(key, key)
    if field == BUDGET_FIELD:
        return FieldKind.BUDGET
    if field in PARTIAL_FIELDS:
        return FieldKind.PARTIAL
    if field in EXACT_FIELDS or not strict:
        return FieldKind.EXACT
    raise UnknownFilterFieldError(key)


# --- Predicate tree ---
class ExactMatch(BaseModel):
    kind: Literal["exact"] = "exact"
    field: str
    value: str

    class Config:
        frozen = True


class PartialText(BaseModel):
    kind: Literal["partial"] = "partial"
    field: str
    text: str

    class Config:
        frozen = True


class NumericRange(BaseModel):
    kind: Literal["range"] = "range"
    field: str
    low: float
    high: float

    class Config:
        frozen = True


class NumericEquals(BaseModel):
    kind: Literal["equals"] = "equals"
    field: str
    value: float

    class Config:
        frozen = True


class TextRange(BaseModel):
    """Inclusive bounds on a stored string, compared in string order."""
    kind: Literal["text_range"] = "text_range"
    field: str
    low: Optional[str] = None
    high: Optional[str] = None

    class Config:
        frozen = True


Leaf = Union[ExactMatch, PartialText, NumericRange, NumericEquals, TextRange]


class AnyOf(BaseModel):
    kind: Literal["any"] = "any"
    clauses: List[Leaf]

    class Config:
        frozen = True


class AllOf(BaseModel):
    kind: Literal["all"] = "all"
    clauses: List[Union[Leaf, AnyOf]] = []

    class Config:
        frozen = True


Clause = Union[Leaf, AnyOf]


# --- Budget parser ---
def parse_budget_filter(raw: str) -> Optional[Clause]:
    """Turn one budget filter value into a constraint.

    ``"500000-1000000"`` becomes an inclusive range on budgetNumeric,
    ``"500000"`` becomes numeric equality OR a text match on budget, and
    anything that does not parse falls back to a text match on budget.
    """
    value = raw.strip()
    if not value:
        return None

    if "-" in value:
        low_text, high_text = value.split("-", 1)
        low, high = parse_number(low_text), parse_number(high_text)
        if low is not None and high is not None:
            return NumericRange(field=BUDGET_NUMERIC_FIELD, low=low, high=high)
        return PartialText(field=BUDGET_FIELD, text=value)

    amount = parse_number(value)
    if amount is None:
        return PartialText(field=BUDGET_FIELD, text=value)
    return AnyOf(clauses=[
        NumericEquals(field=BUDGET_NUMERIC_FIELD, value=amount),
        PartialText(field=BUDGET_FIELD, text=value),
    ])


# --- Query assembler ---
def build_predicate(params: Mapping[str, Any], strict: bool = True) -> AllOf:
    """Combine every non-empty filter parameter into one conjunction.

    Unknown keys raise :class:`UnknownFilterFieldError` unless ``strict`` is
    false, in which case they become exact matches on a same-named field.
    ``minAge``/``maxAge`` and ``minHeight``/``maxHeight`` merge into one
    :class:`TextRange` per field.
    """
    clauses: List[Clause] = []
    bound_positions: Dict[str, int] = {}
    for key, raw in params.items():
        if raw is None:
            continue
        value = str(raw).strip()
        if not value:
            continue

        kind = classify_field(key, strict=strict)
        field = FIELD_ALIASES.get(key, key)
        if kind is FieldKind.BOUND:
            field, side = RANGE_BOUNDS[key]
            if field in bound_positions:
                index = bound_positions[field]
                clauses[index] = clauses[index].model_copy(update={side: value})
            else:
                bound_positions[field] = len(clauses)
                clauses.append(TextRange(field=field, **{side: value}))
            continue
        if kind is FieldKind.BUDGET:
            clause = parse_budget_filter(value)
        elif kind is FieldKind.PARTIAL:
            clause = PartialText(field=field, text=value)
        elif kind is FieldKind.EXACT:
            clause = ExactMatch(field=field, value=value)
        else:
            raise FilterTranslationError(f"No handler for field kind {kind!r} (field {key!r})")

        if clause is not None:
            clauses.append(clause)
    return AllOf(clauses=clauses)


# --- Backends ---
def _leaf_to_mongo(node: Leaf) -> Dict[str, Any]:
    if isinstance(node, ExactMatch):
        return {node.field: node.value}
    if isinstance(node, PartialText):
        return {node.field: {"$regex": re.escape(node.text), "$options": "i"}}
    if isinstance(node, NumericRange):
        return {node.field: {"$gte": node.low, "$lte": node.high}}
    if isinstance(node, NumericEquals):
        return {node.field: node.value}
    if isinstance(node, TextRange):
        bounds = {}
        if node.low is not None:
            bounds["$gte"] = node.low
        if node.high is not None:
            bounds["$lte"] = node.high
        return {node.field: bounds}
    raise FilterTranslationError(f"Cannot compile predicate node {node!r}")


def _clause_to_mongo(node: Clause) -> Dict[str, Any]:
    if isinstance(node, AnyOf):
        return {"$or": [_leaf_to_mongo(leaf) for leaf in node.clauses]}
    return _leaf_to_mongo(node)


def to_mongo(predicate: AllOf) -> Dict[str, Any]:
    if not predicate.clauses:
        return {}
    return {"$and": [_clause_to_mongo(clause) for clause in predicate.clauses]}


def translate_filters(params: Mapping[str, Any], strict: bool = True) -> Dict[str, Any]:
    """Filter parameters in, MongoDB filter document out."""
    query = to_mongo(build_predicate(params, strict=strict))
    logger.debug("Applied people filter: %s", query)
    return query


def _leaf_matches(node: Leaf, document: Mapping[str, Any]) -> bool:
    actual = document.get(node.field)
    if isinstance(node, ExactMatch):
        return actual == node.value
    if isinstance(node, PartialText):
        return actual is not None and node.text.casefold() in str(actual).casefold()
    if isinstance(node, (NumericRange, NumericEquals)):
        if isinstance(actual, bool) or not isinstance(actual, (int, float)):
            return False
        if isinstance(node, NumericRange):
            return node.low <= actual <= node.high
        return actual == node.value
    if isinstance(node, TextRange):
        # Mongo only compares string bounds against string values
        if not isinstance(actual, str):
            return False
        if node.low is not None and actual < node.low:
            return False
        return node.high is None or actual <= node.high
    raise FilterTranslationError(f"Cannot evaluate predicate node {node!r}")


def matches(predicate: AllOf, document: Mapping[str, Any]) -> bool:
    """Evaluate a predicate against a single in-memory document."""
    for clause in predicate.clauses:
        if isinstance(clause, AnyOf):
            if not any(_leaf_matches(leaf, document) for leaf in clause.clauses):
                return False
        elif not _leaf_matches(clause, document):
            return False
    return True
