"""Budget amount parsing shared by filters and writes.

A stored ``budget`` is a display string such as ``"₹5,00,000"``. The derived
``budgetNumeric`` field holds the number embedded in it, or is absent when
there is none.
"""

import re
from typing import Dict, Optional, Tuple

BUDGET_FIELD = "budget"
BUDGET_NUMERIC_FIELD = "budgetNumeric"

_NUMBER_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")
_CURRENCY_RE = re.compile(r"(₹|\$|\bINR\b|\bRs\.?)", re.IGNORECASE)


def parse_number(text: str) -> Optional[float]:
    """Parse a plain numeric literal after removing grouping commas.

    Only digits with an optional decimal point are accepted; signs,
    exponents and ``inf``/``nan`` are rejected.
    """
    cleaned = text.replace(",", "").strip()
    if not _NUMBER_RE.match(cleaned):
        return None
    return float(cleaned)


def parse_budget_amount(budget: Optional[str]) -> Optional[float]:
    """Extract the numeric value of a stored budget string.

    >>> parse_budget_amount("₹5,00,000")
    500000.0
    >>> parse_budget_amount("5 Lakhs") is None
    True
    """
    if budget is None:
        return None
    without_currency = _CURRENCY_RE.sub("", str(budget))
    return parse_number(re.sub(r"\s+", "", without_currency))


def budget_fields(budget: Optional[str]) -> Tuple[Dict[str, object], Dict[str, str]]:
    """Return the ``$set`` and ``$unset`` parts that keep budgetNumeric in step with budget."""
    amount = parse_budget_amount(budget)
    if amount is None:
        return {}, {BUDGET_NUMERIC_FIELD: ""}
    return {BUDGET_NUMERIC_FIELD: amount}, {}
