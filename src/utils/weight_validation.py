"""Weight validation utilities for criteria categories.

Two strictness levels are used on purpose:

* A full replacement set (rebalance) must add up to exactly 100% within
  ``WEIGHT_TOLERANCE`` and every entry must lie in ``[0, 100]``.
* A single-category change (create/update) is only checked against the
  ceiling: the resulting total may stay below 100%.

Everything here is side-effect free; callers supply the numbers they read
from the database.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Tuple, Union

from src.utils.messages import get_message

MAX_TOTAL_WEIGHT = Decimal("100")
MIN_WEIGHT = Decimal("0")
WEIGHT_TOLERANCE = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric value to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass
class WeightViolation:
    """A single entry that breaks the per-category weight rules."""
    category_id: int
    weight: Decimal
    reason: str
    message: str

    def to_dict(self) -> dict:
        return {
            "category_id": self.category_id,
            "weight": str(self.weight),
            "reason": self.reason,
            "message": self.message,
        }


@dataclass
class WeightCheckResult:
    """Outcome of validating a complete weight distribution."""
    valid: bool
    total: Decimal
    delta: Decimal
    violations: List[WeightViolation] = field(default_factory=list)


@dataclass
class IncrementalCheck:
    """Outcome of checking a single weight change against the ceiling."""
    allowed: bool
    current_total: Decimal
    proposed_total: Decimal


def validate_weights(pairs: Iterable[Tuple[int, Number]]) -> WeightCheckResult:
    """
    Validate a complete set of (category_id, weight) pairs.

    Args:
        pairs: The full proposed distribution of active-category weights

    Returns:
        WeightCheckResult with the sum, its distance from 100 and any
        per-entry violations. ``valid`` requires both a total within
        tolerance of 100 and no violations.
    """
    total = Decimal("0")
    violations: List[WeightViolation] = []
    seen = set()

    for category_id, raw_weight in pairs:
        weight = to_decimal(raw_weight)
        total += weight

        if category_id in seen:
            violations.append(WeightViolation(
                category_id=category_id,
                weight=weight,
                reason="duplicate",
                message=get_message("weight", "duplicate", category_id=category_id)
            ))
        seen.add(category_id)

        if weight < MIN_WEIGHT:
            violations.append(WeightViolation(
                category_id=category_id,
                weight=weight,
                reason="negative",
                message=get_message("weight", "negative", category_id=category_id, weight=weight)
            ))
        elif weight > MAX_TOTAL_WEIGHT:
            violations.append(WeightViolation(
                category_id=category_id,
                weight=weight,
                reason="exceeds_maximum",
                message=get_message("weight", "exceeds_maximum", category_id=category_id, weight=weight)
            ))

    delta = total - MAX_TOTAL_WEIGHT
    valid = abs(delta) <= WEIGHT_TOLERANCE and not violations

    return WeightCheckResult(valid=valid, total=total, delta=delta, violations=violations)


def check_incremental_weight(other_active_total: Number, new_weight: Number) -> IncrementalCheck:
    """
    Check a single category weight against the 100% ceiling.

    Args:
        other_active_total: Sum of weights of every OTHER active category
        new_weight: Weight requested for the category being created or updated

    Returns:
        IncrementalCheck; ``allowed`` is False only when the new total exceeds 100.
    """
    current_total = to_decimal(other_active_total)
    proposed_total = current_total + to_decimal(new_weight)
    return IncrementalCheck(
        allowed=proposed_total <= MAX_TOTAL_WEIGHT,
        current_total=current_total,
        proposed_total=proposed_total
    )


def is_total_valid(total: Number) -> bool:
    """Check whether a stored total is within tolerance of 100%."""
    return abs(to_decimal(total) - MAX_TOTAL_WEIGHT) <= WEIGHT_TOLERANCE
