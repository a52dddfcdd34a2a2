"""
Line-item pricing model for VINQuoter.

Pure, reducer-style functions over an ordered list of RepairLine values.
Each mutating operation returns a new list and leaves its input untouched;
callers recompute totals with compute_totals() after every change.

Formulas:
- laborCost       = srtHours * laborRate            (per line)
- totalCost       = laborCost + partsCost           (per line)
- partsWithMarkup = partsCost * (1 + markup / 100)
- baseGrandTotal  = laborCost + partsWithMarkup
- finalGrandTotal = baseGrandTotal * (1 + margin / 100)

No rounding is applied here; presentation rounds to cents.
Negative hours and costs are carried through unclamped.
"""

import math
from typing import Any, Dict, Iterable, List, Optional, Union

from models.quote import QuoteTotals, RawRepair, RepairLine


DEFAULT_OPERATION_LABEL = "Custom Operation"
DEFAULT_SRT_HOURS = 1.0
DEFAULT_PARTS_COST = 0.0

# Editable fields, accepted under both their wire and Python names
EDITABLE_FIELDS: Dict[str, str] = {
    "operation": "operation",
    "srtHours": "srt_hours",
    "srt_hours": "srt_hours",
    "partsCost": "parts_cost",
    "parts_cost": "parts_cost",
}

RawRepairInput = Union[RawRepair, Dict[str, Any]]


def parse_number(value: Any) -> float:
    """
    Coerce user input to a float, substituting 0 when it cannot be parsed.

    Handles:
    - Numbers (int/float): returned as float
    - Strings: stripped, blank or underscore-separated counts as 0
    - Anything else, including NaN and infinities: 0
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip()
        # float() accepts digit separators ("1_000"); plain decimal input does not
        if not cleaned or "_" in cleaned:
            return 0.0
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_raw(item: RawRepairInput) -> RawRepair:
    if isinstance(item, RawRepair):
        return item
    return RawRepair.model_validate(item)


def seed_lines(raw_repairs: Iterable[RawRepairInput], labor_rate: float) -> List[RepairLine]:
    """
    Price catalog tuples at a labor rate.

    Args:
        raw_repairs: RawRepair models or ``{operation, srtHours, partsCost}`` dicts
        labor_rate: Rate fixed onto every produced line

    Returns:
        RepairLine list in input order
    """
    return [
        RepairLine(
            operation=raw.operation,
            srt_hours=raw.srt_hours,
            labor_rate=labor_rate,
            parts_cost=raw.parts_cost,
        )
        for raw in map(_as_raw, raw_repairs)
    ]


def edit_line(lines: List[RepairLine], index: int, field: str, value: Any) -> List[RepairLine]:
    """
    Apply a single field edit to one line.

    ``operation`` is stored verbatim; numeric fields go through parse_number().
    Derived values follow from the computed properties on RepairLine.

    Raises:
        IndexError: If index does not address an existing line
        ValueError: If field is not editable
    """
    if not 0 <= index < len(lines):
        raise IndexError(f"Line index {index} out of range for {len(lines)} line(s)")

    attribute = EDITABLE_FIELDS.get(field)
    if attribute is None:
        raise ValueError(f"Unknown field: {field}. Editable fields: operation, srtHours, partsCost")

    if attribute == "operation":
        new_value: Any = "" if value is None else str(value)
    else:
        new_value = parse_number(value)

    updated = list(lines)
    updated[index] = lines[index].model_copy(update={attribute: new_value})
    return updated


def add_line(lines: List[RepairLine], labor_rate: float) -> List[RepairLine]:
    """Append a default line priced at the current labor rate."""
    new_line = RepairLine(
        operation=DEFAULT_OPERATION_LABEL,
        srt_hours=DEFAULT_SRT_HOURS,
        labor_rate=labor_rate,
        parts_cost=DEFAULT_PARTS_COST,
    )
    return [*lines, new_line]


def remove_line(lines: List[RepairLine], index: int) -> List[RepairLine]:
    """
    Remove exactly one line, keeping the order of the rest.

    An index that addresses no line (including any index on an empty list)
    leaves the list unchanged.
    """
    return [line for position, line in enumerate(lines) if position != index]


def compute_totals(
    lines: List[RepairLine],
    parts_markup_percent: Optional[float] = None,
    margin_percent: Optional[float] = None,
) -> QuoteTotals:
    """
    Compute quote totals from the current lines and percentages.

    Args:
        lines: Current repair lines
        parts_markup_percent: Markup applied to parts only (None = 0)
        margin_percent: Margin applied to labor + marked-up parts (None = 0)

    Returns:
        QuoteTotals at full precision
    """
    if not lines:
        return QuoteTotals.zero()

    markup = parts_markup_percent or 0.0
    margin = margin_percent or 0.0

    labor_cost = sum(line.labor_cost for line in lines)
    parts_cost = sum(line.parts_cost for line in lines)
    parts_with_markup = parts_cost * (1 + markup / 100)
    base_grand_total = labor_cost + parts_with_markup
    final_grand_total = base_grand_total * (1 + margin / 100)

    return QuoteTotals(
        labor_cost=labor_cost,
        parts_cost=parts_cost,
        parts_with_markup=parts_with_markup,
        base_grand_total=base_grand_total,
        final_grand_total=final_grand_total,
    )
