"""Quote Pydantic models for VINQuoter.

This module defines the repair line items, the aggregate totals shown on a
quote, and the structured response returned by the quote boundary.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# =============================================================================
# LINE ITEMS
# =============================================================================


class RawRepair(BaseModel):
    """Unpriced repair operation as supplied by the repair catalog."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    operation: str = Field(..., description="Operation label")
    srt_hours: float = Field(..., alias="srtHours", description="Standard repair time in hours")
    parts_cost: float = Field(..., alias="partsCost", description="Parts cost")


class RepairLine(BaseModel):
    """One priced repair operation.

    ``labor_cost`` and ``total_cost`` are computed from the current inputs, so
    an edited line can never carry stale derived values. Lines are frozen;
    edits produce a new line via ``model_copy``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    operation: str = Field(..., description="Operation label (user-editable)")
    srt_hours: float = Field(..., alias="srtHours", description="Standard repair time in hours")
    labor_rate: float = Field(..., alias="laborRate", description="Labor rate fixed at line creation")
    parts_cost: float = Field(..., alias="partsCost", description="Parts cost")

    @computed_field(alias="laborCost")
    @property
    def labor_cost(self) -> float:
        """SRT hours multiplied by the line's labor rate."""
        return self.srt_hours * self.labor_rate

    @computed_field(alias="totalCost")
    @property
    def total_cost(self) -> float:
        """Labor cost plus parts cost."""
        return self.labor_cost + self.parts_cost


# =============================================================================
# TOTALS
# =============================================================================


class QuoteTotals(BaseModel):
    """Aggregate totals over the current line items.

    Purely derived from the lines and the two percentages; never patched in
    place. Values are kept at full precision, rounding is a display concern.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    labor_cost: float = Field(default=0.0, alias="laborCost")
    parts_cost: float = Field(default=0.0, alias="partsCost")
    parts_with_markup: float = Field(default=0.0, alias="partsWithMarkup")
    base_grand_total: float = Field(default=0.0, alias="baseGrandTotal")
    final_grand_total: float = Field(default=0.0, alias="finalGrandTotal")

    @property
    def margin_amount(self) -> float:
        """Dollar amount added by the margin percentage."""
        return self.final_grand_total - self.base_grand_total

    @classmethod
    def zero(cls) -> "QuoteTotals":
        """Create all-zero totals."""
        return cls()


class BoundaryTotals(BaseModel):
    """Totals attached to a quote response, before markup and margin."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    labor_cost: float = Field(default=0.0, alias="laborCost")
    parts_cost: float = Field(default=0.0, alias="partsCost")
    grand_total: float = Field(default=0.0, alias="grandTotal")

    @classmethod
    def from_lines(cls, lines: List[RepairLine]) -> "BoundaryTotals":
        """Sum labor, parts and line totals."""
        return cls(
            labor_cost=sum(line.labor_cost for line in lines),
            parts_cost=sum(line.parts_cost for line in lines),
            grand_total=sum(line.total_cost for line in lines),
        )


# =============================================================================
# QUOTE RESPONSE
# =============================================================================


class QuoteResult(BaseModel):
    """Structured quote returned by the quote boundary."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    vin: str = Field(..., description="Vehicle identification number as requested")
    vehicle: str = Field(..., description="Decoded vehicle description or placeholder")
    repairs: List[RepairLine] = Field(default_factory=list, description="Priced repair lines")
    totals: BoundaryTotals = Field(default_factory=BoundaryTotals)
    labor_rate: Optional[float] = Field(
        default=None, alias="laborRate", description="Labor rate used for pricing, when the service reports it"
    )

    def to_dict(self) -> dict:
        """Convert to a camelCase dictionary for JSON responses."""
        return self.model_dump(by_alias=True, mode="json")
