"""Mock repair catalog for VINQuoter.

Fixed operations attached to every generated quote until real SRT data is
wired in. Each entry is unpriced; the quote service prices it at the
requested labor rate.
"""

from typing import List

from models.quote import RawRepair


MOCK_REPAIR_CATALOG: List[RawRepair] = [
    RawRepair(operation="Aftertreatment DPF Cleaning", srt_hours=3.5, parts_cost=450),
    RawRepair(operation="NOx Sensor Replacement", srt_hours=1.2, parts_cost=320),
    RawRepair(operation="PM Service Level 2", srt_hours=2.0, parts_cost=280),
]


def get_mock_repairs() -> List[RawRepair]:
    """Return a copy of the mock catalog in display order."""
    return list(MOCK_REPAIR_CATALOG)
