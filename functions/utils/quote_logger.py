"""Quote Console Logger for VINQuoter.

Provides highly visible, formatted console output for generated quotes
during local runs (CLI and development server).
"""

from datetime import datetime
from typing import List, Optional

import structlog

from models.quote import QuoteResult, QuoteTotals, RepairLine

logger = structlog.get_logger()

# Visual markers for different log types
BANNER_WIDTH = 80
QUOTE_BANNER_CHAR = "═"
LINE_BANNER_CHAR = "─"
FAILURE_BANNER_CHAR = "!"


def _create_banner(char: str, text: str, width: int = BANNER_WIDTH) -> str:
    """Create a centered banner with given character."""
    text_with_spaces = f" {text} "
    padding = (width - len(text_with_spaces)) // 2
    return char * padding + text_with_spaces + char * (width - padding - len(text_with_spaces))


def _truncate(text: str, max_length: int) -> str:
    """Truncate text for fixed-width columns."""
    return text if len(text) <= max_length else text[: max_length - 1] + "…"


def log_quote_generated(
    quote: QuoteResult,
    lines: List[RepairLine],
    totals: QuoteTotals,
    parts_markup_percent: float = 0.0,
    margin_percent: float = 0.0,
    customer_name: Optional[str] = None,
) -> None:
    """Log a generated quote with its line items and totals."""
    timestamp = datetime.utcnow().isoformat()

    print("\n")
    print(QUOTE_BANNER_CHAR * BANNER_WIDTH)
    print(_create_banner(QUOTE_BANNER_CHAR, "✓ QUOTE GENERATED"))
    print(QUOTE_BANNER_CHAR * BANNER_WIDTH)
    print(f"║ VIN          : {quote.vin}")
    print(f"║ Vehicle      : {quote.vehicle}")
    print(f"║ Customer     : {customer_name or 'N/A'}")
    if quote.labor_rate is not None:
        print(f"║ Labor Rate   : ${quote.labor_rate:.2f}/hr")
    print(f"║ Timestamp    : {timestamp}")
    print(LINE_BANNER_CHAR * BANNER_WIDTH)

    for line in lines:
        print(
            f"│ {_truncate(line.operation, 36):<36} "
            f"{line.srt_hours:>6g} h  "
            f"${line.parts_cost:>10.2f}  "
            f"${line.total_cost:>10.2f}"
        )

    print(LINE_BANNER_CHAR * BANNER_WIDTH)
    print(f"║ Labor Total          : ${totals.labor_cost:,.2f}")
    print(f"║ Parts Total          : ${totals.parts_cost:,.2f}")
    print(f"║ Parts w/ Markup ({parts_markup_percent:g}%) : ${totals.parts_with_markup:,.2f}")
    print(f"║ Subtotal             : ${totals.base_grand_total:,.2f}")
    print(f"║ Margin ({margin_percent:g}%)         : ${totals.margin_amount:,.2f}")
    print(f"║ FINAL TOTAL          : ${totals.final_grand_total:,.2f}")
    print(QUOTE_BANNER_CHAR * BANNER_WIDTH)
    print("\n")

    logger.info(
        "quote_generated_logged",
        vin_prefix=quote.vin[:8],
        line_count=len(lines),
        final_grand_total=round(totals.final_grand_total, 2),
    )


def log_quote_failed(vin: str, error: str) -> None:
    """Log a quote failure with details."""
    timestamp = datetime.utcnow().isoformat()

    print("\n")
    print(FAILURE_BANNER_CHAR * BANNER_WIDTH)
    print(_create_banner(FAILURE_BANNER_CHAR, "✗ QUOTE FAILED"))
    print(FAILURE_BANNER_CHAR * BANNER_WIDTH)
    print(f"║ VIN          : {vin or 'N/A'}")
    print(f"║ Timestamp    : {timestamp}")
    print(f"║ Error        : {error}")
    print(FAILURE_BANNER_CHAR * BANNER_WIDTH)
    print("\n")

    logger.error(
        "quote_failed_logged",
        vin_prefix=(vin or "")[:8],
        error=error,
    )
