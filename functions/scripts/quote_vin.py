"""
Generate a repair quote for a VIN and write the printable summary to HTML.

Runs the same session flow as the web form: validate, request, seed lines,
apply markup/margin, render. By default the quote service runs in-process;
pass --base-url to go through a running quote server instead.

Usage:
  cd functions
  python scripts/quote_vin.py 1HTMKADN43H561234 --labor-rate 165 --markup 10 --margin 5 --out quote.html
  python scripts/quote_vin.py 1HTMKADN43H561234 --base-url http://127.0.0.1:5002
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Allow running as `python scripts/quote_vin.py` from functions/
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings  # noqa: E402
from services.quote_client import QuoteApiClient  # noqa: E402
from services.quote_session import QuoteSession  # noqa: E402
from services.summary_renderer import write_quote_summary  # noqa: E402
from utils.logging_config import configure_logging  # noqa: E402
from utils.quote_logger import log_quote_failed, log_quote_generated  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a VIN-based repair quote")
    parser.add_argument("vin", help="Vehicle identification number (at least 8 characters)")
    parser.add_argument("--labor-rate", type=float, default=settings.default_labor_rate, help="Labor rate per hour")
    parser.add_argument("--markup", type=float, default=0.0, help="Parts markup percent")
    parser.add_argument("--margin", type=float, default=0.0, help="Additional margin percent")
    parser.add_argument("--shop", default=settings.default_shop_name, help="Shop name for the summary header")
    parser.add_argument("--quote-number", default="", help="Quote reference, e.g. Q-1027")
    parser.add_argument("--customer", default="", help="Customer name")
    parser.add_argument("--unit", default="", help="Unit / truck number")
    parser.add_argument("--notes", default="", help="Internal notes")
    parser.add_argument(
        "--base-url",
        required=False,
        help="Quote server base URL (if not set, the quote service runs in-process)",
    )
    parser.add_argument("--out", default="quote-summary.html", help="Output HTML path")
    parser.add_argument("--log-level", default=None, help="Log level (defaults to LOG_LEVEL)")
    return parser


async def run(args: argparse.Namespace) -> int:
    fetcher = QuoteApiClient(base_url=args.base_url).request_quote if args.base_url else None
    session = QuoteSession(fetcher=fetcher)
    session.update_form(
        vin=args.vin,
        labor_rate=args.labor_rate,
        parts_markup_percent=args.markup,
        margin_percent=args.margin,
        shop_name=args.shop,
        quote_number=args.quote_number,
        customer_name=args.customer,
        unit_number=args.unit,
        notes=args.notes,
    )

    if not await session.generate_quote():
        log_quote_failed(args.vin, session.error or "Quote was not generated")
        return 1

    log_quote_generated(
        session.quote,
        session.lines,
        session.totals,
        parts_markup_percent=session.form.parts_markup_percent,
        margin_percent=session.form.margin_percent,
        customer_name=session.form.customer_name,
    )

    output_path = write_quote_summary(session.state, args.out, session.totals)
    print(f"Wrote {output_path}")
    return 0


def main() -> int:
    args = build_parser().parse_args()
    configure_logging(args.log_level)
    settings.validate()
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
