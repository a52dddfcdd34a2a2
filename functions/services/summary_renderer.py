"""
Printable Quote Summary for VINQuoter.

Renders the current session state as a standalone HTML page suitable for
printing or "Save as PDF" from a browser.

Architecture:
- Uses Jinja2 for HTML template rendering (templates/quote_summary.html)
- Currency is rounded to cents at render time only; the session keeps
  full precision
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape

from models.quote import QuoteTotals
from services.pricing import compute_totals
from services.quote_session import QuoteState

logger = structlog.get_logger(__name__)

# Template directory
TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

SUMMARY_TEMPLATE = "quote_summary.html"


# =============================================================================
# Filters
# =============================================================================


def format_money(value: Optional[float]) -> str:
    """Format a currency amount to two decimals, e.g. ``$1027.50``."""
    return f"${(value or 0.0):.2f}"


def format_number(value: Optional[float]) -> str:
    """Format hours or percentages without trailing zeros (``10``, ``7.5``)."""
    return f"{(value or 0.0):g}"


# =============================================================================
# Template Engine Setup
# =============================================================================


def _get_jinja_env() -> Environment:
    """
    Create and configure Jinja2 environment.

    Returns:
        Configured Jinja2 Environment with money/hours/percent filters
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["money"] = format_money
    env.filters["hours"] = format_number
    env.filters["percent"] = format_number
    return env


def build_summary_context(state: QuoteState, totals: Optional[QuoteTotals] = None) -> Dict[str, Any]:
    """
    Build the template context for a session state.

    Args:
        state: Session state to render
        totals: Precomputed totals (recomputed from state when omitted)

    Returns:
        Template context dictionary
    """
    if totals is None:
        totals = compute_totals(
            list(state.lines),
            state.form.parts_markup_percent,
            state.form.margin_percent,
        )

    return {
        "report_date": datetime.now().strftime("%B %d, %Y"),
        "form": state.form,
        "quote": state.quote,
        "lines": list(state.lines),
        "totals": totals,
    }


def render_quote_summary(state: QuoteState, totals: Optional[QuoteTotals] = None) -> str:
    """
    Render the printable summary as HTML.

    Args:
        state: Session state to render
        totals: Precomputed totals (recomputed from state when omitted)

    Returns:
        Rendered HTML string
    """
    env = _get_jinja_env()
    template = env.get_template(SUMMARY_TEMPLATE)
    return template.render(**build_summary_context(state, totals))


def write_quote_summary(
    state: QuoteState,
    output_path: Union[str, Path],
    totals: Optional[QuoteTotals] = None,
) -> Path:
    """
    Render the summary and save it to disk.

    Args:
        state: Session state to render
        output_path: Destination HTML file
        totals: Precomputed totals (recomputed from state when omitted)

    Returns:
        Absolute path of the written file
    """
    html_content = render_quote_summary(state, totals)

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(html_content, encoding="utf-8")

    logger.info(
        "quote_summary_written",
        output_path=str(output_file.absolute()),
        size_kb=round(len(html_content.encode("utf-8")) / 1024, 2),
        line_count=len(state.lines),
    )
    return output_file.absolute()
