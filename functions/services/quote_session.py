"""
Quote Session for VINQuoter.

Explicit state container for one interactive quoting session: the form
fields, the current quote, the editable repair lines, and the busy/error
flags. State is an immutable QuoteState; reducer functions return a new
state. QuoteSession wraps a state plus a quote fetcher and recomputes the
totals after every mutation.

Request/reset policy:
- While a request is pending, further generate_quote() calls are refused
- Each request carries a sequence number; reset bumps it, so a response
  that lands after a reset is discarded
"""

from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, List, Optional, Tuple

import structlog

from config.errors import ValidationError
from config.settings import settings
from models.quote import QuoteResult, QuoteTotals, RepairLine
from services import pricing
from services.quote_service import request_quote, validate_labor_rate, validate_vin

logger = structlog.get_logger(__name__)


QUOTE_FAILED_MESSAGE = "Something went wrong while generating the quote."

QuoteFetcher = Callable[[str, float], Awaitable[QuoteResult]]


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True)
class QuoteForm:
    """
    User-entered quote fields.

    Attributes:
        shop_name: Shop shown in the summary header
        quote_number: Free-text quote reference
        vin: Vehicle identification number
        labor_rate: Labor rate applied to new lines and requests
        customer_name: Customer shown on the summary
        unit_number: Unit / truck number
        notes: Internal notes
        parts_markup_percent: Markup on parts
        margin_percent: Margin on labor plus marked-up parts
    """
    shop_name: str = field(default_factory=lambda: settings.default_shop_name)
    quote_number: str = ""
    vin: str = ""
    labor_rate: float = field(default_factory=lambda: settings.default_labor_rate)
    customer_name: str = ""
    unit_number: str = ""
    notes: str = ""
    parts_markup_percent: float = 0.0
    margin_percent: float = 0.0


NUMERIC_FORM_FIELDS = frozenset({"labor_rate", "parts_markup_percent", "margin_percent"})


@dataclass(frozen=True)
class QuoteState:
    """Complete session state."""
    form: QuoteForm = field(default_factory=QuoteForm)
    quote: Optional[QuoteResult] = None
    lines: Tuple[RepairLine, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    request_seq: int = 0


# =============================================================================
# Reducers
# =============================================================================


def update_form(state: QuoteState, **changes: Any) -> QuoteState:
    """
    Update form fields.

    Numeric fields are coerced with pricing.parse_number(); text fields are
    stored as given.

    Raises:
        ValueError: If a field name is not part of QuoteForm
    """
    unknown = set(changes) - set(QuoteForm.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown form field(s): {sorted(unknown)}")

    coerced = {
        name: pricing.parse_number(value) if name in NUMERIC_FORM_FIELDS else ("" if value is None else str(value))
        for name, value in changes.items()
    }
    return replace(state, form=replace(state.form, **coerced))


def validate_form(form: QuoteForm) -> Optional[str]:
    """Return a user-facing error message, or None if the form can be submitted."""
    try:
        validate_vin(form.vin.strip())
        validate_labor_rate(form.labor_rate)
    except ValidationError as e:
        return e.message
    return None


def clear_quote(state: QuoteState) -> QuoteState:
    """Drop any previous quote, lines and error."""
    return replace(state, quote=None, lines=(), error=None)


def begin_request(state: QuoteState) -> QuoteState:
    """Mark a request as in flight under a new sequence number."""
    return replace(clear_quote(state), loading=True, request_seq=state.request_seq + 1)


def resolve_request(state: QuoteState, seq: int, result: QuoteResult) -> QuoteState:
    """Apply a successful response, unless it belongs to a superseded request."""
    if seq != state.request_seq:
        return state
    return replace(
        state,
        quote=result,
        lines=tuple(result.repairs),
        loading=False,
        error=None,
    )


def fail_request(state: QuoteState, seq: int, message: str = QUOTE_FAILED_MESSAGE) -> QuoteState:
    """Record a failed request, unless it belongs to a superseded request."""
    if seq != state.request_seq:
        return state
    return replace(state, quote=None, lines=(), loading=False, error=message)


def edit_repair(state: QuoteState, index: int, field_name: str, value: Any) -> QuoteState:
    """Edit one field of one repair line."""
    return replace(state, lines=tuple(pricing.edit_line(list(state.lines), index, field_name, value)))


def add_repair(state: QuoteState) -> QuoteState:
    """Append a default line at the current form labor rate."""
    return replace(state, lines=tuple(pricing.add_line(list(state.lines), state.form.labor_rate)))


def remove_repair(state: QuoteState, index: int) -> QuoteState:
    """Remove one repair line."""
    return replace(state, lines=tuple(pricing.remove_line(list(state.lines), index)))


def reset_state(state: QuoteState) -> QuoteState:
    """Clear every field and the quote; invalidates any in-flight request."""
    return QuoteState(request_seq=state.request_seq + 1)


# =============================================================================
# Session
# =============================================================================


class QuoteSession:
    """Interactive quote session.

    Holds the current QuoteState and keeps ``totals`` in step with it by
    recomputing after every mutating call.
    """

    def __init__(
        self,
        fetcher: Optional[QuoteFetcher] = None,
        state: Optional[QuoteState] = None
    ):
        """Initialize QuoteSession.

        Args:
            fetcher: Async callable (vin, labor_rate) -> QuoteResult.
                Defaults to the in-process quote service.
            state: Initial state (defaults to an empty form)
        """
        self.fetcher: QuoteFetcher = fetcher or request_quote
        self.state = state or QuoteState()
        self.totals = QuoteTotals.zero()
        self.recompute_totals()

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    @property
    def form(self) -> QuoteForm:
        return self.state.form

    @property
    def lines(self) -> List[RepairLine]:
        return list(self.state.lines)

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    @property
    def quote(self) -> Optional[QuoteResult]:
        return self.state.quote

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def recompute_totals(self) -> QuoteTotals:
        """Recompute totals from the current lines and percentages."""
        self.totals = pricing.compute_totals(
            list(self.state.lines),
            self.state.form.parts_markup_percent,
            self.state.form.margin_percent,
        )
        return self.totals

    def _apply(self, new_state: QuoteState) -> QuoteTotals:
        self.state = new_state
        return self.recompute_totals()

    def update_form(self, **changes: Any) -> QuoteTotals:
        """Update form fields (markup and margin changes flow into totals)."""
        return self._apply(update_form(self.state, **changes))

    def edit_line(self, index: int, field_name: str, value: Any) -> QuoteTotals:
        """Edit one field of one line."""
        return self._apply(edit_repair(self.state, index, field_name, value))

    def add_line(self) -> QuoteTotals:
        """Append a default line."""
        return self._apply(add_repair(self.state))

    def remove_line(self, index: int) -> QuoteTotals:
        """Remove one line."""
        return self._apply(remove_repair(self.state, index))

    def reset(self) -> QuoteTotals:
        """Clear everything, discarding any pending response."""
        logger.info("quote_session_reset", request_seq=self.state.request_seq)
        return self._apply(reset_state(self.state))

    async def generate_quote(self) -> bool:
        """
        Request a quote for the current form.

        Returns:
            True if a quote was applied, False if the call was refused,
            failed validation, failed in transit, or was superseded by reset.
        """
        if self.state.loading:
            logger.info("quote_request_ignored_busy", request_seq=self.state.request_seq)
            return False

        self._apply(clear_quote(self.state))

        message = validate_form(self.state.form)
        if message:
            logger.info("quote_form_invalid", error=message)
            self._apply(replace(self.state, error=message))
            return False

        self._apply(begin_request(self.state))
        seq = self.state.request_seq
        vin = self.state.form.vin
        labor_rate = self.state.form.labor_rate

        try:
            result = await self.fetcher(vin, labor_rate)
        except Exception as e:
            logger.error(
                "quote_request_failed",
                request_seq=seq,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._apply(fail_request(self.state, seq))
            return False

        if seq != self.state.request_seq:
            logger.info("quote_response_discarded", request_seq=seq, current_seq=self.state.request_seq)
            return False

        self._apply(resolve_request(self.state, seq, result))
        logger.info(
            "quote_applied",
            request_seq=seq,
            vehicle=result.vehicle,
            line_count=len(self.state.lines),
        )
        return True
