"""VINQuoter - Cloud Functions.

This package contains the Python Cloud Functions for VINQuoter, a
heavy-duty repair quoting calculator.

Architecture:
- Quote boundary: validates the VIN, decodes it via NHTSA vPIC, prices the
  mock repair catalog at the requested labor rate
- Pricing model: editable line items with markup and margin totals
- Session: explicit state container driving the quote flow
- Summary: printable HTML quote
"""

__version__ = "0.1.0"
