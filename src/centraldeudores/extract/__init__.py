# src/centraldeudores/extract/__init__.py
"""
Extraction subpackage for centraldeudores.

This package contains all logic related to requesting and decoding the
registry's debtor history (payload structures, URL construction, lookup
pipeline).

The stable public entry point is:

    centraldeudores.lookup_debtor_chart
"""

from .pipeline import lookup_debtor_chart

__all__ = ["lookup_debtor_chart"]
