# src/centraldeudores/validation/__init__.py
"""
Validation utilities for centraldeudores.

This subpackage contains integrity checks on chart outputs, used to stop a
broken chart from reaching the rendering layer.

Public entry point:
- check_chart_data
"""

from .checks import check_chart_data

__all__ = ["check_chart_data"]
