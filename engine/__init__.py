"""
HomeCalc Pro Calculator Engine

Static calculator catalog, form definitions and the estimate math behind
each calculator page.

All math is deterministic; no AI in the loop for numerical calculations.
"""

from engine.catalog import CALCULATORS, CATEGORIES, Calculator, get_calculator, search_calculators
from engine.forms import FormDefinition, FormField, calculate, get_form, list_forms
from engine.report import build_report, export_csv, export_json

__version__ = "0.1.0"
