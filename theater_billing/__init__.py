"""
Theater billing

Prices theatrical performances by genre and audience size and renders
customer statements with amounts owed and volume credits earned.
"""

__version__ = "1.0.0"

from .core import StatementEngine
from .computation_engine import ComputationEngine, amount_owed, volume_credits
from .models import Genre, Play, Performance, Invoice, PerformanceCharge, StatementData
from .statement import StatementPrinter, render_statement, build_statement_data, format_currency, lookup_play
from .exceptions import (
    BillingError,
    UnknownPlayTypeError,
    UnrecognizedPlayGenreError,
    PlayNotFoundError,
    MissingPlayReferenceError,
    ConfigurationError,
)

__all__ = [
    "StatementEngine",
    "ComputationEngine",
    "amount_owed",
    "volume_credits",
    "Genre",
    "Play",
    "Performance",
    "Invoice",
    "PerformanceCharge",
    "StatementData",
    "StatementPrinter",
    "render_statement",
    "build_statement_data",
    "format_currency",
    "lookup_play",
    "BillingError",
    "UnknownPlayTypeError",
    "UnrecognizedPlayGenreError",
    "PlayNotFoundError",
    "MissingPlayReferenceError",
    "ConfigurationError",
]
