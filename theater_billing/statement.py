"""
Statement assembly and rendering
"""

from decimal import Decimal
from typing import List, Mapping, Optional
import pandas as pd
from loguru import logger

from .computation_engine import ComputationEngine
from .config import PERCENT_FACTOR
from .exceptions import PlayNotFoundError
from .models import Invoice, Performance, PerformanceCharge, Play, StatementData


CHARGE_COLUMNS = ["customer", "play_id", "play_name", "genre", "audience", "amount", "volume_credits"]


def lookup_play(plays: Mapping[str, Play], play_id: str) -> Play:
    """Find a play in the catalog or raise PlayNotFoundError"""
    play = plays.get(play_id)
    if play is None:
        logger.error(f"Play '{play_id}' is not in the catalog")
        raise PlayNotFoundError(play_id)
    return play


def compute_charge(performance: Performance, plays: Mapping[str, Play],
                   engine: ComputationEngine) -> PerformanceCharge:
    """Price one performance against the catalog"""
    play = lookup_play(plays, performance.play_id)
    genre, amount, credits = engine.compute(play.type, performance.audience)
    return PerformanceCharge(
        play_id=performance.play_id,
        play_name=play.name,
        genre=genre,
        audience=performance.audience,
        amount=amount,
        volume_credits=credits,
    )


def build_statement_data(invoice: Invoice, plays: Mapping[str, Play],
                         engine: Optional[ComputationEngine] = None) -> StatementData:
    """
    Compute every line of an invoice in order

    Totals are derived from the lines, so nothing is accumulated here.
    The first missing play or unknown type aborts the whole statement.

    Raises:
        PlayNotFoundError: a performance references a play not in the catalog
        UnknownPlayTypeError: a play's type has no pricing rule
    """
    engine = engine or ComputationEngine()
    charges = tuple(compute_charge(performance, plays, engine) for performance in invoice.performances)
    return StatementData(customer=invoice.customer, charges=charges)


def format_currency(cents: int, symbol: str = "$") -> str:
    """
    Format integer cents as US-style currency, e.g. 123456 -> $1,234.56
    """
    value = (Decimal(abs(cents)) / PERCENT_FACTOR).quantize(Decimal("0.01"))
    sign = "-" if cents < 0 else ""
    return f"{sign}{symbol}{value:,.2f}"


def format_statement(data: StatementData, currency_symbol: str = "$") -> str:
    """Render computed statement data as plain text"""
    lines: List[str] = [f"Statement for {data.customer}"]
    for charge in data.charges:
        lines.append(
            f"  {charge.play_name}: {format_currency(charge.amount, currency_symbol)} ({charge.audience} seats)"
        )
    lines.append(f"Amount owed is {format_currency(data.total_amount, currency_symbol)}")
    lines.append(f"You earned {data.total_volume_credits} credits")
    return "".join(f"{line}\n" for line in lines)


def render_statement(invoice: Invoice, plays: Mapping[str, Play],
                     engine: Optional[ComputationEngine] = None,
                     currency_symbol: str = "$") -> str:
    """
    Build the text statement for an invoice

    Args:
        invoice: Invoice to bill
        plays: Catalog mapping play id to play
        engine: Computation engine; the standard rules when omitted
        currency_symbol: Symbol printed before amounts

    Returns:
        Newline-terminated statement text
    """
    data = build_statement_data(invoice, plays, engine)
    logger.info(
        f"Statement for {data.customer}: {len(data.charges)} performances, "
        f"total={data.total_amount} credits={data.total_volume_credits}"
    )
    return format_statement(data, currency_symbol)


def charges_dataframe(data: StatementData) -> pd.DataFrame:
    """One row per statement line; amount is in cents"""
    rows = [
        {
            "customer": data.customer,
            "play_id": charge.play_id,
            "play_name": charge.play_name,
            "genre": charge.genre.value,
            "audience": charge.audience,
            "amount": charge.amount,
            "volume_credits": charge.volume_credits,
        }
        for charge in data.charges
    ]
    return pd.DataFrame(rows, columns=CHARGE_COLUMNS)


class StatementPrinter:
    """
    Generates a statement for a given invoice of performances
    """

    def __init__(self, invoice: Invoice, plays: Mapping[str, Play],
                 engine: Optional[ComputationEngine] = None):
        self.invoice = invoice
        self.plays = plays
        self.engine = engine or ComputationEngine()

    def statement(self) -> str:
        """
        Return the formatted statement of this printer's invoice

        Raises:
            UnknownPlayTypeError: if one of the play types is not known
        """
        return render_statement(self.invoice, self.plays, self.engine)
