"""
Statement engine: configuration, logging and batch processing in one place
"""

import sys
from typing import Iterable, Mapping, Optional
import pandas as pd
from loguru import logger

from .computation_engine import ComputationEngine
from .config import BillingConfig, get_config
from .models import Invoice, Play, StatementData
from .statement import CHARGE_COLUMNS, build_statement_data, charges_dataframe, format_statement


class StatementEngine:
    """
    Main engine for billing theater invoices
    """

    def __init__(self, config: Optional[BillingConfig] = None, log_level: Optional[str] = None):
        """
        Initialize the statement engine

        Args:
            config: Billing configuration; the global configuration when omitted
            log_level: Overrides the configured logging level
        """
        self.config = config or get_config()
        self.computation_engine = ComputationEngine(self.config.rules)

        if self.config.configure_logging:
            logger.remove()
            logger.add(
                sys.stderr,
                level=(log_level or self.config.log_level).upper(),
                format=self.config.log_format,
            )

        logger.info(f"Statement engine initialized with {len(self.computation_engine.rules)} genre rules")

    def statement_data(self, invoice: Invoice, plays: Mapping[str, Play]) -> StatementData:
        """Compute all lines and totals for an invoice"""
        return build_statement_data(invoice, plays, self.computation_engine)

    def statement(self, invoice: Invoice, plays: Mapping[str, Play]) -> str:
        """Render the text statement for an invoice"""
        data = self.statement_data(invoice, plays)
        logger.info(f"Rendered statement for {data.customer} ({len(data.charges)} performances)")
        return format_statement(data, self.config.currency_symbol)

    def process_invoices(self, invoices: Iterable[Invoice], plays: Mapping[str, Play]) -> pd.DataFrame:
        """
        Compute line items for many invoices

        Args:
            invoices: Invoices to bill
            plays: Catalog shared by all invoices

        Returns:
            DataFrame with one row per performance across all invoices
        """
        frames = [charges_dataframe(self.statement_data(invoice, plays)) for invoice in invoices]
        non_empty = [frame for frame in frames if not frame.empty]
        if not non_empty:
            return pd.DataFrame(columns=CHARGE_COLUMNS)

        result = pd.concat(non_empty, ignore_index=True)
        logger.info(f"Processed {len(frames)} invoices into {len(result)} rows")
        return result
