"""
Baseline statement loader.

The simulator projects every decision onto one reference company
statement, kept as YAML reference data.
"""

from __future__ import annotations

from dataclasses import replace

from devcost_kernel.domain.statements import FinancialStatement
from devcost_kernel.exceptions import UnbalancedStatementError
from devcost_kernel.logging_config import get_logger
from devcost_modules._reference_data import load_yaml_file
from devcost_modules.reporting.config import ReportingConfig

logger = get_logger("modules.reporting.sample")


def load_sample_statement(config: ReportingConfig | None = None) -> FinancialStatement:
    """
    Load the baseline statement with all totals re-derived.

    Raises:
        UnbalancedStatementError: If the reference data does not balance.
    """
    config = config or ReportingConfig()
    statement = FinancialStatement.from_dict(load_yaml_file(config.sample_statement_path))
    if config.period_label is not None:
        statement = replace(statement, period=config.period_label)

    bs = statement.balance_sheet
    if not bs.is_balanced:
        raise UnbalancedStatementError(
            str(bs.assets.total), str(bs.total_liabilities_and_equity),
        )

    logger.info("sample_statement_loaded", extra={
        "period": statement.period,
        "total_assets": str(bs.assets.total),
        "net_profit": str(statement.profit_loss.net_profit),
    })
    return statement
