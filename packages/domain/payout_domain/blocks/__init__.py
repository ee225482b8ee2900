"""Reporting blocks for payout analysis.

This package turns SplitterState into DataFrames suitable for Excel rendering
or other consumption.

Architecture:
    Schemas (state) → Blocks (computation) → DataFrames (output)

Available blocks:
- PayoutStatementBlock: per-payee entitlement, released and pending amounts
- InvestorQueueBlock: investor reimbursement queue
- LedgerSummaryBlock: headline pool figures

Usage:
    from payout_domain.blocks import BlockExecutor, BlockContext, PayoutStatementBlock

    context = BlockContext()
    context.set("splitter_state", splitter.state)
    BlockExecutor([PayoutStatementBlock()]).execute(context)

    statement_df = context.get("payout_statement")
"""

from .base import Block, BlockExecutor, BlockContext, CircularDependencyError
from .statement import PayoutStatementBlock
from .investor_queue import InvestorQueueBlock
from .summary import LedgerSummaryBlock

__all__ = [
    "Block",
    "BlockExecutor",
    "BlockContext",
    "CircularDependencyError",
    "PayoutStatementBlock",
    "InvestorQueueBlock",
    "LedgerSummaryBlock",
]
