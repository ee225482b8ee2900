"""Ledger summary block.

Aggregates splitter state and the payout statement into a single-row
DataFrame of headline figures.
"""

from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..schemas import SplitterState


class LedgerSummaryBlock(Block):
    """Headline figures for the whole splitter.

    Inputs (from context):
        - splitter_state: SplitterState to report on
        - payout_statement: DataFrame from PayoutStatementBlock

    Outputs (to context):
        - ledger_summary: DataFrame with a single row:
            * pool_balance: Value currently held
            * total_received: pool_balance + total_released
            * total_released: Cumulative payouts to payees
            * total_pending: Sum of pending payee payments
            * unallocated: pool_balance - total_pending (rounding remainder; negative
              when payees are each payable but together owed more than the pool holds)
            * fee_pool_total: Investor fees outstanding
            * payee_count: Registered payees
            * investor_count: Investors with an active record
    """

    def __init__(
        self,
        state_key: str = "splitter_state",
        statement_key: str = "payout_statement",
    ):
        self.state_key = state_key
        self.statement_key = statement_key

    def inputs(self) -> List[str]:
        return [self.state_key, self.statement_key]

    def outputs(self) -> List[str]:
        return ["ledger_summary"]

    def execute(self, context: BlockContext) -> None:
        state: SplitterState = context.get(self.state_key)
        statement: pd.DataFrame = context.get(self.statement_key)

        total_pending = int(statement["pending"].sum()) if not statement.empty else 0
        pool_balance = state.ledger.pool_balance

        summary = pd.DataFrame([{
            "pool_balance": pool_balance,
            "total_received": state.ledger.total_received,
            "total_released": state.ledger.total_released,
            "total_pending": total_pending,
            "unallocated": pool_balance - total_pending if state.registry.initialized else 0,
            "fee_pool_total": state.investors.fee_pool_total,
            "payee_count": len(state.registry.payees),
            "investor_count": len(state.investors.active_records()),
        }])

        context.set("ledger_summary", summary)
