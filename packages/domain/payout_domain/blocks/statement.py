"""Payout statement block.

Converts SplitterState into a per-payee DataFrame showing what each payee is
entitled to, what they already pulled and what they could pull right now.
"""

from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..engine.distribution import compute_entitlement, compute_payable
from ..schemas import SplitterState


STATEMENT_COLUMNS = [
    "identity",
    "shares",
    "share_pct",
    "entitlement",
    "released",
    "pending",
]


class PayoutStatementBlock(Block):
    """Per-payee payout statement.

    Inputs (from context):
        - splitter_state: SplitterState to report on

    Outputs (to context):
        - payout_statement: DataFrame with one row per payee, in registration order:
            * identity: Payee identity
            * shares: Share weight
            * share_pct: Share of total weight, as a percentage
            * entitlement: floor(total_received * shares / total_shares)
            * released: Amount already paid out
            * pending: Amount release() would pay now (0 when the pool
              balance cannot cover the unpaid entitlement)

    Example:
        context = BlockContext()
        context.set("splitter_state", splitter.state)
        PayoutStatementBlock().execute(context)
        context.get("payout_statement")
    """

    def __init__(self, state_key: str = "splitter_state"):
        self.state_key = state_key

    def inputs(self) -> List[str]:
        return [self.state_key]

    def outputs(self) -> List[str]:
        return ["payout_statement"]

    def execute(self, context: BlockContext) -> None:
        state: SplitterState = context.get(self.state_key)
        registry = state.registry
        total_received = state.ledger.total_received
        pool_balance = state.ledger.pool_balance

        rows = []
        for payee in registry.payees:
            entitlement = compute_entitlement(total_received, payee.shares, registry.total_shares)
            rows.append({
                "identity": payee.identity,
                "shares": payee.shares,
                "share_pct": (
                    payee.shares / registry.total_shares * 100
                    if registry.total_shares > 0
                    else 0.0
                ),
                "entitlement": entitlement,
                "released": payee.released,
                "pending": compute_payable(entitlement, payee.released, pool_balance),
            })

        context.set("payout_statement", pd.DataFrame(rows, columns=STATEMENT_COLUMNS))
