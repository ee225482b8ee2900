"""Investor queue block.

Converts the investor reimbursement queue into a DataFrame.
"""

from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..schemas import SplitterState


QUEUE_COLUMNS = ["position", "identity", "status", "fee_owed", "reimbursed_total"]


class InvestorQueueBlock(Block):
    """Investor reimbursement queue as a table.

    Inputs (from context):
        - splitter_state: SplitterState to report on

    Outputs (to context):
        - investor_queue: DataFrame with one row per investor record, in
          registration order:
            * position: Slot in the queue (0-based, cleared slots keep theirs)
            * identity: Investor identity
            * status: "active" or "cleared"
            * fee_owed: Fee still owed
            * reimbursed_total: Amount already reimbursed
    """

    def __init__(self, state_key: str = "splitter_state", include_cleared: bool = True):
        self.state_key = state_key
        self.include_cleared = include_cleared

    def inputs(self) -> List[str]:
        return [self.state_key]

    def outputs(self) -> List[str]:
        return ["investor_queue"]

    def execute(self, context: BlockContext) -> None:
        state: SplitterState = context.get(self.state_key)

        rows = [
            {
                "position": position,
                "identity": record.identity,
                "status": record.status,
                "fee_owed": record.fee_owed,
                "reimbursed_total": record.reimbursed_total,
            }
            for position, record in enumerate(state.investors.records)
            if self.include_cleared or record.is_active
        ]

        context.set("investor_queue", pd.DataFrame(rows, columns=QUEUE_COLUMNS))
