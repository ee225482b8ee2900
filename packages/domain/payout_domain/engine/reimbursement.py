"""Investor fee reimbursement.

The owner registers fees owed to prior contributors and later reimburses all
of them in one batch from the shared pool. The batch is fail-fast but not
transactional as a whole: every investor step commits on its own, so a failed
transfer stops the batch without undoing investors already paid in it.

Cleared records stay in the queue and are skipped, so repeated calls never pay
an investor twice. Once nothing is owed the call fails with EconomicError.
"""

import logging
from contextlib import nullcontext
from typing import Callable, ContextManager

from ..collaborators import AssetTransfer, send_or_raise
from ..errors import EconomicError
from ..schemas import DuplicateFeePolicy, InvestorRecord, SplitterState

log = logging.getLogger(__name__)


class ReimbursementEngine:
    """Registers investor fees and reimburses them from the pool.

    Example:
        engine = ReimbursementEngine(RecordingAssetTransfer(), policy="reject")
        engine.add_project_fees(state, "seed_fund", 40)
        engine.reimburse(state)   # 40
    """

    def __init__(self, rail: AssetTransfer, policy: DuplicateFeePolicy = "reject"):
        self.rail = rail
        self.policy = policy

    def add_project_fees(self, state: SplitterState, investor: str, amount: int) -> InvestorRecord:
        """Register a fee owed to an investor.

        Raises:
            ValidationError: On bad input or a rejected duplicate
        """
        record = state.investors.add_fee(investor, amount, self.policy, state.notifications)
        log.info(
            "registered %d in fees for %s (owed %d, fee pool %d)",
            amount, investor, record.fee_owed, state.investors.fee_pool_total,
        )
        return record

    def check_funding(self, state: SplitterState) -> None:
        """Verify the pool can cover every outstanding fee.

        Raises:
            EconomicError: If nothing is owed, the pool is empty, or the pool
                holds less than the fee pool total
        """
        fee_pool_total = state.investors.fee_pool_total
        pool_balance = state.ledger.pool_balance
        if fee_pool_total == 0:
            raise EconomicError("No investor fees owed")
        if pool_balance == 0:
            raise EconomicError("Pool balance is zero")
        if pool_balance < fee_pool_total:
            raise EconomicError(
                f"Pool balance {pool_balance} is below owed investor fees {fee_pool_total}"
            )

    def reimburse(
        self,
        state: SplitterState,
        step_scope: Callable[[], ContextManager] = nullcontext,
    ) -> int:
        """Reimburse every active investor in registration order.

        Args:
            state: Splitter state to mutate
            step_scope: Factory for the context wrapping each investor step;
                PaymentSplitter passes its checkpoint/restore scope so a
                failed step is rolled back on its own

        Returns:
            Total amount transferred

        Raises:
            EconomicError: If check_funding() fails
            TransferFailedError: If a transfer fails; earlier steps stay committed
        """
        self.check_funding(state)

        reimbursed = 0
        for index in range(len(state.investors.records)):
            record = state.investors.records[index]
            if not record.is_active:
                continue
            with step_scope():
                amount = record.fee_owed
                state.ledger.record_reimbursement(amount)
                state.investors.clear(record, state.notifications)
                send_or_raise(self.rail, record.identity, amount)
            reimbursed += amount
            log.debug("reimbursed %d to %s", amount, record.identity)

        log.info("reimbursed %d in investor fees", reimbursed)
        return reimbursed
