"""Pool balance and lifetime totals.

The pooled balance is explicit state owned by the splitter. Together with the
cumulative released total it reconstructs lifetime receipts:

    total_received = pool_balance + total_released

Reimbursements to investors decrease the pool balance without increasing
total_released, so they reduce what payees can accrue from then on.
"""

from pydantic import Field

from .base import DomainModel, Amount


class LedgerTotals(DomainModel):
    """Balance and cumulative payout counters.

    Example:
        ledger = LedgerTotals(pool_balance=100)
        ledger.record_release(25)
        ledger.pool_balance     # 75
        ledger.total_received   # 100
    """

    pool_balance: Amount = Field(
        default=0,
        description="Value currently held by the pool"
    )

    total_released: Amount = Field(
        default=0,
        description="Cumulative amount ever paid out to payees"
    )

    @property
    def total_received(self) -> int:
        """Lifetime receipts attributable to payees."""
        return self.pool_balance + self.total_released

    def record_deposit(self, amount: int) -> None:
        self.pool_balance += amount

    def record_release(self, amount: int) -> None:
        """Account for a completed payee transfer."""
        self.total_released += amount
        self.pool_balance -= amount

    def record_reimbursement(self, amount: int) -> None:
        """Account for a completed investor transfer."""
        self.pool_balance -= amount
