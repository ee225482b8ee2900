"""Payout engines.

- DistributionEngine: proportional pull withdrawals for payees
- ReimbursementEngine: investor fee registration and batch reimbursement
- PaymentSplitter: facade owning the state and making each call atomic
"""

from .distribution import DistributionEngine
from .reimbursement import ReimbursementEngine
from .splitter import PaymentSplitter

__all__ = [
    "DistributionEngine",
    "ReimbursementEngine",
    "PaymentSplitter",
]
