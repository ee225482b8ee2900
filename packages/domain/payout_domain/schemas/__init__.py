"""Payout domain schemas.

This package contains all Pydantic models for the payout domain layer:
- Base types and conventions
- Notifications (append-only log)
- Share registry and payees
- Pool balance and lifetime totals
- Investor reimbursement queue
- Complete splitter state
- Splitter and statement configuration

Usage:
    from payout_domain.schemas import (
        ShareRegistry, Payee, InvestorReimbursementQueue,
        SplitterState, SplitterCFG, PaymentReleased,
    )
"""

# Base types
from .base import (
    DomainModel,
    Amount,
    ShareWeight,
    Identity,
)

# Notifications
from .notifications import (
    Notification,
    NotificationLog,
    PayeeAdded,
    PaymentReceived,
    PaymentReleased,
    ProjectFeesAdded,
    ProjectFeesReimbursed,
    OwnershipTransferred,
)

# Registry
from .registry import (
    Payee,
    ShareRegistry,
)

# Ledger
from .ledger import LedgerTotals

# Investors
from .investors import (
    InvestorRecord,
    InvestorReimbursementQueue,
    InvestorStatus,
    DuplicateFeePolicy,
)

# State
from .state import SplitterState, StateCheckpoint

# Configuration
from .config import (
    PayeeCFG,
    SplitterCFG,
    StatementCFG,
    load_splitter_config,
)

__all__ = [
    # Base types
    "DomainModel",
    "Amount",
    "ShareWeight",
    "Identity",
    # Notifications
    "Notification",
    "NotificationLog",
    "PayeeAdded",
    "PaymentReceived",
    "PaymentReleased",
    "ProjectFeesAdded",
    "ProjectFeesReimbursed",
    "OwnershipTransferred",
    # Registry
    "Payee",
    "ShareRegistry",
    # Ledger
    "LedgerTotals",
    # Investors
    "InvestorRecord",
    "InvestorReimbursementQueue",
    "InvestorStatus",
    "DuplicateFeePolicy",
    # State
    "SplitterState",
    "StateCheckpoint",
    # Configuration
    "PayeeCFG",
    "SplitterCFG",
    "StatementCFG",
    "load_splitter_config",
]
