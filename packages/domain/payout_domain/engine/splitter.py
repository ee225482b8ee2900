"""PaymentSplitter: the public face of the payout engine.

The splitter owns the SplitterState and the collaborators, and turns every
public operation into an all-or-nothing unit: state is checkpointed before the
operation runs and restored if anything raises, so a failed call leaves no
trace (not even notifications).

Command surface:
    receive(sender, amount)                        anyone
    initialize(caller, identities, share_weights)  owner, exactly once
    release(caller, identity)                      the payee themself
    add_project_fees(caller, investor, amount)     owner
    reimburse_project_fees(caller)                 owner
    transfer_ownership(caller, new_owner)          owner

Usage:
    splitter = PaymentSplitter(OwnerGate("admin"), RecordingAssetTransfer())
    splitter.initialize("admin", ["alice", "bob"], [1, 3])
    splitter.receive("sponsor", 100)
    splitter.release("alice", "alice")   # 25
    splitter.release("bob", "bob")       # 75
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from ..collaborators import AssetTransfer, AuthorizationGate, OwnerGate
from ..errors import AuthorizationError, StateError, ValidationError
from ..schemas import (
    Notification,
    OwnershipTransferred,
    Payee,
    PaymentReceived,
    SplitterCFG,
    SplitterState,
)
from ..schemas.base import is_positive_int, is_valid_identity
from .distribution import DistributionEngine
from .reimbursement import ReimbursementEngine

log = logging.getLogger(__name__)


class PaymentSplitter:
    """Pooled balance shared by proportional payees and an investor queue."""

    def __init__(
        self,
        gate: AuthorizationGate,
        rail: AssetTransfer,
        config: Optional[SplitterCFG] = None,
        state: Optional[SplitterState] = None,
    ):
        """Initialize the splitter.

        Args:
            gate: Privileged-caller check for administrative operations
            rail: Asset transfer primitive used for every payout
            config: Optional configuration (duplicate fee policy); the roster
                in config.payees is not applied here, see from_config()
            state: Existing state to resume from (default: empty)
        """
        self.gate = gate
        self.rail = rail
        self.config = config
        self.state = state if state is not None else SplitterState()
        policy = config.duplicate_fee_policy if config else "reject"
        self.distribution = DistributionEngine(rail)
        self.reimbursement = ReimbursementEngine(rail, policy=policy)

    @classmethod
    def from_config(cls, config: SplitterCFG, rail: AssetTransfer) -> "PaymentSplitter":
        """Build a splitter owned by config.owner, initializing the roster if given."""
        splitter = cls(OwnerGate(config.owner), rail, config=config)
        if config.payees:
            splitter.initialize(
                config.owner,
                [p.identity for p in config.payees],
                [p.shares for p in config.payees],
            )
        return splitter

    # ------------------------------------------------------------------ #
    # Atomicity and authorization
    # ------------------------------------------------------------------ #

    @contextmanager
    def _atomic(self, operation: str) -> Iterator[SplitterState]:
        """Run a block against the state, restoring the checkpoint in place if it raises."""
        checkpoint = self.state.checkpoint()
        try:
            yield self.state
        except Exception as exc:
            self.state.restore(checkpoint)
            log.warning("%s failed, state rolled back: %s", operation, exc)
            raise

    def _require_owner(self, caller: str, operation: str) -> None:
        if not self.gate.is_authorized(caller):
            raise AuthorizationError(f"'{caller}' is not authorized to {operation}")

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def receive(self, sender: str, amount: int) -> None:
        """Accept a deposit into the pool.

        Raises:
            ValidationError: If sender is empty or amount is not a positive integer
        """
        with self._atomic("receive") as state:
            if not is_valid_identity(sender):
                raise ValidationError(f"Sender must be a non-empty string, got: {sender!r}")
            if not is_positive_int(amount):
                raise ValidationError(f"Deposit amount must be a positive integer, got: {amount!r}")
            state.ledger.record_deposit(amount)
            state.notifications.emit(PaymentReceived(sender=sender, amount=amount))
            log.debug("received %d from %s (pool balance %d)", amount, sender, state.ledger.pool_balance)

    def initialize(self, caller: str, identities: Sequence[str], share_weights: Sequence[int]) -> None:
        """Register the payee roster. Succeeds at most once.

        Raises:
            AuthorizationError: If caller is not the owner
            StateError: If already initialized
            ValidationError: On bad roster input
        """
        with self._atomic("initialize") as state:
            self._require_owner(caller, "initialize")
            state.registry.initialize(identities, share_weights, state.notifications)
            log.info(
                "initialized %d payees with %d total shares",
                len(state.registry.payees), state.registry.total_shares,
            )

    def release(self, caller: str, identity: str) -> int:
        """Pay a payee their accrued share. See DistributionEngine.release()."""
        with self._atomic("release") as state:
            return self.distribution.release(state, caller, identity)

    def add_project_fees(self, caller: str, investor: str, amount: int) -> None:
        """Register a fee owed to an investor (owner only)."""
        with self._atomic("add_project_fees") as state:
            self._require_owner(caller, "add project fees")
            self.reimbursement.add_project_fees(state, investor, amount)

    def reimburse_project_fees(self, caller: str) -> int:
        """Reimburse all active investors (owner only).

        Preconditions are checked atomically; each investor step then commits
        on its own, so a failed transfer keeps earlier investors paid.

        Returns:
            Total amount transferred
        """
        with self._atomic("reimburse_project_fees") as state:
            self._require_owner(caller, "reimburse project fees")
            self.reimbursement.check_funding(state)
        return self.reimbursement.reimburse(
            self.state,
            step_scope=lambda: self._atomic("reimburse_project_fees step"),
        )

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Hand the owner capability to another identity.

        Raises:
            StateError: If the gate is not a transferable OwnerGate
            AuthorizationError: If caller is not the owner
            ValidationError: If new_owner is empty
        """
        if not isinstance(self.gate, OwnerGate):
            raise StateError(f"{type(self.gate).__name__} does not support ownership transfer")
        with self._atomic("transfer_ownership") as state:
            previous = self.gate.owner
            self.gate.transfer_ownership(caller, new_owner)
            state.notifications.emit(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def owner(self) -> Optional[str]:
        return self.gate.owner if isinstance(self.gate, OwnerGate) else None

    @property
    def initialized(self) -> bool:
        return self.state.registry.initialized

    def total_shares(self) -> int:
        return self.state.registry.total_shares

    def total_released(self) -> int:
        return self.state.ledger.total_released

    def total_received(self) -> int:
        return self.state.ledger.total_received

    def pool_balance(self) -> int:
        return self.state.ledger.pool_balance

    def shares(self, identity: str) -> int:
        return self.state.registry.shares(identity)

    def released(self, identity: str) -> int:
        return self.state.registry.released(identity)

    def pending_payment(self, identity: str) -> int:
        return self.distribution.pending_payment(self.state, identity)

    def payee_at(self, index: int) -> Payee:
        return self.state.registry.payee_at(index)

    def list_payees(self) -> List[str]:
        return self.state.registry.list_payees()

    def fee_owed(self, investor: str) -> int:
        return self.state.investors.fee_owed(investor)

    def fee_pool_total(self) -> int:
        return self.state.investors.fee_pool_total

    def list_investors(self, include_cleared: bool = False) -> List[str]:
        return self.state.investors.list_investors(include_cleared)

    @property
    def notifications(self) -> List[Notification]:
        return list(self.state.notifications.entries)
