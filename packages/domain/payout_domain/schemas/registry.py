"""Share registry: the fixed set of payees and their share weights.

The registry is write-once. It is populated by a single initialize() call and
never changes membership or weights afterwards; only each payee's cumulative
released amount grows over time (updated by the distribution engine).
"""

from typing import List, Optional, Sequence
from pydantic import Field

from .base import DomainModel, Identity, Amount, ShareWeight, is_valid_identity, is_positive_int
from .notifications import NotificationLog, PayeeAdded
from ..errors import ValidationError, StateError


# =============================================================================
# Payee
# =============================================================================

class Payee(DomainModel):
    """A registered stakeholder entitled to a proportional share of the pool.

    Examples:
        Payee(identity="alice", shares=1)              # nothing released yet
        Payee(identity="bob", shares=3, released=75)   # has pulled 75 units
    """

    identity: Identity = Field(
        description="Payee identity (immutable once registered)"
    )

    shares: ShareWeight = Field(
        description="Share weight (immutable once registered)"
    )

    released: Amount = Field(
        default=0,
        description="Cumulative amount paid out to this payee (only grows)"
    )


# =============================================================================
# Share Registry
# =============================================================================

class ShareRegistry(DomainModel):
    """Write-once registry of payees.

    Invariants:
        - total_shares == sum(p.shares for p in payees)
        - no identity appears twice in payees
        - initialized flips to True exactly once and never back

    Example:
        registry = ShareRegistry()
        registry.initialize(["alice", "bob"], [1, 3], log)
        registry.total_shares   # 4
        registry.payee_at(1)    # Payee(identity="bob", shares=3, released=0)
    """

    payees: List[Payee] = Field(
        default_factory=list,
        description="Registered payees in insertion order"
    )

    total_shares: int = Field(
        default=0,
        ge=0,
        description="Sum of all registered payees' shares"
    )

    initialized: bool = Field(
        default=False,
        description="Set once initialization has completed"
    )

    def add_payee(self, identity: str, shares: int, log: NotificationLog) -> Payee:
        """Register a single payee.

        Only called from initialize(); there is no way to add payees later.

        Args:
            identity: Payee identity
            shares: Positive integer share weight
            log: Notification log receiving PayeeAdded

        Returns:
            The registered Payee

        Raises:
            ValidationError: If identity is empty, shares is not a positive
                integer, or identity is already registered
        """
        if not is_valid_identity(identity):
            raise ValidationError(f"Payee identity must be a non-empty string, got: {identity!r}")
        if not is_positive_int(shares):
            raise ValidationError(f"Shares must be a positive integer, got: {shares!r}")
        if self.get(identity) is not None:
            raise ValidationError(f"Payee '{identity}' is already registered")

        payee = Payee(identity=identity, shares=shares)
        self.payees.append(payee)
        self.total_shares += shares
        log.emit(PayeeAdded(identity=identity, shares=shares))
        return payee

    def initialize(
        self,
        identities: Sequence[str],
        share_weights: Sequence[int],
        log: NotificationLog,
    ) -> None:
        """Register every payee and seal the registry.

        Args:
            identities: Payee identities, in registration order
            share_weights: Share weight for each identity (same length)
            log: Notification log receiving one PayeeAdded per payee

        Raises:
            StateError: If the registry is already initialized (checked first,
                regardless of arguments)
            ValidationError: If the sequences are empty, differ in length, or
                any pair is rejected by add_payee()

        Note:
            A failure part-way through leaves earlier payees in place; the
            splitter discards them by restoring its checkpoint.
        """
        if self.initialized:
            raise StateError("Share registry is already initialized")

        identities = list(identities)
        share_weights = list(share_weights)
        if len(identities) != len(share_weights):
            raise ValidationError(
                f"Payees and shares length mismatch: {len(identities)} payees, "
                f"{len(share_weights)} share weights"
            )
        if not identities:
            raise ValidationError("At least one payee is required")

        for identity, shares in zip(identities, share_weights):
            self.add_payee(identity, shares, log)

        self.initialized = True

    def get(self, identity: str) -> Optional[Payee]:
        """Get a payee by identity, or None if not registered."""
        return next((p for p in self.payees if p.identity == identity), None)

    def shares(self, identity: str) -> int:
        """Share weight of a payee (0 if not registered)."""
        payee = self.get(identity)
        return payee.shares if payee else 0

    def released(self, identity: str) -> int:
        """Cumulative amount released to a payee (0 if not registered)."""
        payee = self.get(identity)
        return payee.released if payee else 0

    def payee_at(self, index: int) -> Payee:
        """Get the payee registered at a given position.

        Raises:
            ValidationError: If index is not an int (bools are rejected), negative,
                or past the end
        """
        if (
            not isinstance(index, int)
            or isinstance(index, bool)
            or index < 0
            or index >= len(self.payees)
        ):
            raise ValidationError(
                f"Payee index {index!r} out of range (0..{len(self.payees) - 1})"
            )
        return self.payees[index]

    def list_payees(self) -> List[str]:
        """All payee identities in registration order."""
        return [p.identity for p in self.payees]
