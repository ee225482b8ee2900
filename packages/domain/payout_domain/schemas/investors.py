"""Investor reimbursement queue models.

Prior contributors ("investors") are owed fees that the owner reimburses from
the same pool the payees draw on. Records live in a single ordered collection
keyed by identity; a reimbursed investor is marked "cleared" in place rather
than removed, so iteration skips cleared records explicitly.

Duplicate registration policy:
    - "reject": registering an investor that already has an active record
      raises ValidationError
    - "additive": the new amount is added to the active record

    Either way fee_pool_total stays equal to the sum of fee_owed over active
    records.
"""

from typing import List, Literal, Optional
from pydantic import Field

from .base import DomainModel, Identity, Amount, is_valid_identity, is_positive_int
from .notifications import NotificationLog, ProjectFeesAdded, ProjectFeesReimbursed
from ..errors import ValidationError


InvestorStatus = Literal["active", "cleared"]
DuplicateFeePolicy = Literal["reject", "additive"]


# =============================================================================
# Investor Record
# =============================================================================

class InvestorRecord(DomainModel):
    """Amount owed to a single investor.

    Examples:
        Outstanding fee:
            InvestorRecord(identity="seed_fund", fee_owed=40)

        Reimbursed (slot kept, skipped on later runs):
            InvestorRecord(identity="seed_fund", fee_owed=0, status="cleared",
                           reimbursed_total=40)
    """

    identity: Identity

    fee_owed: Amount = Field(
        default=0,
        description="Fee currently owed (0 once cleared)"
    )

    status: InvestorStatus = Field(
        default="active",
        description="active = awaiting reimbursement, cleared = already reimbursed"
    )

    reimbursed_total: Amount = Field(
        default=0,
        description="Cumulative amount reimbursed to this investor"
    )

    @property
    def is_active(self) -> bool:
        return self.status == "active"


# =============================================================================
# Reimbursement Queue
# =============================================================================

class InvestorReimbursementQueue(DomainModel):
    """Ordered queue of investor fee records.

    Example:
        queue = InvestorReimbursementQueue()
        queue.add_fee("seed_fund", 40, "reject", log)
        queue.fee_pool_total        # 40
        queue.active_records()      # [InvestorRecord(identity="seed_fund", ...)]
    """

    records: List[InvestorRecord] = Field(
        default_factory=list,
        description="Investor records in registration order (cleared records stay in place)"
    )

    fee_pool_total: Amount = Field(
        default=0,
        description="Aggregate fee owed across active records"
    )

    def get(self, identity: str) -> Optional[InvestorRecord]:
        """Get an investor's record (active or cleared), or None."""
        return next((r for r in self.records if r.identity == identity), None)

    def fee_owed(self, identity: str) -> int:
        """Fee currently owed to an investor (0 if unknown or cleared)."""
        record = self.get(identity)
        return record.fee_owed if record else 0

    def active_records(self) -> List[InvestorRecord]:
        return [r for r in self.records if r.is_active]

    def list_investors(self, include_cleared: bool = False) -> List[str]:
        """Investor identities in registration order.

        Args:
            include_cleared: Also list investors that were already reimbursed
        """
        return [r.identity for r in self.records if include_cleared or r.is_active]

    def add_fee(
        self,
        identity: str,
        amount: int,
        policy: DuplicateFeePolicy,
        log: NotificationLog,
    ) -> InvestorRecord:
        """Register a fee owed to an investor.

        Args:
            identity: Investor identity
            amount: Positive fee amount
            policy: What to do if the investor already has an active record
            log: Notification log receiving ProjectFeesAdded

        Returns:
            The investor's record after registration

        Raises:
            ValidationError: On empty identity, non-positive amount, or an
                active duplicate under the "reject" policy
        """
        if not is_valid_identity(identity):
            raise ValidationError(f"Investor identity must be a non-empty string, got: {identity!r}")
        if not is_positive_int(amount):
            raise ValidationError(f"Fee amount must be a positive integer, got: {amount!r}")

        record = self.get(identity)
        if record is None:
            record = InvestorRecord(identity=identity, fee_owed=amount)
            self.records.append(record)
        elif record.is_active:
            if policy == "reject":
                raise ValidationError(
                    f"Investor '{identity}' already has {record.fee_owed} in outstanding fees"
                )
            record.fee_owed += amount
        else:
            # Cleared slot is reused, keeping the investor's original position
            record.fee_owed = amount
            record.status = "active"

        self.fee_pool_total += amount
        log.emit(ProjectFeesAdded(investor=identity, amount=amount, fee_owed=record.fee_owed))
        return record

    def clear(self, record: InvestorRecord, log: NotificationLog) -> int:
        """Mark a record reimbursed after its transfer succeeded.

        Args:
            record: Active record that was just paid
            log: Notification log receiving ProjectFeesReimbursed

        Returns:
            The amount that was owed (and paid)
        """
        amount = record.fee_owed
        self.fee_pool_total -= amount
        record.reimbursed_total += amount
        record.fee_owed = 0
        record.status = "cleared"
        log.emit(ProjectFeesReimbursed(investor=record.identity, amount=amount))
        return amount
