"""Notifications emitted by the payout engines.

Notifications are immutable, append-only records of what happened to the
splitter. They are purely observational: the engines write them but never
read them back to make decisions.

Every notification carries a sequence number assigned by the log on emit,
so the order of events survives serialization.

Example timeline:
    1. PayeeAdded: alice registered with 1 share
    2. PayeeAdded: bob registered with 3 shares
    3. PaymentReceived: 100 units from sponsor
    4. PaymentReleased: 25 units to alice
"""

from typing import Annotated, List, Literal, Union
from pydantic import ConfigDict, Field

from .base import DomainModel, Identity, Amount, ShareWeight


# =============================================================================
# Notification Base Class
# =============================================================================

class Notification(DomainModel):
    """Base class for all notifications.

    Instances are frozen once created. The sequence number is assigned by
    NotificationLog.emit().
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    sequence: int = Field(
        default=0,
        ge=0,
        description="Position of this notification in the log (assigned on emit)"
    )


# =============================================================================
# Registry Notifications
# =============================================================================

class PayeeAdded(Notification):
    """A payee was registered during initialization."""

    event_type: Literal["payee_added"] = "payee_added"

    identity: Identity
    shares: ShareWeight


# =============================================================================
# Balance Notifications
# =============================================================================

class PaymentReceived(Notification):
    """Value was deposited into the pool by an external party."""

    event_type: Literal["payment_received"] = "payment_received"

    sender: Identity = Field(alias="from", description="Depositor identity")
    amount: Amount

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class PaymentReleased(Notification):
    """A payee pulled their accrued share out of the pool."""

    event_type: Literal["payment_released"] = "payment_released"

    to: Identity
    amount: Amount


# =============================================================================
# Investor Notifications
# =============================================================================

class ProjectFeesAdded(Notification):
    """An investor's owed fee was registered (or increased)."""

    event_type: Literal["project_fees_added"] = "project_fees_added"

    investor: Identity
    amount: Amount = Field(description="Amount registered by this call")
    fee_owed: Amount = Field(description="Investor's owed fee after this call")


class ProjectFeesReimbursed(Notification):
    """An investor was reimbursed from the pool."""

    event_type: Literal["project_fees_reimbursed"] = "project_fees_reimbursed"

    investor: Identity
    amount: Amount


# =============================================================================
# Authorization Notifications
# =============================================================================

class OwnershipTransferred(Notification):
    """The privileged-caller capability moved to a new owner."""

    event_type: Literal["ownership_transferred"] = "ownership_transferred"

    previous_owner: Identity
    new_owner: Identity


AnyNotification = Annotated[
    Union[
        PayeeAdded,
        PaymentReceived,
        PaymentReleased,
        ProjectFeesAdded,
        ProjectFeesReimbursed,
        OwnershipTransferred,
    ],
    Field(discriminator="event_type")
]
"""Discriminated union of all notification types, keyed on event_type."""


# =============================================================================
# Notification Log
# =============================================================================

class NotificationLog(DomainModel):
    """Append-only log of notifications.

    Example:
        log = NotificationLog()
        log.emit(PaymentReceived(sender="sponsor", amount=100))
        log.of_type(PaymentReceived)  # -> [PaymentReceived(sequence=1, ...)]
    """

    entries: List[AnyNotification] = Field(
        default_factory=list,
        description="Notifications in emission order"
    )

    def emit(self, notification: Notification) -> Notification:
        """Append a notification, stamping it with the next sequence number.

        Args:
            notification: Notification to record

        Returns:
            The stored (sequenced) notification
        """
        stamped = notification.model_copy(update={"sequence": len(self.entries) + 1})
        self.entries.append(stamped)
        return stamped

    def truncate(self, length: int) -> None:
        """Drop every notification after the first `length` (rollback only)."""
        del self.entries[length:]

    def of_type(self, notification_type: type) -> List[Notification]:
        """Get all notifications of a given class, in emission order."""
        return [n for n in self.entries if isinstance(n, notification_type)]

    def __len__(self) -> int:
        return len(self.entries)
