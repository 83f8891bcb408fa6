"""Enumeration types and status lifecycles for payment data models."""

from enum import Enum


class PaymentType(str, Enum):
    """Discriminator values for payment resources."""

    ACH_PAYMENT = "achPayment"
    BOOK_PAYMENT = "bookPayment"
    WIRE_PAYMENT = "wirePayment"
    BILL_PAYMENT = "billPayment"
    ACH_RECEIVED_PAYMENT = "achReceivedPayment"


# Wire and Bill payments are immutable once created
PATCHABLE_PAYMENT_TYPES: frozenset[PaymentType] = frozenset(
    {
        PaymentType.ACH_PAYMENT,
        PaymentType.BOOK_PAYMENT,
        PaymentType.ACH_RECEIVED_PAYMENT,
    }
)

# Discriminators accepted on create requests
CREATABLE_PAYMENT_TYPES: frozenset[PaymentType] = frozenset(
    {
        PaymentType.ACH_PAYMENT,
        PaymentType.BOOK_PAYMENT,
        PaymentType.WIRE_PAYMENT,
    }
)


class PaymentStatus(str, Enum):
    """Status of an originated (outbound) payment."""

    PENDING = "Pending"
    PENDING_REVIEW = "PendingReview"
    REJECTED = "Rejected"
    CLEARING = "Clearing"
    SENT = "Sent"
    CANCELED = "Canceled"
    RETURNED = "Returned"


class ReceivedPaymentStatus(str, Enum):
    """Status of a received ACH payment."""

    PENDING = "Pending"
    ADVANCED = "Advanced"
    COMPLETED = "Completed"
    RETURNED = "Returned"


class Direction(str, Enum):
    """The direction in which the funds flow."""

    CREDIT = "Credit"
    DEBIT = "Debit"


class AccountType(str, Enum):
    """Counterparty bank account type."""

    CHECKING = "Checking"
    SAVINGS = "Savings"
    LOAN = "Loan"


# Snapshots returned by the banking core move along these edges only.
# The model never performs a transition; callers can use the table to
# sanity-check two successive snapshots of the same payment.
PAYMENT_STATUS_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset(
        {
            PaymentStatus.PENDING_REVIEW,
            PaymentStatus.CLEARING,
            PaymentStatus.SENT,
            PaymentStatus.REJECTED,
            PaymentStatus.CANCELED,
        }
    ),
    PaymentStatus.PENDING_REVIEW: frozenset(
        {
            PaymentStatus.PENDING,
            PaymentStatus.CLEARING,
            PaymentStatus.SENT,
            PaymentStatus.REJECTED,
            PaymentStatus.CANCELED,
        }
    ),
    PaymentStatus.CLEARING: frozenset(
        {
            PaymentStatus.SENT,
            PaymentStatus.REJECTED,
            PaymentStatus.CANCELED,
        }
    ),
    PaymentStatus.SENT: frozenset({PaymentStatus.RETURNED}),
    PaymentStatus.REJECTED: frozenset(),
    PaymentStatus.CANCELED: frozenset(),
    PaymentStatus.RETURNED: frozenset(),
}

RECEIVED_PAYMENT_STATUS_TRANSITIONS: dict[
    ReceivedPaymentStatus, frozenset[ReceivedPaymentStatus]
] = {
    ReceivedPaymentStatus.PENDING: frozenset(
        {
            ReceivedPaymentStatus.ADVANCED,
            ReceivedPaymentStatus.COMPLETED,
            ReceivedPaymentStatus.RETURNED,
        }
    ),
    ReceivedPaymentStatus.ADVANCED: frozenset(
        {
            ReceivedPaymentStatus.COMPLETED,
            ReceivedPaymentStatus.RETURNED,
        }
    ),
    ReceivedPaymentStatus.COMPLETED: frozenset(),
    ReceivedPaymentStatus.RETURNED: frozenset(),
}


def can_transition(
    current: PaymentStatus | ReceivedPaymentStatus,
    target: PaymentStatus | ReceivedPaymentStatus,
) -> bool:
    """Check whether a later snapshot may legitimately report ``target``.

    Args:
        current: Status of the earlier snapshot
        target: Status of the later snapshot

    Returns:
        True if ``target`` equals ``current`` or is reachable in one step.
    """
    if current == target:
        return True
    if isinstance(current, PaymentStatus) and isinstance(target, PaymentStatus):
        return target in PAYMENT_STATUS_TRANSITIONS[current]
    if isinstance(current, ReceivedPaymentStatus) and isinstance(
        target, ReceivedPaymentStatus
    ):
        return target in RECEIVED_PAYMENT_STATUS_TRANSITIONS[current]
    return False


def is_terminal(status: PaymentStatus | ReceivedPaymentStatus) -> bool:
    """Check whether no further transition is expected from a status.

    ``Sent`` is not terminal because the payment may still be returned.
    """
    if isinstance(status, PaymentStatus):
        return not PAYMENT_STATUS_TRANSITIONS[status]
    return not RECEIVED_PAYMENT_STATUS_TRANSITIONS[status]
