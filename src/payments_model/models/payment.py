"""Payment resource models returned by the banking API.

Each variant is tagged by its ``type`` field. ``Payment`` is the closed
union of all five; pydantic dispatches on the tag, never on field shape.
"""

from typing import Annotated, Literal, Union

from pydantic import Field, StrictBool, StrictStr, ValidationInfo, field_validator

from .common import (
    AchDescription,
    Addenda,
    Amount,
    CalendarDate,
    Counterparty,
    OptionalRelationship,
    PaymentModelBase,
    Relationship,
    RelationshipList,
    RoutingNumber,
    Tags,
    Timestamp,
    WireCounterparty,
    WireDescription,
)
from .enums import Direction, PaymentStatus, PaymentType, ReceivedPaymentStatus


# === Attributes ===


class AchPaymentAttributes(PaymentModelBase):
    """Attributes of an originated ACH payment."""

    created_at: Timestamp = Field(..., description="Creation timestamp (RFC3339)")
    status: PaymentStatus
    reason: StrictStr | None = Field(
        default=None, description="More information about the status"
    )
    direction: Direction
    description: AchDescription
    amount: Amount = Field(..., description="Amount in cents")
    tags: Tags | None = None
    counterparty: Counterparty
    addenda: Addenda | None = Field(
        default=None,
        description="Additional payment description, not shown by all institutions",
    )
    settlement_date: CalendarDate | None = Field(
        default=None,
        description="For Clearing payments, the date the payment will settle",
    )


class BookPaymentAttributes(PaymentModelBase):
    """Attributes of a book payment between two accounts on the platform."""

    created_at: Timestamp
    status: PaymentStatus
    reason: StrictStr | None = None
    direction: Direction
    description: WireDescription
    amount: Amount
    tags: Tags | None = None


class WirePaymentAttributes(PaymentModelBase):
    """Attributes of an originated wire payment."""

    created_at: Timestamp
    status: PaymentStatus
    reason: StrictStr | None = None
    direction: Direction
    description: WireDescription
    amount: Amount
    tags: Tags | None = None
    counterparty: WireCounterparty


class BillPaymentAttributes(PaymentModelBase):
    """Attributes of a bill payment. No status reason or counterparty is exposed."""

    created_at: Timestamp
    status: PaymentStatus
    direction: Direction
    description: WireDescription
    amount: Amount
    tags: Tags | None = None


class AchReceivedPaymentAttributes(PaymentModelBase):
    """Attributes of an ACH payment originated by another institution."""

    created_at: Timestamp
    status: ReceivedPaymentStatus
    was_advanced: StrictBool = Field(
        ...,
        description="True if the payment has or has had the status Advanced",
    )
    completion_date: CalendarDate = Field(
        ..., description="Date the received ACH will be settled or repaid"
    )
    return_reason: StrictStr | None = None
    addenda: Addenda | None = None
    company_name: StrictStr = Field(
        ..., min_length=1, description="Name of the originator as known to the receiver"
    )
    counterparty_routing_number: RoutingNumber
    trace_number: StrictStr = Field(..., min_length=1)
    sec_code: Annotated[StrictStr, Field(pattern=r"^[A-Z]{3}$")] | None = Field(
        default=None,
        description="ACH Standard Entry Class code",
        examples=["WEB", "CCD", "PPD"],
    )
    amount: Amount
    description: AchDescription
    tags: Tags | None = None

    @field_validator("was_advanced")
    @classmethod
    def validate_was_advanced(cls, v: bool, info: ValidationInfo) -> bool:
        """Advanced payments must report wasAdvanced, which never resets."""
        if info.data.get("status") == ReceivedPaymentStatus.ADVANCED and not v:
            raise ValueError("wasAdvanced must be true while status is Advanced")
        return v


# === Relationships ===


class PaymentRelationships(PaymentModelBase):
    """Relationships common to originated payments.

    ``customer`` is set when the account belongs to a single customer and
    ``customers`` when it has joint owners; a resource never carries both.
    """

    account: Relationship
    customer: OptionalRelationship = None
    customers: RelationshipList | None = None
    transaction: OptionalRelationship = Field(
        default=None, description="The transaction generated by this payment"
    )


class AchPaymentRelationships(PaymentRelationships):
    counterparty: Relationship


class BookPaymentRelationships(PaymentRelationships):
    counterparty_account: Relationship
    counterparty_customer: Relationship


class AchReceivedPaymentRelationships(PaymentModelBase):
    """Relationships of a received ACH payment and its ledger entries."""

    account: Relationship
    customer: OptionalRelationship = None
    receive_payment_transaction: OptionalRelationship = Field(
        default=None,
        description="Transaction created by the advance or when the ACH is processed",
    )
    payment_advance_transaction: OptionalRelationship = Field(
        default=None,
        description="Transaction that funded the advance",
    )
    repay_payment_advance_transaction: OptionalRelationship = Field(
        default=None,
        description="Transaction that repaid the advance once completed",
    )


# === Resources ===


class AchPayment(PaymentModelBase):
    """An originated ACH payment."""

    id: StrictStr = Field(..., min_length=1)
    type: Literal["achPayment"]
    attributes: AchPaymentAttributes
    relationships: AchPaymentRelationships


class BookPayment(PaymentModelBase):
    """A book payment between two deposit accounts."""

    id: StrictStr = Field(..., min_length=1)
    type: Literal["bookPayment"]
    attributes: BookPaymentAttributes
    relationships: BookPaymentRelationships


class WirePayment(PaymentModelBase):
    """An originated wire payment."""

    id: StrictStr = Field(..., min_length=1)
    type: Literal["wirePayment"]
    attributes: WirePaymentAttributes
    relationships: PaymentRelationships


class BillPayment(PaymentModelBase):
    """A bill payment."""

    id: StrictStr = Field(..., min_length=1)
    type: Literal["billPayment"]
    attributes: BillPaymentAttributes
    relationships: PaymentRelationships


class AchReceivedPayment(PaymentModelBase):
    """An ACH payment received from another institution."""

    id: StrictStr = Field(..., min_length=1)
    type: Literal["achReceivedPayment"]
    attributes: AchReceivedPaymentAttributes
    relationships: AchReceivedPaymentRelationships


OriginatedPayment = Annotated[
    Union[AchPayment, BookPayment, WirePayment, BillPayment],
    Field(discriminator="type"),
]

Payment = Annotated[
    Union[AchPayment, BookPayment, WirePayment, BillPayment, AchReceivedPayment],
    Field(discriminator="type"),
]

PaymentVariant = Union[AchPayment, BookPayment, WirePayment, BillPayment, AchReceivedPayment]

PAYMENT_MODELS: dict[PaymentType, type[PaymentVariant]] = {
    PaymentType.ACH_PAYMENT: AchPayment,
    PaymentType.BOOK_PAYMENT: BookPayment,
    PaymentType.WIRE_PAYMENT: WirePayment,
    PaymentType.BILL_PAYMENT: BillPayment,
    PaymentType.ACH_RECEIVED_PAYMENT: AchReceivedPayment,
}
