"""Shared building blocks for payment resources and requests.

Wire names are camelCase; Python attributes are snake_case. Models accept
either on input and always emit camelCase.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .enums import AccountType


class PaymentModelBase(BaseModel):
    """Base configuration for every payment data model.

    Unknown keys are rejected so that a variant never carries fields that
    belong to another variant. Instances are immutable.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    def to_json(self) -> dict[str, Any]:
        """Dump to the camelCase wire form, omitting absent optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _ensure_flat(value: dict[str, Any]) -> dict[str, Any]:
    for key, item in value.items():
        if isinstance(item, (Mapping, list, tuple, set)):
            raise ValueError(
                f"tags must be a flat key-value mapping (nested value under '{key}')"
            )
    return value


# Opaque key-value pairs, copied by the banking core onto generated transactions
Tags = Annotated[dict[StrictStr, Any], AfterValidator(_ensure_flat)]

# Minor currency units (cents)
Amount = Annotated[StrictInt, Field(gt=0)]

# Company Entry Description, shown on the counterparty's statement
AchDescription = Annotated[StrictStr, Field(max_length=10)]

WireDescription = Annotated[StrictStr, Field(max_length=50)]

Addenda = Annotated[StrictStr, Field(max_length=50)]

RoutingNumber = Annotated[StrictStr, Field(pattern=r"^\d{9}$")]


def _require_string(value: Any) -> Any:
    if not isinstance(value, (str, date)):
        raise ValueError(
            f"expected an RFC3339 string, got {type(value).__name__}"
        )
    return value


# RFC3339 strings only; numbers are not read as Unix timestamps
Timestamp = Annotated[datetime, BeforeValidator(_require_string)]

CalendarDate = Annotated[date, BeforeValidator(_require_string)]


class Relationship(PaymentModelBase):
    """A typed reference to a resource owned elsewhere.

    Accepts both the flat ``{"type", "id"}`` form and the JSON:API
    envelope ``{"data": {"type", "id"}}``.
    """

    type: StrictStr = Field(..., min_length=1, examples=["depositAccount"])
    id: StrictStr = Field(..., min_length=1, examples=["10001"])

    @model_validator(mode="before")
    @classmethod
    def unwrap_data_envelope(cls, value: Any) -> Any:
        """Strip the JSON:API ``data`` wrapper if present."""
        if isinstance(value, Mapping) and set(value) == {"data"}:
            return value["data"]
        return value

    def to_json_api(self) -> dict[str, Any]:
        """Render as a JSON:API relationship object."""
        return {"data": {"type": self.type, "id": self.id}}


def _unwrap_list_envelope(value: Any) -> Any:
    if isinstance(value, Mapping) and set(value) == {"data"}:
        return value["data"]
    return value


# Joint owners of an account; never empty when present
RelationshipList = Annotated[
    list[Relationship],
    BeforeValidator(_unwrap_list_envelope),
    Field(min_length=1),
]


def _empty_to_none(value: Any) -> Any:
    if isinstance(value, Mapping) and set(value) == {"data"} and value["data"] is None:
        return None
    return value


# An empty to-one relationship ``{"data": null}`` reads as absent
OptionalRelationship = Annotated[Relationship | None, BeforeValidator(_empty_to_none)]


class Address(PaymentModelBase):
    """Postal address of a wire counterparty."""

    street: StrictStr = Field(..., min_length=1)
    street2: StrictStr | None = None
    city: StrictStr = Field(..., min_length=1)
    state: StrictStr | None = None
    postal_code: StrictStr = Field(..., min_length=1)
    country: StrictStr = Field(
        ...,
        pattern=r"^[A-Z]{2}$",
        description="ISO 3166-1 alpha-2 country code",
        examples=["US"],
    )


class Counterparty(PaymentModelBase):
    """The external bank account on the other side of an ACH payment."""

    routing_number: RoutingNumber = Field(..., examples=["812345678"])
    account_number: StrictStr = Field(..., min_length=1, max_length=17)
    account_type: AccountType
    name: StrictStr = Field(..., min_length=1)


class WireCounterparty(Counterparty):
    """The party on the other side of a wire payment.

    Carries the ACH counterparty fields plus the beneficiary address. Wire
    instructions do not require an account type.
    """

    account_type: AccountType | None = None
    address: Address
