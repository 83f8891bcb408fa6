"""Unit tests for building create-payment requests.

Test categories:
- Wire and book requests
- ACH counterparty specification (inline, linked, verified)
- Description and amount constraints
- Required relationships
- Discriminator handling
- JSON:API request bodies
"""

from typing import Any

import pytest

from payments_model.models.enums import Direction
from payments_model.models.errors import ErrorCode, RequestValidationError
from payments_model.models.requests import (
    CreateBookPaymentRequest,
    CreateInlinePaymentRequest,
    CreateLinkedPaymentRequest,
    CreateVerifiedPaymentRequest,
    CreateWirePaymentRequest,
)
from payments_model.services.request_builder import build_request

COUNTERPARTY_REF = {"type": "counterparty", "id": "4567"}


@pytest.fixture
def wire_attributes(wire_counterparty: dict[str, Any]) -> dict[str, Any]:
    return {"amount": 1000, "description": "rent", "counterparty": wire_counterparty}


@pytest.fixture
def book_relationships() -> dict[str, Any]:
    return {
        "account": {"type": "depositAccount", "id": "10001"},
        "counterpartyAccount": {"type": "depositAccount", "id": "10002"},
    }


@pytest.fixture
def ach_attributes() -> dict[str, Any]:
    return {"amount": 10000, "direction": "Credit", "description": "Payment"}


class TestWireRequest:
    """Wire requests carry the counterparty inline."""

    def test_builds_wire_request(
        self, wire_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        request = build_request("wirePayment", wire_attributes, account_relationships)

        assert isinstance(request, CreateWirePaymentRequest)
        assert request.type == "wirePayment"
        assert request.attributes.amount == 1000
        assert request.relationships.account.id == "10001"

    def test_zero_amount_is_field_addressed(
        self, wire_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        wire_attributes["amount"] = 0

        with pytest.raises(RequestValidationError) as exc_info:
            build_request("wirePayment", wire_attributes, account_relationships)

        assert exc_info.value.code == ErrorCode.INVALID_REQUEST
        assert exc_info.value.paths == ["attributes.amount"]
        assert exc_info.value.errors[0].constraint == "greater_than"

    def test_no_stored_counterparty(
        self, wire_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        """Wire requests only reference the originating account."""
        account_relationships["counterparty"] = COUNTERPARTY_REF

        with pytest.raises(RequestValidationError) as exc_info:
            build_request("wirePayment", wire_attributes, account_relationships)

        assert exc_info.value.paths == ["relationships.counterparty"]

    def test_wire_counterparty_needs_address(
        self, wire_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        del wire_attributes["counterparty"]["address"]

        with pytest.raises(RequestValidationError) as exc_info:
            build_request("wirePayment", wire_attributes, account_relationships)

        assert exc_info.value.paths == ["attributes.counterparty.address"]

    def test_idempotency_key_forwarded_verbatim(
        self, wire_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        wire_attributes["idempotencyKey"] = "  3a1f-key  "

        request = build_request("wirePayment", wire_attributes, account_relationships)

        assert request.attributes.idempotency_key == "  3a1f-key  "


class TestBookRequest:
    """Book requests reference a stored counterparty account."""

    def test_builds_book_request(self, book_relationships: dict[str, Any]) -> None:
        request = build_request(
            "bookPayment",
            {"amount": 1500, "description": "Rent for March"},
            book_relationships,
        )

        assert isinstance(request, CreateBookPaymentRequest)
        assert request.attributes.direction is None
        assert request.relationships.counterparty_account.id == "10002"

    def test_explicit_direction(self, book_relationships: dict[str, Any]) -> None:
        request = build_request(
            "bookPayment",
            {"amount": 1500, "description": "Rent", "direction": "Debit"},
            book_relationships,
        )

        assert request.attributes.direction == Direction.DEBIT

    def test_requires_counterparty_account(self, account_relationships: dict[str, Any]) -> None:
        with pytest.raises(RequestValidationError) as exc_info:
            build_request(
                "bookPayment", {"amount": 1500, "description": "Rent"}, account_relationships
            )

        assert exc_info.value.paths == ["relationships.counterpartyAccount"]
        assert exc_info.value.errors[0].constraint == "missing"

    def test_missing_relationships(self) -> None:
        with pytest.raises(RequestValidationError) as exc_info:
            build_request("bookPayment", {"amount": 1500, "description": "Rent"})

        assert set(exc_info.value.paths) == {
            "relationships.account",
            "relationships.counterpartyAccount",
        }

    def test_python_names_accepted(self, book_relationships: dict[str, Any]) -> None:
        book_relationships["counterparty_account"] = book_relationships.pop(
            "counterpartyAccount"
        )

        request = build_request(
            "bookPayment",
            {"amount": 1500, "description": "Rent", "idempotency_key": "k1"},
            book_relationships,
        )

        assert request.attributes.idempotency_key == "k1"


class TestAchCounterpartySpecification:
    """Exactly one of inline counterparty, stored counterparty or Plaid token."""

    def test_inline(
        self,
        ach_attributes: dict[str, Any],
        ach_counterparty: dict[str, Any],
        account_relationships: dict[str, Any],
    ) -> None:
        ach_attributes["counterparty"] = ach_counterparty

        request = build_request("achPayment", ach_attributes, account_relationships)

        assert isinstance(request, CreateInlinePaymentRequest)
        assert request.attributes.counterparty.name == "Jane Doe"

    def test_linked(
        self, ach_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        account_relationships["counterparty"] = COUNTERPARTY_REF

        request = build_request("achPayment", ach_attributes, account_relationships)

        assert isinstance(request, CreateLinkedPaymentRequest)
        assert request.relationships.counterparty.id == "4567"

    def test_verified(
        self, ach_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        ach_attributes["plaidProcessorToken"] = "processor-5a62q307-ww0a-6737-f6db-pole26004556"
        ach_attributes["counterpartyName"] = "Sherlock Holmes"

        request = build_request("achPayment", ach_attributes, account_relationships)

        assert isinstance(request, CreateVerifiedPaymentRequest)
        assert request.attributes.counterparty_name == "Sherlock Holmes"

    def test_verified_by_python_name(
        self, ach_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        ach_attributes["plaid_processor_token"] = "processor-token"

        request = build_request("achPayment", ach_attributes, account_relationships)

        assert isinstance(request, CreateVerifiedPaymentRequest)

    def test_none_given(
        self, ach_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        with pytest.raises(RequestValidationError) as exc_info:
            build_request("achPayment", ach_attributes, account_relationships)

        assert exc_info.value.code == ErrorCode.COUNTERPARTY_SPECIFICATION
        assert set(exc_info.value.paths) == {
            "attributes.counterparty",
            "relationships.counterparty",
            "attributes.plaidProcessorToken",
        }
        assert {e.constraint for e in exc_info.value.errors} == {"exactly_one_required"}

    @pytest.mark.parametrize(
        ("inline", "linked", "token"),
        [
            (True, True, False),
            (True, False, True),
            (False, True, True),
            (True, True, True),
        ],
    )
    def test_more_than_one_given(
        self,
        ach_attributes: dict[str, Any],
        ach_counterparty: dict[str, Any],
        account_relationships: dict[str, Any],
        inline: bool,
        linked: bool,
        token: bool,
    ) -> None:
        expected = set()
        if inline:
            ach_attributes["counterparty"] = ach_counterparty
            expected.add("attributes.counterparty")
        if linked:
            account_relationships["counterparty"] = COUNTERPARTY_REF
            expected.add("relationships.counterparty")
        if token:
            ach_attributes["plaidProcessorToken"] = "processor-token"
            expected.add("attributes.plaidProcessorToken")

        with pytest.raises(RequestValidationError) as exc_info:
            build_request("achPayment", ach_attributes, account_relationships)

        assert exc_info.value.code == ErrorCode.COUNTERPARTY_SPECIFICATION
        assert set(exc_info.value.paths) == expected
        assert {e.constraint for e in exc_info.value.errors} == {"mutually_exclusive"}

    def test_verify_counterparty_balance(
        self, ach_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        account_relationships["counterparty"] = COUNTERPARTY_REF
        ach_attributes["verifyCounterpartyBalance"] = True

        request = build_request("achPayment", ach_attributes, account_relationships)

        assert request.attributes.verify_counterparty_balance is True

    def test_verified_request_has_no_tags(
        self, ach_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        ach_attributes["plaidProcessorToken"] = "processor-token"
        ach_attributes["tags"] = {"purpose": "test"}

        with pytest.raises(RequestValidationError) as exc_info:
            build_request("achPayment", ach_attributes, account_relationships)

        assert exc_info.value.paths == ["attributes.tags"]

    def test_ach_direction_required(
        self,
        ach_attributes: dict[str, Any],
        ach_counterparty: dict[str, Any],
        account_relationships: dict[str, Any],
    ) -> None:
        del ach_attributes["direction"]
        ach_attributes["counterparty"] = ach_counterparty

        with pytest.raises(RequestValidationError) as exc_info:
            build_request("achPayment", ach_attributes, account_relationships)

        assert exc_info.value.paths == ["attributes.direction"]


class TestRequestConstraints:
    """Description and amount boundaries."""

    @pytest.mark.parametrize(("length", "ok"), [(50, True), (51, False)])
    def test_wire_description(
        self,
        wire_attributes: dict[str, Any],
        account_relationships: dict[str, Any],
        length: int,
        ok: bool,
    ) -> None:
        wire_attributes["description"] = "d" * length

        if ok:
            build_request("wirePayment", wire_attributes, account_relationships)
        else:
            with pytest.raises(RequestValidationError) as exc_info:
                build_request("wirePayment", wire_attributes, account_relationships)
            assert exc_info.value.paths == ["attributes.description"]

    @pytest.mark.parametrize(("length", "ok"), [(50, True), (51, False)])
    def test_book_description(
        self, book_relationships: dict[str, Any], length: int, ok: bool
    ) -> None:
        attributes = {"amount": 100, "description": "d" * length}

        if ok:
            build_request("bookPayment", attributes, book_relationships)
        else:
            with pytest.raises(RequestValidationError) as exc_info:
                build_request("bookPayment", attributes, book_relationships)
            assert exc_info.value.paths == ["attributes.description"]

    @pytest.mark.parametrize(("length", "ok"), [(10, True), (11, False)])
    def test_inline_ach_description(
        self,
        ach_attributes: dict[str, Any],
        ach_counterparty: dict[str, Any],
        account_relationships: dict[str, Any],
        length: int,
        ok: bool,
    ) -> None:
        ach_attributes["counterparty"] = ach_counterparty
        ach_attributes["description"] = "d" * length

        if ok:
            build_request("achPayment", ach_attributes, account_relationships)
        else:
            with pytest.raises(RequestValidationError) as exc_info:
                build_request("achPayment", ach_attributes, account_relationships)
            assert exc_info.value.paths == ["attributes.description"]

    @pytest.mark.parametrize("amount", [0, -500])
    def test_non_positive_amount(
        self, book_relationships: dict[str, Any], amount: int
    ) -> None:
        with pytest.raises(RequestValidationError) as exc_info:
            build_request(
                "bookPayment", {"amount": amount, "description": "x"}, book_relationships
            )

        assert exc_info.value.paths == ["attributes.amount"]

    def test_amount_of_one(self, book_relationships: dict[str, Any]) -> None:
        request = build_request(
            "bookPayment", {"amount": 1, "description": "x"}, book_relationships
        )

        assert request.attributes.amount == 1

    def test_addenda_limit(
        self, ach_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        account_relationships["counterparty"] = COUNTERPARTY_REF
        ach_attributes["addenda"] = "a" * 51

        with pytest.raises(RequestValidationError) as exc_info:
            build_request("achPayment", ach_attributes, account_relationships)

        assert exc_info.value.paths == ["attributes.addenda"]

    def test_routing_number_must_be_nine_digits(
        self,
        ach_attributes: dict[str, Any],
        ach_counterparty: dict[str, Any],
        account_relationships: dict[str, Any],
    ) -> None:
        ach_counterparty["routingNumber"] = "12345"
        ach_attributes["counterparty"] = ach_counterparty

        with pytest.raises(RequestValidationError) as exc_info:
            build_request("achPayment", ach_attributes, account_relationships)

        assert exc_info.value.paths == ["attributes.counterparty.routingNumber"]


class TestRequestDiscriminator:
    """Unknown, missing and non-creatable discriminators are rejected."""

    @pytest.mark.parametrize("variant", [None, "", "cardPayment", "billPayment", "achReceivedPayment"])
    def test_rejected_variants(
        self, variant: Any, account_relationships: dict[str, Any]
    ) -> None:
        with pytest.raises(RequestValidationError) as exc_info:
            build_request(variant, {"amount": 1, "description": "x"}, account_relationships)

        assert exc_info.value.code == ErrorCode.UNKNOWN_REQUEST_TYPE
        assert exc_info.value.paths == ["type"]

    def test_attributes_must_be_a_mapping(self, account_relationships: dict[str, Any]) -> None:
        with pytest.raises(RequestValidationError) as exc_info:
            build_request("wirePayment", [("amount", 1)], account_relationships)  # type: ignore[arg-type]

        assert exc_info.value.paths == ["attributes"]
        assert exc_info.value.errors[0].constraint == "object_type"


class TestJsonBody:
    """Requests serialize to JSON:API bodies."""

    def test_wire_body(
        self, wire_attributes: dict[str, Any], account_relationships: dict[str, Any]
    ) -> None:
        request = build_request("wirePayment", wire_attributes, account_relationships)

        body = request.to_json_body()

        assert body["data"]["type"] == "wirePayment"
        assert body["data"]["attributes"]["amount"] == 1000
        assert body["data"]["attributes"]["counterparty"]["address"]["postalCode"] == "11375"
        assert body["data"]["relationships"] == {
            "account": {"data": {"type": "depositAccount", "id": "10001"}}
        }

    def test_absent_optionals_omitted(self, book_relationships: dict[str, Any]) -> None:
        request = build_request(
            "bookPayment", {"amount": 1, "description": "x"}, book_relationships
        )

        attributes = request.to_json_body()["data"]["attributes"]

        assert attributes == {"amount": 1, "description": "x"}

    def test_envelope_relationships_accepted(
        self, ach_attributes: dict[str, Any]
    ) -> None:
        relationships = {
            "account": {"data": {"type": "depositAccount", "id": "10001"}},
            "counterparty": {"data": COUNTERPARTY_REF},
        }

        body = build_request("achPayment", ach_attributes, relationships).to_json_body()

        assert body["data"]["relationships"]["counterparty"] == {"data": COUNTERPARTY_REF}
